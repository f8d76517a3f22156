import io
import random
import pytest

from pokerus.battle.experience import Experience, Level
from pokerus.battle.matchup import Affinity, profile_of
from pokerus.battle.mechanics import damage_on_attack, resolve_attack, STAB_BONUS
from pokerus.battle.models import (
    AttackMove, Combatant, DidNotAffect, EffectMove, Health, Hit, Missed, MoveInner, Power, Stats,
)
from pokerus.battle.num import BoundedPercentage, Percentage
from pokerus.core.errors import ValidationError
from pokerus.core.logging import Logger


def make_mon(name, *types, hp=100, level=5):
    lvl = Level(level)
    return Combatant(name=name, profile=profile_of(*types),
                     stats=Stats(hp=Health(hp), exp=Experience.at_level(lvl), lvl=lvl))

def make_attack(affinity, power=40, accuracy=None, name="Test Move"):
    return AttackMove(MoveInner(name, Affinity(affinity)), Power(power), accuracy)

class FixedRng:
    def __init__(self, value):
        self.value = value
        self.calls = 0
    def random(self):
        self.calls += 1
        return self.value


def test_neutral_without_stab_deals_power():
    attacker = make_mon("Bidoof", "normal")
    defender = make_mon("Shinx", "lightning")
    out = damage_on_attack(attacker, make_attack("fighting"), defender)
    assert out == Hit(Health(40))


def test_super_effective_with_stab():
    attacker = make_mon("Piplup", "water")
    defender = make_mon("Chimchar", "fire")
    out = damage_on_attack(attacker, make_attack("water"), defender)
    assert out == Hit(Health(160))


def test_damage_is_floored():
    attacker = make_mon("Chimchar", "fire")
    defender = make_mon("Piplup", "water")
    out = damage_on_attack(attacker, make_attack("normal", power=45), defender)
    assert out == Hit(Health(22))


def test_effectiveness_comes_from_attacker_profile_not_move():
    # fire attacker vs grass defender is 2.0 even with a normal move
    attacker = make_mon("Chimchar", "fire")
    defender = make_mon("Turtwig", "grass")
    assert damage_on_attack(attacker, make_attack("normal"), defender) == Hit(Health(80))


def test_stab_on_secondary_affinity_with_summed_effectiveness():
    attacker = make_mon("Mixed", "normal", "fire")
    defender = make_mon("Bidoof", "normal")
    # (1.0 + 1.0) * 2.0 STAB * 40
    assert damage_on_attack(attacker, make_attack("fire"), defender) == Hit(Health(160))


def test_mixed_attacker_with_immune_facet_did_not_affect():
    attacker = make_mon("Monferno", "fire", "fighting")
    defender = make_mon("Gastly", "ghost", hp=30)
    rng = FixedRng(0.0)
    out = damage_on_attack(attacker, make_attack("fire", accuracy=BoundedPercentage.from_full_scale(255)), defender, rng=rng)
    assert out == DidNotAffect()
    assert rng.calls == 1
    resolve_attack(attacker, make_attack("fire"), defender)
    assert defender.stats.hp == Health(30)


@pytest.mark.parametrize("power", [0, 1, 40, 255])
def test_normal_against_ghost_did_not_affect(power):
    attacker = make_mon("Bidoof", "normal")
    defender = make_mon("Gastly", "ghost")
    assert damage_on_attack(attacker, make_attack("normal", power=power), defender) == DidNotAffect()


@pytest.mark.parametrize("accuracy", [0.0, 0])
@pytest.mark.parametrize("draw", [0.0, 0.25, 0.5, 0.999999])
def test_zero_accuracy_always_misses(accuracy, draw):
    bound = BoundedPercentage.from_full_scale(accuracy)
    attacker = make_mon("Bidoof", "normal")
    defender = make_mon("Shinx", "lightning")
    rng = FixedRng(draw)
    assert damage_on_attack(attacker, make_attack("normal", accuracy=bound), defender, rng=rng) == Missed()
    assert rng.calls == 1


def test_full_byte_accuracy_always_hits():
    bound = BoundedPercentage.from_full_scale(255)
    attacker = make_mon("Bidoof", "normal")
    defender = make_mon("Shinx", "lightning")
    out = damage_on_attack(attacker, make_attack("fire", accuracy=bound), defender, rng=FixedRng(0.999999))
    assert isinstance(out, Hit)


def test_miss_is_decided_before_effectiveness():
    bound = BoundedPercentage.from_full_scale(0.0)
    attacker = make_mon("Bidoof", "normal")
    defender = make_mon("Gastly", "ghost")
    assert damage_on_attack(attacker, make_attack("normal", accuracy=bound), defender, rng=FixedRng(0.5)) == Missed()


def test_draw_at_threshold_misses():
    bound = BoundedPercentage.from_full_scale(0.5)
    attacker = make_mon("Bidoof", "normal")
    defender = make_mon("Shinx", "lightning")
    move = make_attack("normal", accuracy=bound)
    assert damage_on_attack(attacker, move, defender, rng=FixedRng(0.5)) == Missed()
    assert isinstance(damage_on_attack(attacker, move, defender, rng=FixedRng(0.49)), Hit)


def test_no_accuracy_consumes_no_randomness():
    rng = FixedRng(0.99)
    attacker = make_mon("Bidoof", "normal")
    defender = make_mon("Shinx", "lightning")
    damage_on_attack(attacker, make_attack("normal"), defender, rng=rng)
    assert rng.calls == 0


def test_seeded_rolls_are_reproducible():
    bound = BoundedPercentage.from_full_scale(128)
    attacker = make_mon("Bidoof", "normal")
    defender = make_mon("Shinx", "lightning")
    move = make_attack("normal", accuracy=bound)
    runs = []
    for _ in range(2):
        rng = random.Random(7)
        runs.append([damage_on_attack(attacker, move, defender, rng=rng) for _ in range(30)])
    assert runs[0] == runs[1]
    assert Missed() in runs[0] and Hit(Health(80)) in runs[0]


def test_damage_on_attack_does_not_mutate():
    attacker = make_mon("Piplup", "water", hp=50)
    defender = make_mon("Chimchar", "fire", hp=50)
    attacker.damage_on_attack(make_attack("water"), defender)
    assert attacker.stats.hp == Health(50)
    assert defender.stats.hp == Health(50)


def test_effect_moves_are_not_resolvable():
    attacker = make_mon("Bidoof", "normal")
    defender = make_mon("Shinx", "lightning")
    with pytest.raises(ValidationError):
        damage_on_attack(attacker, EffectMove(MoveInner("Growl", Affinity.NORMAL)), defender)


def test_into_damage_defaults_to_neutral():
    assert Power(40).into_damage().calculate() == Health(40)
    assert Power(40).into_damage_at(Percentage(0.5)).calculate() == Health(20)
    assert STAB_BONUS == 2.0


def test_defend_against_applies_hits_and_ignores_misses():
    mon = make_mon("Turtwig", "grass", hp=55)
    mon.defend_against(Missed())
    mon.defend_against(DidNotAffect())
    assert mon.stats.hp == Health(55)
    mon.defend_against(Hit(Health(20)))
    assert mon.stats.hp == Health(35)
    assert not mon.is_fainted()


def test_defend_against_saturates_at_zero():
    mon = make_mon("Turtwig", "grass", hp=30)
    for _ in range(3):
        mon.defend_against(Hit(Health(1000)))
        assert mon.stats.hp == Health(0)
    assert mon.is_fainted()


def test_resolve_attack_applies_outcome():
    attacker = make_mon("Piplup", "water")
    defender = make_mon("Chimchar", "fire", hp=200)
    out = resolve_attack(attacker, make_attack("water"), defender)
    assert out == Hit(Health(160))
    assert defender.stats.hp == Health(40)


def test_trace_records_go_to_injected_logger():
    buf = io.StringIO()
    log = Logger("TRACE", stream=buf, color=False)
    attacker = make_mon("Piplup", "water")
    defender = make_mon("Chimchar", "fire")
    out = damage_on_attack(attacker, make_attack("water"), defender, log=log)
    defender.defend_against(out, log=log)
    text = buf.getvalue()
    assert "AttackResolved" in text and "damage=160" in text
    assert "AttackHit" in text

    quiet = io.StringIO()
    damage_on_attack(attacker, make_attack("water"), defender, log=Logger("INFO", stream=quiet))
    assert quiet.getvalue() == ""


def test_more_than_four_moves_rejected():
    with pytest.raises(ValidationError):
        Combatant(name="Greedy", profile=profile_of("normal"),
                  stats=Stats(hp=Health(10), exp=Experience.at_level(5), lvl=Level(5)),
                  known_moves=[make_attack("normal")] * 5)
