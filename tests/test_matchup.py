import itertools
import pytest

from pokerus.battle.matchup import (
    Affinity, Single, Mixed, TypeMatchup, Affected, Unaffected,
    attacking, defending, attacking_effectiveness, defending_effectiveness, parse_profile,
)
from pokerus.battle.num import Percentage

N, F, G, W, L, GH, FT = (Affinity.NORMAL, Affinity.FIRE, Affinity.GRASS, Affinity.WATER,
                         Affinity.LIGHTNING, Affinity.GHOST, Affinity.FIGHTING)

# None marks "no effect"; every other ordered pair is neutral
CHART = {
    (N, GH): None, (FT, GH): None,
    (F, F): 0.5, (F, W): 0.5, (F, G): 2.0,
    (W, W): 0.5, (W, G): 0.5, (W, L): 0.5, (W, F): 2.0,
    (G, G): 0.5, (G, F): 0.5, (G, L): 0.5, (G, W): 2.0,
    (L, L): 0.5, (L, G): 0.5, (L, W): 2.0,
    (FT, FT): 2.0, (FT, N): 2.0,
}


@pytest.mark.parametrize("attacker, defender", list(itertools.product(Affinity, repeat=2)))
def test_single_chart_all_49_pairs(attacker, defender):
    expected = CHART.get((attacker, defender), 1.0)
    result = attacking(attacker, defender)
    if expected is None:
        assert result is Unaffected
    else:
        assert result == Affected(Percentage(expected))
    # profile wrappers resolve the same way
    assert attacking_effectiveness(Single(attacker), Single(defender)) == result
    assert defending(defender, attacker) == result


def test_unaffected_absorbs_and_then():
    assert Unaffected.and_then(lambda v: Affected(v)) is Unaffected
    assert Unaffected.and_then(lambda v: Unaffected) is Unaffected


def test_affected_and_then_is_application():
    f = lambda v: Affected(v * Percentage(2.0))
    x = Percentage(0.5)
    assert Affected(x).and_then(f) == f(x)
    assert Affected(x).and_then(lambda v: Unaffected) is Unaffected


def test_map_keeps_variant():
    assert Affected(2).map(lambda v: v + 1) == Affected(3)
    assert Unaffected.map(lambda v: v + 1) is Unaffected


def test_constructors_and_truthiness():
    assert TypeMatchup.default() is Unaffected
    assert TypeMatchup.of(2.0) == Affected(Percentage(2.0))
    assert TypeMatchup.from_optional(None) is Unaffected
    assert TypeMatchup.from_optional(0.5) == Affected(Percentage(0.5))
    assert bool(Affected(Percentage(0.0)))
    assert not Unaffected
    assert Affected(1).is_affected and not Unaffected.is_affected
    assert Unaffected.value_or(7) == 7
    assert Affected(3).value_or(7) == 3


def test_merge_sums_and_collapses_only_when_both_unaffected():
    half, double = TypeMatchup.of(0.5), TypeMatchup.of(2.0)
    assert half.merge(double) == Affected(Percentage(2.5))
    assert half.merge(Unaffected) == half
    assert Unaffected.merge(double) == double
    assert Unaffected.merge(Unaffected) is Unaffected


def test_fire_against_fire_water_is_neutral_sum():
    result = attacking_effectiveness(Single(F), Mixed(F, W))
    assert result == Affected(Percentage(1.0))


def test_dual_defender_can_exceed_double():
    assert attacking_effectiveness(Single(F), Mixed(G, G)) == Affected(Percentage(4.0))
    assert attacking_effectiveness(Single(W), Mixed(F, N)) == Affected(Percentage(3.0))


def test_dual_defender_immune_only_on_both_facets():
    assert attacking_effectiveness(Single(N), Mixed(GH, GH)) is Unaffected
    # ghost facet contributes nothing, fire facet is neutral
    assert attacking_effectiveness(Single(N), Mixed(GH, F)) == Affected(Percentage(1.0))
    assert attacking_effectiveness(Single(FT), Mixed(N, GH)) == Affected(Percentage(2.0))


def test_mixed_attacker_sums_facets():
    assert attacking_effectiveness(Mixed(F, W), Single(G)) == Affected(Percentage(2.5))
    assert attacking_effectiveness(Mixed(N, FT), Single(GH)) is Unaffected


@pytest.mark.parametrize("attacker", [Mixed(N, F), Mixed(F, N), Mixed(F, FT), Mixed(FT, W)])
def test_mixed_attacker_with_one_immune_facet_is_unaffected(attacker):
    assert attacking_effectiveness(attacker, Single(GH)) is Unaffected
    assert defending_effectiveness(Single(GH), attacker) is Unaffected


def test_defender_side_stays_lenient_while_attacker_side_is_strict():
    # same affinities, opposite roles
    assert attacking_effectiveness(Single(N), Mixed(GH, F)) == Affected(Percentage(1.0))
    assert attacking_effectiveness(Mixed(N, F), Single(GH)) is Unaffected


def test_mixed_against_mixed_is_four_way_cross():
    # fire: 0.5 + 2.0, water: 2.0 + 0.5
    assert attacking_effectiveness(Mixed(F, W), Mixed(F, G)) == Affected(Percentage(5.0))


def test_bare_affinities_accepted_on_either_side():
    assert attacking_effectiveness(F, G) == Affected(Percentage(2.0))
    assert attacking_effectiveness(F, Mixed(F, W)) == Affected(Percentage(1.0))
    assert defending_effectiveness(Single(G), Single(F)) == Affected(Percentage(2.0))


def test_parse_profile():
    assert parse_profile("fire") == Single(F)
    assert parse_profile("Water/Grass") == Mixed(W, G)
    with pytest.raises(ValueError):
        parse_profile("plasma")
    with pytest.raises(ValueError):
        parse_profile("fire/water/grass")
