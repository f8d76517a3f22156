"""Damage pipeline.

``damage_on_attack`` is pure apart from the single accuracy draw: it rolls
accuracy, resolves affinities, applies the same-type bonus and floors
``effectiveness * power`` into a ``Health`` delta. Applying the outcome to the
defender is a separate step (``defend_against``).
"""
from __future__ import annotations
import random
from typing import Optional

from pokerus.core.errors import ValidationError
from pokerus.core.logging import Logger, logger
from .matchup import attacking_effectiveness
from .models import AttackMove, AttackOutcome, Combatant, DidNotAffect, Hit, Missed
from .num import BoundedPercentage, Percentage

STAB_BONUS = Percentage(2.0)

def accuracy_check(accuracy: Optional[BoundedPercentage], rng) -> bool:
    """One draw in [0, 1); hits while the draw is below the accuracy fraction."""
    if accuracy is None:
        return True
    return rng.random() < accuracy.fraction()

def damage_on_attack(attacker: Combatant, move: AttackMove, defender: Combatant,
                     rng=None, log: Optional[Logger] = None) -> AttackOutcome:
    """Resolve ``move`` from ``attacker`` against ``defender`` without mutating either."""
    if not isinstance(move, AttackMove):
        raise ValidationError(f"'{getattr(move, 'name', move)}' is not an attack move")
    log = log or logger
    rng = rng or random

    if not accuracy_check(move.accuracy, rng):
        log.trace("AttackRollMissed", attacker=attacker.name, move=move.name)
        return Missed()

    matchup = attacking_effectiveness(attacker.profile, defender.profile)
    if not matchup:
        log.trace("AttackUnaffected", attacker=attacker.name, move=move.name, defender=defender.name)
        return DidNotAffect()
    effectiveness = matchup.value

    stab = move.is_stab_for(attacker.profile)
    if stab:
        effectiveness = STAB_BONUS * effectiveness

    damage = move.damage_at_effectiveness(effectiveness)
    log.trace("AttackResolved", attacker=attacker.name, move=move.name, defender=defender.name,
              effectiveness=effectiveness.value, stab=stab, damage=damage.value)
    return Hit(damage)

def defend_against(defender: Combatant, outcome: AttackOutcome, log: Optional[Logger] = None):
    defender.defend_against(outcome, log=log)

def resolve_attack(attacker: Combatant, move: AttackMove, defender: Combatant,
                   rng=None, log: Optional[Logger] = None) -> AttackOutcome:
    """One full combat step: compute the outcome, then apply it to ``defender``."""
    outcome = damage_on_attack(attacker, move, defender, rng=rng, log=log)
    defender.defend_against(outcome, log=log)
    return outcome

__all__ = ["STAB_BONUS","accuracy_check","damage_on_attack","defend_against","resolve_attack"]
