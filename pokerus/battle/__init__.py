"""
Battle package.
- num.py (bounded percentages, ranged bytes)
- matchup.py (affinities, effectiveness verdicts, chart)
- models.py (Combatant, moves, Health, AttackOutcome)
- mechanics.py (accuracy, STAB, damage pipeline)
- experience.py (levels, thresholds, growth curve)
- session.py (duel turn executor)
"""
from .matchup import Affinity, Single, Mixed, TypeMatchup, Affected, Unaffected, attacking_effectiveness
from .models import Combatant, AttackMove, EffectMove, Missed, DidNotAffect, Hit, Health, Power
from .mechanics import damage_on_attack, resolve_attack
from .session import Duel
__all__ = [
    "Affinity","Single","Mixed","TypeMatchup","Affected","Unaffected","attacking_effectiveness",
    "Combatant","AttackMove","EffectMove","Missed","DidNotAffect","Hit","Health","Power",
    "damage_on_attack","resolve_attack","Duel",
]
