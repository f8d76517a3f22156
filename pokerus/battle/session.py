"""Turn executor for 1v1 duels.

Each attack resolves fully (outcome computed, then applied to the defender)
before the next one is evaluated, so a combatant's stats are only ever
mutated by one attack at a time.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import random

from pokerus.core.logging import Logger, logger
from .mechanics import resolve_attack
from .models import AttackMove, AttackOutcome, Combatant, EffectMove, Move

DEFAULT_MAX_TURNS = 200

@dataclass(frozen=True)
class TurnRecord:
    turn: int
    attacker: str
    move: str
    defender: str
    outcome: Optional[AttackOutcome]  # None when the move had nothing to resolve
    defender_hp: int

class Duel:
    def __init__(self, first: Combatant, second: Combatant, rng: Optional[random.Random] = None,
                 log: Optional[Logger] = None):
        self.first = first
        self.second = second
        self.rng = rng or random.Random()
        self.log_sink = log or logger
        self.turn_counter = 0
        self.max_turns = DEFAULT_MAX_TURNS
        self.log: List[TurnRecord] = []

    def is_over(self) -> bool:
        return self.first.is_fainted() or self.second.is_fainted()

    def choose_move(self, combatant: Combatant, idx: Optional[int] = None) -> Optional[Move]:
        if idx is not None:
            if not 0 <= idx < len(combatant.known_moves):
                raise IndexError(f"{combatant.name} has no move in slot {idx}")
            return combatant.known_moves[idx]
        attacks = combatant.attack_moves()
        if not attacks:
            return None
        return self.rng.choice(attacks)

    def _act(self, attacker: Combatant, move: Optional[Move], defender: Combatant):
        if move is None or isinstance(move, EffectMove):
            name = move.name if move is not None else "-"
            self.log_sink.debug("NothingHappened", attacker=attacker.name, move=name)
            self.log.append(TurnRecord(self.turn_counter, attacker.name, name, defender.name,
                                       None, defender.stats.hp.value))
            return
        outcome = resolve_attack(attacker, move, defender, rng=self.rng, log=self.log_sink)
        self.log.append(TurnRecord(self.turn_counter, attacker.name, move.name, defender.name,
                                   outcome, defender.stats.hp.value))

    def step(self, first_move_idx: Optional[int] = None, second_move_idx: Optional[int] = None):
        if self.is_over():
            return
        self.turn_counter += 1
        self._act(self.first, self.choose_move(self.first, first_move_idx), self.second)
        if not self.second.is_fainted():
            self._act(self.second, self.choose_move(self.second, second_move_idx), self.first)

    def run_auto(self, max_turns: int = DEFAULT_MAX_TURNS) -> str:
        self.max_turns = max_turns
        while not self.is_over() and self.turn_counter < max_turns:
            self.step()
        result = self.outcome()
        self.log_sink.info("DuelFinished", result=result, turns=self.turn_counter)
        return result

    def outcome(self) -> str:
        """Current result. Attacks only land on the side that has not fainted, so
        ``DRAW`` only comes from a duel that starts with both sides fainted."""
        if self.second.is_fainted() and not self.first.is_fainted():
            return "FIRST_WIN"
        if self.first.is_fainted() and not self.second.is_fainted():
            return "SECOND_WIN"
        if self.is_over():
            return "DRAW"
        if self.turn_counter >= self.max_turns:
            return "STALEMATE"
        return "ONGOING"

__all__ = ["Duel","TurnRecord","DEFAULT_MAX_TURNS"]
