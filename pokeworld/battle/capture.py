"""Capture & flee mechanics.

Capture always succeeds once a ball is thrown; the interesting part is where
the creature ends up. Fleeing compares the speed ratio plus a per-attempt
bonus against a byte-sized roll.
"""
from __future__ import annotations
from dataclasses import dataclass
import random
from typing import Literal, Optional

from .creature import Creature
from .stores import Player

FLEE_ROLL_RANGE = 256
FLEE_ATTEMPT_BONUS = 30

@dataclass
class CaptureResult:
    destination: Literal["party", "storage"]
    index: int


def transfer_captured(player: Player, creature: Creature) -> CaptureResult:
    """Hand ``creature`` to the first vacant party slot, else to PC storage."""
    slot = player.party.add(creature)
    if slot is not None:
        return CaptureResult("party", slot)
    return CaptureResult("storage", player.storage.deposit(creature))


def flee_odds(player_speed: int, enemy_speed: int, attempts: int) -> Optional[int]:
    """Odds out of 256 for attempt number ``attempts`` (1-based); None means a sure escape."""
    divisor = (enemy_speed // 4) % FLEE_ROLL_RANGE
    if divisor == 0:
        return None
    return (player_speed * 32) // divisor + FLEE_ATTEMPT_BONUS * attempts


def flee_probability(player_speed: int, enemy_speed: int, attempts: int) -> float:
    odds = flee_odds(player_speed, enemy_speed, attempts)
    if odds is None:
        return 1.0
    return max(0, min(odds, FLEE_ROLL_RANGE)) / FLEE_ROLL_RANGE


def flee_success(rng: random.Random, player_speed: int, enemy_speed: int, attempts: int) -> bool:
    odds = flee_odds(player_speed, enemy_speed, attempts)
    if odds is None:
        return True
    return odds > rng.randrange(FLEE_ROLL_RANGE)

__all__ = ["CaptureResult", "transfer_captured", "flee_odds", "flee_probability", "flee_success"]
