"""Opponent generation scaled by world difficulty.

The difficulty signal ``d`` is the map's distance from the origin. Close to
the origin creatures stay low level; past distance 200 the whole band shifts
towards level 100.
"""
from __future__ import annotations
from dataclasses import dataclass
import random
from typing import List, Optional, Tuple

from pokeworld.battle.creature import Creature, MIN_LEVEL, MAX_LEVEL
from pokeworld.battle.stores import OpponentParty
from pokeworld.core.errors import InvariantViolation
from pokeworld.core.logging import logger

BAND_PIVOT = 200

# Cumulative thresholds over a uniform [0, 1) draw -> trainer party size
PARTY_SIZE_TABLE: Tuple[Tuple[float, int], ...] = (
    (0.08, 6),
    (0.13, 5),
    (0.22, 4),
    (0.36, 3),
    (0.60, 2),
)

@dataclass(frozen=True)
class LevelBand:
    min: int
    max: int

    def roll(self, rng: random.Random) -> int:
        if self.min == self.max:
            return self.min
        return rng.randint(self.min, self.max)


def _clamp(v: int) -> int:
    return max(MIN_LEVEL, min(v, MAX_LEVEL))


def level_band(difficulty: int) -> LevelBand:
    if difficulty < 0:
        raise InvariantViolation(f"negative difficulty {difficulty}")
    if difficulty <= BAND_PIVOT:
        lo, hi = 1, difficulty // 2
    else:
        lo, hi = (difficulty - BAND_PIVOT) // 2, MAX_LEVEL
    lo, hi = _clamp(lo), _clamp(hi)
    return LevelBand(lo, max(lo, hi))


def trainer_party_size(rng: random.Random) -> int:
    draw = rng.random()
    for threshold, size in PARTY_SIZE_TABLE:
        if draw <= threshold:
            return size
    return 1


def default_reward(members: List[Creature]) -> int:
    return 100 + 10 * max(c.level for c in members)


def generate_wild(difficulty: int, rng: Optional[random.Random] = None) -> Creature:
    rng = rng or random.Random()
    band = level_band(difficulty)
    wild = Creature.create(band.roll(rng), rng)
    logger.debug("WildGenerated", species=wild.name, level=wild.level, difficulty=difficulty)
    return wild


def generate_trainer_party(difficulty: int, rng: Optional[random.Random] = None, *,
                           money_given: Optional[int] = None) -> OpponentParty:
    rng = rng or random.Random()
    band = level_band(difficulty)
    size = trainer_party_size(rng)
    members = [Creature.create(band.roll(rng), rng) for _ in range(size)]
    reward = default_reward(members) if money_given is None else money_given
    logger.debug("TrainerPartyGenerated", size=size, band=f"{band.min}-{band.max}", reward=reward)
    return OpponentParty(members=members, money_given=reward)

__all__ = [
    "LevelBand", "level_band", "trainer_party_size", "generate_wild",
    "generate_trainer_party", "default_reward", "PARTY_SIZE_TABLE",
]
