"""Creature model: one battling creature instance.

Stats are computed once at creation from level, species base stats and the
individual variance rolls. ``current_hp`` and ``fainted`` only change through
:meth:`Creature.apply_damage`, :meth:`Creature.heal` and :meth:`Creature.revive`,
which keep ``fainted == (current_hp == 0)``.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
import random

from pokeworld.core.errors import InvalidAction, InvariantViolation
from pokeworld.data.catalog import MoveData, get_move, get_species, all_species_ids, moves_known_at

MIN_LEVEL = 1
MAX_LEVEL = 100
MOVE_SLOTS = 4
IV_MAX = 15
SHINY_ODDS = 8192

class Gender(str, Enum):
    FEMALE = "female"
    MALE = "male"

@dataclass(frozen=True)
class Stats:
    hp: int
    atk: int
    def_: int
    spatk: int
    spdef: int
    speed: int

    @classmethod
    def from_mapping(cls, m: dict) -> "Stats":
        return cls(hp=m["hp"], atk=m["atk"], def_=m["def"], spatk=m["spatk"], spdef=m["spdef"], speed=m["speed"])


def check_level(level: int) -> int:
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise InvariantViolation(f"level {level} outside {MIN_LEVEL}..{MAX_LEVEL}")
    return level


def compute_stat(base: int, iv: int, level: int, hp: bool = False) -> int:
    value = ((base + iv) * 2 * level) // 100
    if hp:
        return value + level + 10
    return value + 5


def derive_stats(base: Stats, ivs: Stats, level: int) -> Stats:
    return Stats(
        hp=compute_stat(base.hp, ivs.hp, level, hp=True),
        atk=compute_stat(base.atk, ivs.atk, level),
        def_=compute_stat(base.def_, ivs.def_, level),
        spatk=compute_stat(base.spatk, ivs.spatk, level),
        spdef=compute_stat(base.spdef, ivs.spdef, level),
        speed=compute_stat(base.speed, ivs.speed, level),
    )


@dataclass(eq=False)
class Creature:
    species_id: int
    level: int
    ivs: Stats
    stats: Stats
    moves: List[Optional[int]] = field(default_factory=lambda: [None] * MOVE_SLOTS)
    shiny: bool = False
    gender: Gender = Gender.MALE
    current_hp: Optional[int] = None  # None => full
    fainted: bool = False

    def __post_init__(self):
        check_level(self.level)
        if len(self.moves) > MOVE_SLOTS:
            raise InvariantViolation(f"{len(self.moves)} moves exceed {MOVE_SLOTS} slots")
        self.moves = list(self.moves) + [None] * (MOVE_SLOTS - len(self.moves))
        if self.current_hp is None:
            self.current_hp = self.stats.hp
        if not 0 <= self.current_hp <= self.stats.hp:
            raise InvariantViolation(f"current_hp {self.current_hp} outside 0..{self.stats.hp}")
        self.fainted = self.current_hp == 0

    @classmethod
    def create(cls, level: int, rng: Optional[random.Random] = None, *, species_id: Optional[int] = None) -> "Creature":
        """Roll a new creature at ``level``; species is uniform over the catalog unless given."""
        rng = rng or random.Random()
        check_level(level)
        if species_id is None:
            species_id = rng.choice(all_species_ids())
        species = get_species(species_id)
        ivs = Stats(*(rng.randint(0, IV_MAX) for _ in range(6)))
        stats = derive_stats(Stats.from_mapping(species.base_stats), ivs, level)
        return cls(
            species_id=species_id,
            level=level,
            ivs=ivs,
            stats=stats,
            moves=list(moves_known_at(species_id, level)),
            shiny=rng.randrange(SHINY_ODDS) == 0,
            gender=rng.choice((Gender.FEMALE, Gender.MALE)),
        )

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    @property
    def name(self) -> str:
        return get_species(self.species_id).display_name

    @property
    def types(self):
        return get_species(self.species_id).types

    @property
    def max_hp(self) -> int:
        return self.stats.hp

    def at_full_hp(self) -> bool:
        return self.current_hp == self.stats.hp

    # ------------------------------------------------------------------
    # HP
    # ------------------------------------------------------------------
    def apply_damage(self, amount: int) -> int:
        """Subtract ``amount`` HP (floored at 0). Returns the HP actually lost."""
        if amount < 0:
            raise InvariantViolation(f"negative damage {amount}")
        lost = min(amount, self.current_hp)
        self.current_hp -= lost
        if self.current_hp == 0:
            self.fainted = True
        return lost

    def heal(self, amount: int) -> int:
        """Add ``amount`` HP (capped at max). Fainted creatures must go through :meth:`revive`."""
        if amount < 0:
            raise InvariantViolation(f"negative heal {amount}")
        if self.fainted:
            raise InvariantViolation("cannot heal a fainted creature without reviving it")
        gained = min(amount, self.stats.hp - self.current_hp)
        self.current_hp += gained
        return gained

    def revive(self, amount: int) -> int:
        if amount <= 0:
            raise InvariantViolation(f"revive needs a positive amount, got {amount}")
        self.fainted = False
        self.current_hp = min(amount, self.stats.hp)
        return self.current_hp

    def restore(self):
        """Full restore used by the Pokémon Center."""
        self.fainted = False
        self.current_hp = self.stats.hp

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------
    def move(self, slot: int) -> MoveData:
        """Move in ``slot`` (0-based). Raises InvalidAction for an empty slot."""
        if not 0 <= slot < MOVE_SLOTS:
            raise InvalidAction(f"There is no move slot {slot + 1}!")
        move_id = self.moves[slot]
        if move_id is None:
            raise InvalidAction("This move doesn't exist!")
        return get_move(move_id)

    def has_move(self, slot: int) -> bool:
        return 0 <= slot < MOVE_SLOTS and self.moves[slot] is not None

    def assigned_slots(self) -> List[int]:
        return [i for i, m in enumerate(self.moves) if m is not None]

    def move_name(self, slot: int) -> str:
        return self.move(slot).display_name if self.has_move(slot) else ""

    def move_damage(self, slot: int) -> int:
        mv = self.move(slot)
        if mv.power <= 0:
            return 0
        attack = self.stats.spatk if mv.category == "special" else self.stats.atk
        return (2 * self.level // 5 + 2) * mv.power * attack // 1250 + 2

    def move_accuracy(self, slot: int) -> int:
        return self.move(slot).accuracy

    def __repr__(self) -> str:
        star = "*" if self.shiny else ""
        return f"<Creature {star}{self.name}{star} Lv{self.level} {self.current_hp}/{self.stats.hp}>"

__all__ = ["Creature", "Stats", "Gender", "check_level", "compute_stat", "derive_stats", "MOVE_SLOTS"]
