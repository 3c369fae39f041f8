"""Containers that own creatures and items: party slots, bag, PC storage.

A creature is owned by exactly one container at a time. Moving a creature
into a container that already holds it (or into a second container) is a
programming error and raises :class:`InvariantViolation`.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from pokeworld.core.errors import InsufficientStock, InvariantViolation
from pokeworld.data.items import ItemKind, BAG_ORDER
from .creature import Creature

PARTY_SIZE = 6

class Party:
    """Fixed six-slot roster. Slots never shift; vacant slots hold ``None``."""

    def __init__(self, members: Optional[List[Optional[Creature]]] = None):
        members = list(members or [])
        if len(members) > PARTY_SIZE:
            raise InvariantViolation(f"party holds at most {PARTY_SIZE} creatures")
        self._slots: List[Optional[Creature]] = members + [None] * (PARTY_SIZE - len(members))

    def _check_index(self, index: int):
        if not 0 <= index < PARTY_SIZE:
            raise InvariantViolation(f"party slot {index} outside 0..{PARTY_SIZE - 1}")

    def __getitem__(self, index: int) -> Optional[Creature]:
        self._check_index(index)
        return self._slots[index]

    def __len__(self) -> int:
        return sum(1 for c in self._slots if c is not None)

    def __iter__(self) -> Iterator[Creature]:
        return (c for c in self._slots if c is not None)

    def __contains__(self, creature: object) -> bool:
        return any(c is creature for c in self._slots)

    def slots(self) -> Tuple[Optional[Creature], ...]:
        return tuple(self._slots)

    def is_full(self) -> bool:
        return all(c is not None for c in self._slots)

    def first_vacant(self) -> Optional[int]:
        for i, c in enumerate(self._slots):
            if c is None:
                return i
        return None

    def place(self, index: int, creature: Creature):
        self._check_index(index)
        if self._slots[index] is not None:
            raise InvariantViolation(f"party slot {index} is occupied")
        if creature in self:
            raise InvariantViolation("creature is already in the party")
        self._slots[index] = creature

    def add(self, creature: Creature) -> Optional[int]:
        """Place in the first vacant slot; returns the slot or None when full."""
        idx = self.first_vacant()
        if idx is not None:
            self.place(idx, creature)
        return idx

    def first_able(self) -> Optional[int]:
        for i, c in enumerate(self._slots):
            if c is not None and not c.fainted:
                return i
        return None

    def can_fight(self) -> bool:
        return self.first_able() is not None


class Inventory:
    """Non-negative per-item counters."""

    def __init__(self, counts: Optional[Dict[ItemKind, int]] = None):
        self._items: Dict[ItemKind, int] = {k: 0 for k in BAG_ORDER}
        for k, qty in (counts or {}).items():
            self.add(ItemKind(k), qty)

    def count(self, item: ItemKind) -> int:
        return self._items[item]

    def __getitem__(self, item: ItemKind) -> int:
        return self._items[item]

    def add(self, item: ItemKind, qty: int = 1):
        if qty < 0:
            raise InvariantViolation(f"cannot add negative quantity {qty}")
        self._items[item] += qty

    def has(self, item: ItemKind, qty: int = 1) -> bool:
        return self._items[item] >= qty

    def consume(self, item: ItemKind, qty: int = 1):
        if not self.has(item, qty):
            raise InsufficientStock(item.display_name)
        self._items[item] -= qty

    def snapshot(self) -> Dict[ItemKind, int]:
        return dict(self._items)


class OverflowStorage:
    """The PC box: unordered, growable."""

    def __init__(self):
        self._box: List[Creature] = []

    def deposit(self, creature: Creature) -> int:
        if any(c is creature for c in self._box):
            raise InvariantViolation("creature is already in storage")
        self._box.append(creature)
        return len(self._box) - 1

    def __len__(self) -> int:
        return len(self._box)

    def __iter__(self) -> Iterator[Creature]:
        return iter(list(self._box))

    def __contains__(self, creature: object) -> bool:
        return any(c is creature for c in self._box)


@dataclass
class OpponentParty:
    """A trainer's roster plus the reward paid out when it is beaten."""
    members: List[Creature]
    money_given: int = 0
    defeated: bool = False

    def __post_init__(self):
        if not 1 <= len(self.members) <= PARTY_SIZE:
            raise InvariantViolation(f"opponent party size {len(self.members)} outside 1..{PARTY_SIZE}")

    def __len__(self) -> int:
        return len(self.members)

    def get(self, index: int) -> Optional[Creature]:
        if 0 <= index < len(self.members):
            return self.members[index]
        return None


@dataclass
class Player:
    """Everything the battle engine may mutate on the player's side."""
    party: Party = field(default_factory=Party)
    inventory: Inventory = field(default_factory=Inventory)
    storage: OverflowStorage = field(default_factory=OverflowStorage)
    money: int = 0

    def credit(self, amount: int):
        if amount < 0:
            raise InvariantViolation(f"negative credit {amount}")
        self.money += amount

    def debit(self, amount: int) -> bool:
        if amount < 0:
            raise InvariantViolation(f"negative debit {amount}")
        if self.money < amount:
            return False
        self.money -= amount
        return True

__all__ = ["Party", "Inventory", "OverflowStorage", "OpponentParty", "Player", "PARTY_SIZE"]
