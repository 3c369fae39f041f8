"""Item kinds carried in the bag, with their effect parameters and shop prices."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict

class ItemKind(str, Enum):
    REVIVE = "revive"
    POTION = "potion"
    POKE_BALL = "poke-ball"
    SUPER_POTION = "super-potion"
    HYPER_POTION = "hyper-potion"
    GREAT_BALL = "great-ball"
    ULTRA_BALL = "ultra-ball"
    QUICK_BALL = "quick-ball"

    @property
    def display_name(self) -> str:
        return ITEMS[self].label

@dataclass(frozen=True)
class ItemInfo:
    label: str
    price: int
    heal: int = 0
    is_ball: bool = False
    is_revive: bool = False

    @property
    def is_potion(self) -> bool:
        return self.heal > 0 and not self.is_revive

# Bag order matches the in-game menu digits 1..8
ITEMS: Dict[ItemKind, ItemInfo] = {
    ItemKind.REVIVE: ItemInfo("Revive", 1000, heal=25, is_revive=True),
    ItemKind.POTION: ItemInfo("Potion", 100, heal=20),
    ItemKind.POKE_BALL: ItemInfo("Poké Ball", 100, is_ball=True),
    ItemKind.SUPER_POTION: ItemInfo("Super Potion", 300, heal=50),
    ItemKind.HYPER_POTION: ItemInfo("Hyper Potion", 500, heal=100),
    ItemKind.GREAT_BALL: ItemInfo("Great Ball", 300, is_ball=True),
    ItemKind.ULTRA_BALL: ItemInfo("Ultra Ball", 1000, is_ball=True),
    ItemKind.QUICK_BALL: ItemInfo("Quick Ball", 500, is_ball=True),
}

BAG_ORDER = tuple(ITEMS)

def item_info(kind: ItemKind) -> ItemInfo:
    return ITEMS[kind]

__all__ = ["ItemKind", "ItemInfo", "ITEMS", "BAG_ORDER", "item_info"]
