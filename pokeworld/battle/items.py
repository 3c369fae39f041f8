"""Item-use resolution against a single target creature.

Failures raise :class:`InsufficientStock` or :class:`InvalidAction` before any
state is touched, so a rejected item never costs stock (or a battle turn).
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from pokeworld.core.errors import InsufficientStock, InvalidAction
from pokeworld.core.logging import logger
from pokeworld.data.items import ItemKind, item_info
from .capture import CaptureResult, transfer_captured
from .creature import Creature
from .stores import Player

@dataclass
class ItemResult:
    item: ItemKind
    success: bool
    message: str
    healed: int = 0
    capture: Optional[CaptureResult] = None

    @property
    def captured(self) -> bool:
        return self.capture is not None


class ItemResolver:
    def __init__(self, player: Player):
        self.player = player

    def use(self, item: ItemKind, target: Optional[Creature], *, in_battle: bool,
            capture_target: Optional[Creature] = None) -> ItemResult:
        """Apply ``item``.

        ``target`` is the player's creature for healing items. ``capture_target``
        is the wild creature a ball would be thrown at; it is only supplied in
        wild battles.
        """
        info = item_info(item)
        if info.is_ball:
            if not in_battle:
                raise InvalidAction("You cannot use that!")
            return self.throw_ball(item, capture_target)
        if target is None:
            raise InvalidAction("There is no creature to use that on!")
        if info.is_revive:
            return self.use_revive(item, target)
        return self.use_potion(item, target)

    def use_potion(self, item: ItemKind, target: Creature) -> ItemResult:
        info = item_info(item)
        if not self.player.inventory.has(item):
            raise InsufficientStock(info.label)
        if target.fainted:
            raise InvalidAction(f"{info.label} can't be used on a fainted creature!")
        if target.at_full_hp():
            raise InvalidAction(f"{target.name} is already at full HP")
        self.player.inventory.consume(item)
        healed = target.heal(info.heal)
        logger.debug("ItemUsed", item=item.value, target=target.name, healed=healed)
        return ItemResult(item, True, f"You healed {healed} HP", healed=healed)

    def use_revive(self, item: ItemKind, target: Creature) -> ItemResult:
        info = item_info(item)
        if not self.player.inventory.has(item):
            raise InsufficientStock(info.label)
        if not target.fainted:
            raise InvalidAction(f"{target.name} is not fainted!")
        self.player.inventory.consume(item)
        restored = target.revive(info.heal)
        logger.debug("ItemUsed", item=item.value, target=target.name, healed=restored)
        return ItemResult(item, True, f"{target.name} was revived!", healed=restored)

    def throw_ball(self, item: ItemKind, wild: Optional[Creature]) -> ItemResult:
        info = item_info(item)
        if wild is None:
            raise InvalidAction("You can't catch another trainer's creature!")
        if not self.player.inventory.has(item):
            raise InsufficientStock(info.label)
        self.player.inventory.consume(item)
        res = transfer_captured(self.player, wild)
        where = "your party" if res.destination == "party" else "the PC"
        logger.info("CreatureCaptured", species=wild.name, level=wild.level, ball=item.value, to=res.destination)
        return ItemResult(item, True, f"Gotcha! {wild.name} was sent to {where}.", capture=res)

__all__ = ["ItemResolver", "ItemResult"]
