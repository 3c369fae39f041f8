"""Town buildings: Poké Mart, Pokémon Center and the PC box."""
from __future__ import annotations
from typing import List

from pokeworld.battle.stores import Player
from pokeworld.core.errors import InvalidAction
from pokeworld.core.logging import logger
from pokeworld.data.items import ItemKind, item_info

def pokemart_buy(player: Player, item: ItemKind, qty: int = 1) -> bool:
    """Buy ``qty`` of ``item``. Returns False (nothing changes) when the player can't afford it."""
    if qty < 1:
        raise InvalidAction("Choose how many to buy!")
    cost = item_info(item).price * qty
    if not player.debit(cost):
        logger.debug("PurchaseDeclined", item=item.value, qty=qty, cost=cost, money=player.money)
        return False
    player.inventory.add(item, qty)
    logger.info("ItemPurchased", item=item.value, qty=qty, cost=cost, money=player.money)
    return True


def needs_healing(player: Player) -> bool:
    return any(c.fainted or not c.at_full_hp() for c in player.party)


def pokemon_center_heal(player: Player) -> int:
    """Restore every party creature. Returns how many needed it."""
    healed = 0
    for c in player.party:
        if c.fainted or not c.at_full_hp():
            c.restore()
            healed += 1
    logger.info("PartyHealed", restored=healed)
    return healed


def pc_listing(player: Player) -> List[str]:
    return [f"{i + 1}: {c.name} Lv{c.level}" for i, c in enumerate(player.storage)]

__all__ = ["pokemart_buy", "needs_healing", "pokemon_center_heal", "pc_listing"]
