import random

import pytest

from pokeworld.battle.stores import Party, Player
from pokeworld.core.errors import InvalidAction
from pokeworld.data.items import ItemKind
from pokeworld.world.buildings import needs_healing, pc_listing, pokemart_buy, pokemon_center_heal
from pokeworld.world.difficulty import ORIGIN, in_world, map_distance
from pokeworld.world.npc import NpcKind, Trainer
from helpers import make_creature


def test_map_distance():
    assert map_distance(ORIGIN) == 0
    assert map_distance((0, 0)) == 400
    assert map_distance((205, 190)) == 15
    assert in_world((400, 400)) and not in_world((401, 0))


def test_mart_purchase():
    p = Player(money=350)
    assert pokemart_buy(p, ItemKind.SUPER_POTION)
    assert p.money == 50 and p.inventory[ItemKind.SUPER_POTION] == 1
    assert not pokemart_buy(p, ItemKind.POTION)
    assert p.money == 50 and p.inventory[ItemKind.POTION] == 0
    with pytest.raises(InvalidAction):
        pokemart_buy(p, ItemKind.POTION, 0)


def test_center_restores_party():
    a, b = make_creature(current_hp=0), make_creature(current_hp=12)
    p = Player(party=Party([a, b, make_creature()]))
    assert needs_healing(p)
    assert pokemon_center_heal(p) == 2
    assert not a.fainted and a.at_full_hp() and b.at_full_hp()
    assert not needs_healing(p)


def test_pc_listing():
    p = Player()
    assert pc_listing(p) == []
    p.storage.deposit(make_creature(species_id=74, level=12))
    assert pc_listing(p) == ["1: Geodude Lv12"]


def test_trainer_party_generated_once_and_kept():
    rng = random.Random(8)
    t = Trainer("Lass", money_given=80)
    assert t.kind is NpcKind.HOSTILE and t.initiates_battle
    party = t.ensure_party(60, rng)
    assert party.money_given == 80
    party.members[0].apply_damage(party.members[0].current_hp)
    assert t.ensure_party(60, rng) is party
    assert party.members[0].fainted
    assert not Trainer("Clerk", kind=NpcKind.STATIC).initiates_battle
