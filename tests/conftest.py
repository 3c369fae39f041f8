import pytest

from pokeworld.battle.stores import Player, Party
from helpers import StubRng, make_creature


@pytest.fixture
def stub_rng():
    return StubRng()


@pytest.fixture
def player():
    return Player(party=Party([make_creature()]), money=500)
