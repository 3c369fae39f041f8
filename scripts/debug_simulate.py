"""Run a batch of seeded wild battles with a fixed attack script and print the outcome tally.

Usage: python -m scripts.debug_simulate [distance] [battles] [seed]
"""
from __future__ import annotations
import random
import sys
from collections import Counter

from pokeworld.battle.creature import Creature
from pokeworld.battle.interfaces import Decision
from pokeworld.battle.session import BattleSession
from pokeworld.battle.stores import Party, Player
from pokeworld.core.logging import logger
from pokeworld.encounters.generator import generate_wild


class AlwaysFirstMove:
    def next_decision(self, view):
        return Decision.attack(1)


def simulate(distance: int, battles: int, seed: int) -> Counter:
    rng = random.Random(seed)
    tally: Counter = Counter()
    for _ in range(battles):
        player = Player(party=Party([Creature.create(min(100, max(1, distance // 4)), rng)]))
        session = BattleSession(player, decisions=AlwaysFirstMove(), wild=generate_wild(distance, rng), rng=rng)
        tally[session.run().value] += 1
    return tally


if __name__ == "__main__":
    args = [int(a) for a in sys.argv[1:4]]
    distance, battles, seed = (args + [40, 200, 1][len(args):])[:3]
    logger.set_level("WARN")
    for outcome, n in simulate(distance, battles, seed).most_common():
        print(f"{outcome:10s} {n}")
