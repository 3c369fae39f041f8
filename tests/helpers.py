from pokeworld.battle.creature import Creature, Stats

ZERO_IVS = Stats(0, 0, 0, 0, 0, 0)


class StubRng:
    """Deterministic stand-in for random.Random.

    randrange returns ``value`` (capped to the range), so 0 means every attack
    hits and every flee roll is as low as possible.
    """
    def __init__(self, value: int = 0, uniform: float = 0.0):
        self.value = value
        self.uniform = uniform
    def randrange(self, n): return min(self.value, n - 1)
    def random(self): return self.uniform
    def randint(self, a, b): return a
    def choice(self, seq): return seq[0]


def make_creature(species_id=25, level=10, *, hp=30, atk=20, speed=30, moves=(8,), current_hp=None):
    stats = Stats(hp=hp, atk=atk, def_=20, spatk=atk, spdef=20, speed=speed)
    c = Creature(species_id=species_id, level=level, ivs=ZERO_IVS, stats=stats, moves=list(moves))
    if current_hp is not None:
        c.apply_damage(c.current_hp - current_hp)
    return c
