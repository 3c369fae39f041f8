import random
import pytest

from pokeworld.battle.creature import Creature, Stats, compute_stat, derive_stats
from pokeworld.core.errors import InvalidAction, InvariantViolation
from pokeworld.data.catalog import get_species
from helpers import make_creature


def test_create_starts_at_full_hp():
    rng = random.Random(7)
    for level in (1, 5, 50, 100):
        c = Creature.create(level, rng)
        assert c.level == level
        assert c.current_hp == c.stats.hp
        assert not c.fainted
        assert c.assigned_slots(), "every creature knows at least one move"
        assert all(0 <= v <= 15 for v in (c.ivs.hp, c.ivs.atk, c.ivs.def_, c.ivs.spatk, c.ivs.spdef, c.ivs.speed))


def test_create_rejects_level_outside_range():
    rng = random.Random(1)
    for level in (0, -3, 101, 250):
        with pytest.raises(InvariantViolation):
            Creature.create(level, rng)


def test_hp_outside_range_is_a_defect():
    stats = Stats(30, 20, 20, 20, 20, 30)
    zero = Stats(0, 0, 0, 0, 0, 0)
    with pytest.raises(InvariantViolation):
        Creature(species_id=25, level=10, ivs=zero, stats=stats, moves=[8], current_hp=-20)
    with pytest.raises(InvariantViolation):
        Creature(species_id=25, level=10, ivs=zero, stats=stats, moves=[8], current_hp=999)
    full = Creature(species_id=25, level=10, ivs=zero, stats=stats, moves=[8])
    assert full.current_hp == 30 and not full.fainted
    down = Creature(species_id=25, level=10, ivs=zero, stats=stats, moves=[8], current_hp=0)
    assert down.fainted


def test_effective_stats_follow_formula():
    rng = random.Random(3)
    c = Creature.create(40, rng, species_id=4)
    base = get_species(4).base_stats
    assert c.stats.hp == ((base["hp"] + c.ivs.hp) * 2 * 40) // 100 + 40 + 10
    assert c.stats.speed == ((base["speed"] + c.ivs.speed) * 2 * 40) // 100 + 5
    assert compute_stat(100, 0, 100, hp=True) == 310
    assert derive_stats(Stats(50, 50, 50, 50, 50, 50), Stats(0, 0, 0, 0, 0, 0), 50).atk == 55


def test_damage_is_clamped_and_faints_at_zero():
    c = make_creature(hp=30)
    assert c.apply_damage(10) == 10
    assert c.current_hp == 20 and not c.fainted
    assert c.apply_damage(500) == 20
    assert c.current_hp == 0 and c.fainted


def test_hp_invariants_hold_under_random_sequences():
    rng = random.Random(99)
    c = make_creature(hp=50)
    for _ in range(500):
        if c.fainted:
            if rng.random() < 0.5:
                c.revive(rng.randint(1, 60))
            continue
        if rng.random() < 0.6:
            c.apply_damage(rng.randint(0, 30))
        else:
            c.heal(rng.randint(0, 30))
        assert 0 <= c.current_hp <= c.stats.hp
        assert c.fainted == (c.current_hp == 0)


def test_heal_caps_at_max():
    c = make_creature(hp=30, current_hp=25)
    assert c.heal(20) == 5
    assert c.at_full_hp()


def test_heal_does_not_clear_fainted():
    c = make_creature(hp=30, current_hp=0)
    assert c.fainted
    with pytest.raises(InvariantViolation):
        c.heal(10)
    assert c.fainted and c.current_hp == 0
    c.revive(25)
    assert not c.fainted and c.current_hp == 25


def test_negative_amounts_are_defects():
    c = make_creature()
    with pytest.raises(InvariantViolation):
        c.apply_damage(-1)
    with pytest.raises(InvariantViolation):
        c.heal(-1)


def test_empty_move_slot_has_no_damage():
    c = make_creature(moves=(8,))
    assert c.move_name(1) == ""
    with pytest.raises(InvalidAction):
        c.move_damage(1)
    with pytest.raises(InvalidAction):
        c.move_accuracy(3)
    with pytest.raises(InvalidAction):
        c.move(4)


def test_move_damage_formula():
    c = make_creature(level=50, atk=60, moves=(1, 3))  # tackle, growl
    # (2*50//5 + 2) * 40 * 60 // 1250 + 2
    assert c.move_damage(0) == 44
    assert c.move_damage(1) == 0  # status move
    assert c.move_accuracy(0) == 100


def test_late_first_move_is_still_known():
    c = Creature.create(5, random.Random(0), species_id=129)  # magikarp learns tackle at 15
    assert c.moves == [1, None, None, None]
