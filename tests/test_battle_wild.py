import random
import pytest

from pokeworld.battle.capture import flee_odds, flee_probability
from pokeworld.battle.interfaces import Decision, Prompt, RandomMovePolicy, RecordingRenderer, ScriptedDecisions
from pokeworld.battle.session import BattleSession, BattleState, Outcome
from pokeworld.battle.stores import Party, Player
from pokeworld.core.errors import InvariantViolation, NoEligibleCreature
from pokeworld.data.items import ItemKind
from helpers import StubRng, make_creature


def _session(player, wild, decisions, rng=None):
    renderer = RecordingRenderer()
    script = ScriptedDecisions(decisions)
    session = BattleSession(player, decisions=script, wild=wild, renderer=renderer, rng=rng or StubRng())
    return session, script, renderer


def _hits(renderer, side):
    return [e for e in renderer.events() if e.kind == "hit" and e.data["side"] == side]


def test_capture_goes_to_first_vacant_slot():
    player = Player(party=Party([make_creature()]), money=500)
    player.inventory.add(ItemKind.POKE_BALL, 1)
    wild = make_creature(species_id=74)
    session, _, renderer = _session(player, wild, [Decision.bag(), Decision.use(ItemKind.POKE_BALL)])
    assert session.run() is Outcome.CAPTURED
    assert player.party[1] is wild
    assert player.inventory[ItemKind.POKE_BALL] == 0
    assert wild not in player.storage
    assert session.context is None
    assert "captured" in renderer.kinds()


def test_capture_with_full_party_goes_to_storage():
    player = Player(party=Party([make_creature() for _ in range(6)]))
    player.inventory.add(ItemKind.GREAT_BALL, 2)
    wild = make_creature(species_id=74)
    session, _, _ = _session(player, wild, [Decision.bag(), Decision.use(ItemKind.GREAT_BALL)])
    assert session.run() is Outcome.CAPTURED
    assert wild not in player.party
    assert list(player.storage) == [wild]
    assert player.inventory[ItemKind.GREAT_BALL] == 1


def test_empty_move_slot_is_reprompted_without_opponent_turn():
    player = Player(party=Party([make_creature(atk=500)]))
    wild = make_creature(species_id=74)
    session, script, renderer = _session(player, wild, [Decision.attack(2), Decision.attack(1)])
    assert session.run() is Outcome.VICTORY
    kinds = renderer.kinds()
    rejected = [e for e in renderer.events() if e.kind == "rejected"]
    assert rejected[0].data["reason"] == "This move doesn't exist!"
    assert kinds.index("rejected") < kinds.index("hit")
    assert _hits(renderer, "opponent") == []
    assert script.prompts == [Prompt.ACTION, Prompt.ACTION]


def test_wild_faint_is_victory_without_reward():
    player = Player(party=Party([make_creature(atk=500)]), money=500)
    wild = make_creature(species_id=74)
    session, _, renderer = _session(player, wild, [Decision.attack(1)])
    assert session.run() is Outcome.VICTORY
    assert wild.fainted
    assert player.money == 500
    assert "reward" not in renderer.kinds()
    last = renderer.views[-1]
    assert last.state == BattleState.END.value
    assert last.outcome == "victory"


def test_failed_flees_raise_the_attempt_counter():
    player = Player(party=Party([make_creature()]))
    wild = make_creature(species_id=74)
    # randrange -> 255: attempts 1..3 fail, attempt 4 clears 256
    session, _, renderer = _session(player, wild, [Decision.flee()] * 4, rng=StubRng(255))
    assert session.run() is Outcome.FLED
    failed = [e.data["attempts"] for e in renderer.events() if e.kind == "flee_failed"]
    assert failed == [1, 2, 3]
    # each failed attempt hands the opponent a move
    assert len(_hits(renderer, "opponent")) == 3
    assert player.party[0].current_hp == 15


def test_flee_probability_grows_with_attempts():
    probs = [flee_probability(30, 60, n) for n in range(1, 10)]
    assert probs == sorted(probs)
    assert probs[-1] == 1.0
    assert flee_odds(30, 3, 1) is None
    assert flee_probability(30, 3, 1) == 1.0


def test_defeat_leaves_creature_in_its_slot():
    mine = make_creature(hp=5)
    player = Player(party=Party([mine]), money=500)
    wild = make_creature(species_id=74, atk=500)
    session, _, renderer = _session(player, wild, [Decision.attack(1)])
    assert session.run() is Outcome.DEFEAT
    assert player.party[0] is mine
    assert mine.fainted and mine.current_hp == 0
    assert player.money == 500
    assert renderer.kinds()[-1] == "end"


def test_closing_the_bag_costs_no_turn():
    player = Player(party=Party([make_creature(atk=500)]))
    wild = make_creature(species_id=74)
    session, script, renderer = _session(
        player, wild, [Decision.bag(), Decision.close_bag(), Decision.attack(1)])
    assert session.run() is Outcome.VICTORY
    assert script.prompts == [Prompt.ACTION, Prompt.BAG, Prompt.ACTION]
    assert _hits(renderer, "opponent") == []


def test_missing_stock_is_reprompted_inside_the_bag():
    player = Player(party=Party([make_creature(atk=500, current_hp=10)]))
    wild = make_creature(species_id=74)
    session, script, renderer = _session(
        player, wild,
        [Decision.bag(), Decision.use(ItemKind.POTION), Decision.close_bag(), Decision.attack(1)])
    assert session.run() is Outcome.VICTORY
    rejected = [e.data["reason"] for e in renderer.events() if e.kind == "rejected"]
    assert rejected == ["You've run out of Potion!"]
    assert script.prompts == [Prompt.ACTION, Prompt.BAG, Prompt.BAG, Prompt.ACTION]
    assert player.party[0].current_hp == 10


def test_potion_in_battle_uses_the_turn():
    player = Player(party=Party([make_creature(atk=500, current_hp=10)]))
    player.inventory.add(ItemKind.POTION, 1)
    wild = make_creature(species_id=74)
    session, _, renderer = _session(
        player, wild, [Decision.bag(), Decision.use(ItemKind.POTION), Decision.attack(1)])
    assert session.run() is Outcome.VICTORY
    assert player.inventory[ItemKind.POTION] == 0
    # healed to 30, then the wild creature hits for 5
    assert player.party[0].current_hp == 25
    assert len(_hits(renderer, "opponent")) == 1


def test_battle_needs_an_able_creature():
    player = Player(party=Party([make_creature(current_hp=0)]))
    with pytest.raises(NoEligibleCreature):
        BattleSession(player, decisions=ScriptedDecisions([]), wild=make_creature())


def test_battle_needs_exactly_one_opponent():
    player = Player(party=Party([make_creature()]))
    with pytest.raises(InvariantViolation):
        BattleSession(player, decisions=ScriptedDecisions([]))


def test_fainted_leader_is_skipped_for_the_first_able_creature():
    fainted = make_creature(current_hp=0)
    able = make_creature(atk=500)
    player = Player(party=Party([fainted, able]))
    session, _, renderer = _session(player, make_creature(species_id=74), [Decision.attack(1)])
    assert session.run() is Outcome.VICTORY
    assert _hits(renderer, "player")[0].data["damage"] == 30


def test_npc_policy_stays_in_leading_slots():
    c = make_creature(moves=(1, 3, 4, 15))
    rng = random.Random(5)
    picks = {RandomMovePolicy(2).choose_slot(c, rng) for _ in range(200)}
    assert picks == {0, 1}
    lone = make_creature(moves=(None, None, 1))
    assert RandomMovePolicy(2).choose_slot(lone, rng) == 2


def test_missing_opponent_mid_battle_is_a_defect():
    player = Player(party=Party([make_creature()]))
    session, _, _ = _session(player, make_creature(species_id=74), [])
    session.state = BattleState.RESOLVE_PLAYER_MOVE
    session.context.wild = None
    with pytest.raises(InvariantViolation):
        session.step()
