import io

from rich.console import Console

from pokeworld import cli
from pokeworld.battle.interfaces import Action, BattleEvent, Decision, Prompt, ScriptedDecisions
from pokeworld.battle.session import BattleSession, Outcome
from pokeworld.battle.stores import Party, Player
from pokeworld.data.items import ItemKind
from pokeworld.ui.battle import KeyboardDecisions, RichBattleRenderer, describe, hp_bar
from helpers import StubRng, make_creature


def _console():
    return Console(file=io.StringIO(), width=100, color_system=None)


def _view(prompt):
    player = Player(party=Party([make_creature()]))
    session = BattleSession(player, decisions=ScriptedDecisions([]), wild=make_creature(species_id=74))
    return session.view(prompt)


def test_hp_bar_colours():
    assert "green" in hp_bar(30, 30)
    assert "yellow" in hp_bar(10, 30)
    assert "red" in hp_bar(5, 30)
    assert hp_bar(0, 30) == "[red]FAINTED[/red]"


def test_describe_events():
    hit = BattleEvent("hit", {"side": "opponent", "attacker": "Geodude", "move": "Tackle", "damage": 7})
    assert describe(hit) == "The foe's Geodude used Tackle and dealt 7 damage!"
    assert describe(BattleEvent("fled")) == "Got away safely!"
    assert describe(BattleEvent("captured", {"name": "Geodude"})) is None


def test_keyboard_actions():
    keys = iter(["2", "b", "r", "?"])
    src = KeyboardDecisions(lambda _: next(keys), out=_console())
    view = _view(Prompt.ACTION)
    assert src.next_decision(view) == Decision.attack(2)
    assert src.next_decision(view).action is Action.OPEN_BAG
    assert src.next_decision(view).action is Action.FLEE
    assert src.next_decision(view).action is Action.CONFIRM


def test_keyboard_bag():
    keys = iter(["2", "<", "9"])
    src = KeyboardDecisions(lambda _: next(keys), out=_console())
    view = _view(Prompt.BAG)
    assert src.next_decision(view) == Decision.use(ItemKind.POTION)
    assert src.next_decision(view).action is Action.CLOSE_BAG
    assert src.next_decision(view).action is Action.CONFIRM


def test_rich_renderer_draws_a_battle():
    out = _console()
    player = Player(party=Party([make_creature(atk=500)]))
    session = BattleSession(player, decisions=ScriptedDecisions([Decision.attack(1)]),
                            wild=make_creature(species_id=74), renderer=RichBattleRenderer(out), rng=StubRng())
    assert session.run() is Outcome.VICTORY
    text = out.file.getvalue()
    assert "A wild Geodude (Lv10) appeared!" in text
    assert "Geodude has fainted!" in text
    assert "You won the battle!" in text
    assert "YOUR CREATURE" in text


def test_cli_session_without_travel(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("POKEWORLD_RNG_SEED", "7")
    keys = iter(["1", "p", "c", "P", "q"])
    cli.run(read=lambda _: next(keys))
