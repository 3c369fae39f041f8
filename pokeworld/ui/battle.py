"""Terminal battle UI.

:class:`RichBattleRenderer` draws the HUD (opponent / player panels with HP
bars) plus the messages for each batch of battle events.
:class:`KeyboardDecisions` reads one line per decision:

  1-4  attack with that move slot
  b    open the bag (then 1-8 to use an item, < to close it)
  r    run (wild battles only)
"""
from __future__ import annotations
from typing import Callable, Optional

from rich.align import Align
from rich.box import ROUNDED
from rich.columns import Columns
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from pokeworld.battle.interfaces import BattleEvent, BattleView, CreatureView, Decision, Prompt
from pokeworld.data.items import BAG_ORDER

console = Console()

def hp_bar(current: int, max_hp: int, width: int = 20) -> str:
    if max_hp <= 0 or current <= 0:
        return "[red]FAINTED[/red]"
    percent = current / max_hp
    filled = max(1, int(percent * width))
    if percent > 0.5:
        color = "green"
    elif percent > 0.25:
        color = "yellow"
    else:
        color = "red"
    bar = "█" * filled + "░" * (width - filled)
    return f"[{color}]{bar}[/{color}]"


def describe(event: BattleEvent) -> Optional[str]:
    d = event.data
    k = event.kind
    if k == "wild_appeared":
        star = "[yellow]★[/yellow] " if d.get("shiny") else ""
        return f"A wild {star}{d['name']} (Lv{d['level']}) appeared!"
    if k == "opponent_sent_out":
        return f"Your opponent sent out {d['name']} (Lv{d['level']})!"
    if k == "player_sent_out":
        return f"You sent out {d['name']}!"
    if k == "hit":
        who = "You" if d["side"] == "player" else f"The foe's {d['attacker']}"
        return f"{who} used {d['move']} and dealt {d['damage']} damage!"
    if k == "miss":
        who = d["attacker"] if d["side"] == "player" else f"The foe's {d['attacker']}"
        return f"{who} used {d['move']}... but it missed!"
    if k == "fainted":
        return f"[bold]{d['name']} has fainted![/bold]"
    if k == "flee_failed":
        return "You couldn't get away!"
    if k == "fled":
        return "Got away safely!"
    if k == "item_used":
        return d["message"]
    if k == "captured":
        return None  # item_used already announced it
    if k == "reward":
        return f"You received ${d['money']}! (Money: ${d['total']})"
    if k == "rejected":
        return f"[red]{d['reason']}[/red]"
    if k == "end":
        return {
            "victory": "[green]You won the battle![/green]",
            "defeat": "[red]You blacked out...[/red]",
            "fled": None,
            "captured": "[green]The battle is over.[/green]",
        }.get(d["outcome"])
    return None


def _panel(title: str, c: CreatureView) -> Panel:
    star = " ★" if c.shiny else ""
    types = "/".join(t.upper()[:3] for t in c.types)
    body = (f"[bold bright_white]{c.name}{star} Lv{c.level}[/bold bright_white]\n"
            f"{escape('[' + types + ']')}\nHP: {c.current_hp}/{c.max_hp}\n{hp_bar(c.current_hp, c.max_hp)}")
    return Panel(body, title=f"[bold]{title}[/bold]", box=ROUNDED, width=36, padding=(0, 1))


class RichBattleRenderer:
    def __init__(self, out: Optional[Console] = None):
        self.console = out or console

    def render(self, view: BattleView) -> None:
        for ev in view.events:
            line = describe(ev)
            if line:
                self.console.print(line)
        if view.state in ("PLAYER_ACTION", "END") and view.player is not None:
            panels = []
            if view.opponent is not None:
                title = "WILD" if view.is_wild else f"OPPONENT {view.opponent_index + 1}/{view.opponent_count}"
                panels.append(_panel(title, view.opponent))
            panels.append(_panel("YOUR CREATURE", view.player))
            self.console.print(Align.center(Columns(panels, padding=(0, 4))))


class KeyboardDecisions:
    def __init__(self, read: Callable[[str], str] = input, out: Optional[Console] = None):
        self.read = read
        self.console = out or console

    def _action_menu(self, view: BattleView):
        if view.player is not None:
            moves = "  ".join(f"{i + 1}. {m or '-'}" for i, m in enumerate(view.player.moves))
            self.console.print(f"[bold]Moves:[/bold] {moves}")
        run = "  [r] run" if view.is_wild else ""
        self.console.print(f"[1-4] attack  [b] bag{run}")

    def _bag_menu(self, view: BattleView):
        rows = [f"{i + 1}. {k.display_name}: {view.bag.get(k, 0)}" for i, k in enumerate(BAG_ORDER)]
        self.console.print(Panel("\n".join(rows), title="Backpack", box=ROUNDED, width=36))
        self.console.print("Choose item, or '<' to close the bag")

    def next_decision(self, view: BattleView) -> Decision:
        if view.prompt is Prompt.BAG:
            self._bag_menu(view)
            key = self.read("> ").strip().lower()
            if key == "<":
                return Decision.close_bag()
            if key.isdigit() and 1 <= int(key) <= len(BAG_ORDER):
                return Decision.use(BAG_ORDER[int(key) - 1])
            return Decision.confirm()
        self._action_menu(view)
        key = self.read("> ").strip().lower()
        if key.isdigit():
            return Decision.attack(int(key))
        if key == "b":
            return Decision.bag()
        if key == "r":
            return Decision.flee()
        return Decision.confirm()

__all__ = ["RichBattleRenderer", "KeyboardDecisions", "hp_bar", "describe"]
