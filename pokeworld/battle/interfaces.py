"""Boundaries the battle engine talks through.

- :class:`DecisionSource`: blocking "what does the player do next".
- :class:`BattleRenderer`: receives a :class:`BattleView` after every state
  transition. The engine supplies values and event records; formatting is the
  renderer's job.
- :class:`NpcPolicy`: picks the opponent's move slot each turn.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import random
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from pokeworld.data.items import ItemKind
from .creature import Creature, MOVE_SLOTS

class Action(str, Enum):
    ATTACK = "attack"
    OPEN_BAG = "open_bag"
    FLEE = "flee"
    USE_ITEM = "use_item"
    CLOSE_BAG = "close_bag"
    CONFIRM = "confirm"

class Prompt(str, Enum):
    ACTION = "action"
    BAG = "bag"

@dataclass(frozen=True)
class Decision:
    action: Action
    slot: Optional[int] = None      # 1..4 for ATTACK
    item: Optional[ItemKind] = None  # for USE_ITEM

    @classmethod
    def attack(cls, slot: int) -> "Decision":
        return cls(Action.ATTACK, slot=slot)

    @classmethod
    def bag(cls) -> "Decision":
        return cls(Action.OPEN_BAG)

    @classmethod
    def flee(cls) -> "Decision":
        return cls(Action.FLEE)

    @classmethod
    def use(cls, item: ItemKind) -> "Decision":
        return cls(Action.USE_ITEM, item=item)

    @classmethod
    def close_bag(cls) -> "Decision":
        return cls(Action.CLOSE_BAG)

    @classmethod
    def confirm(cls) -> "Decision":
        return cls(Action.CONFIRM)

@dataclass(frozen=True)
class BattleEvent:
    kind: str
    data: Dict[str, Any] = field(default_factory=dict)

@dataclass(frozen=True)
class CreatureView:
    name: str
    level: int
    types: Tuple[str, ...]
    current_hp: int
    max_hp: int
    fainted: bool
    shiny: bool
    moves: Tuple[str, ...]

    @classmethod
    def of(cls, c: Creature) -> "CreatureView":
        return cls(
            name=c.name, level=c.level, types=tuple(c.types), current_hp=c.current_hp,
            max_hp=c.max_hp, fainted=c.fainted, shiny=c.shiny,
            moves=tuple(c.move_name(i) for i in range(MOVE_SLOTS)),
        )

@dataclass(frozen=True)
class BattleView:
    state: str
    is_wild: bool
    turn: int
    player: Optional[CreatureView]
    opponent: Optional[CreatureView]
    opponent_index: int
    opponent_count: int
    prompt: Optional[Prompt]
    bag: Dict[ItemKind, int]
    events: Tuple[BattleEvent, ...]
    outcome: Optional[str] = None


class DecisionSource(Protocol):
    def next_decision(self, view: BattleView) -> Decision: ...

class BattleRenderer(Protocol):
    def render(self, view: BattleView) -> None: ...

class NpcPolicy(Protocol):
    def choose_slot(self, creature: Creature, rng: random.Random) -> int: ...


class RandomMovePolicy:
    """Uniform pick among assigned moves within the first ``slot_range`` slots."""

    def __init__(self, slot_range: int = 2):
        self.slot_range = max(1, min(slot_range, MOVE_SLOTS))

    def choose_slot(self, creature: Creature, rng: random.Random) -> int:
        slots = [s for s in creature.assigned_slots() if s < self.slot_range]
        if not slots:
            slots = creature.assigned_slots()
        return rng.choice(slots)


class ScriptedDecisions:
    """Feeds a fixed list of decisions; used by tests and the debug simulator."""

    def __init__(self, decisions: Iterable[Decision]):
        self._queue: List[Decision] = list(decisions)
        self.prompts: List[Prompt] = []

    def next_decision(self, view: BattleView) -> Decision:
        if view.prompt is not None:
            self.prompts.append(view.prompt)
        if not self._queue:
            raise RuntimeError("scripted decisions exhausted")
        return self._queue.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._queue)


class NullRenderer:
    def render(self, view: BattleView) -> None:
        return None


class RecordingRenderer:
    """Keeps every view it was shown."""

    def __init__(self):
        self.views: List[BattleView] = []

    def render(self, view: BattleView) -> None:
        self.views.append(view)

    def events(self) -> List[BattleEvent]:
        out: List[BattleEvent] = []
        for v in self.views:
            out.extend(v.events)
        return out

    def kinds(self) -> List[str]:
        return [e.kind for e in self.events()]

__all__ = [
    "Action", "Prompt", "Decision", "BattleEvent", "CreatureView", "BattleView",
    "DecisionSource", "BattleRenderer", "NpcPolicy", "RandomMovePolicy",
    "ScriptedDecisions", "NullRenderer", "RecordingRenderer",
]
