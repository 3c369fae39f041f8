"""Turn loop for wild and trainer battles.

The session is an explicit state machine::

    START -> PLAYER_ACTION -> RESOLVE_PLAYER_MOVE -> CHECK_OPPONENT_FAINT
          -> (ADVANCE_OPPONENT | OPPONENT_ACTION) -> RESOLVE_OPPONENT_MOVE
          -> CHECK_PLAYER_FAINT -> PLAYER_ACTION | END

Every transition is pushed to the renderer. The player blocks at
PLAYER_ACTION (and inside the bag) on the injected decision source; a
rejected choice is reported and re-prompted without giving the opponent a move.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import random
from typing import Callable, Dict, List, Optional

from pokeworld.core.errors import InsufficientStock, InvalidAction, InvariantViolation, NoEligibleCreature
from pokeworld.core.logging import logger
from .capture import flee_success
from .creature import Creature, MOVE_SLOTS
from .interfaces import (
    Action, BattleEvent, BattleRenderer, BattleView, CreatureView, Decision,
    DecisionSource, NpcPolicy, NullRenderer, Prompt, RandomMovePolicy,
)
from .items import ItemResolver
from .stores import OpponentParty, Player

class BattleState(str, Enum):
    START = "START"
    PLAYER_ACTION = "PLAYER_ACTION"
    RESOLVE_PLAYER_MOVE = "RESOLVE_PLAYER_MOVE"
    CHECK_OPPONENT_FAINT = "CHECK_OPPONENT_FAINT"
    ADVANCE_OPPONENT = "ADVANCE_OPPONENT"
    OPPONENT_ACTION = "OPPONENT_ACTION"
    RESOLVE_OPPONENT_MOVE = "RESOLVE_OPPONENT_MOVE"
    CHECK_PLAYER_FAINT = "CHECK_PLAYER_FAINT"
    END = "END"

class Outcome(str, Enum):
    VICTORY = "victory"
    DEFEAT = "defeat"
    FLED = "fled"
    CAPTURED = "captured"

@dataclass
class BattleContext:
    """Transient state for one encounter; dropped when the battle ends."""
    player: Player
    player_slot: int
    wild: Optional[Creature] = None
    trainer: Optional[OpponentParty] = None
    cursor: int = 0
    in_battle: bool = True
    flee_attempts: int = 1
    turn: int = 1

    @property
    def is_wild(self) -> bool:
        return self.trainer is None

    @property
    def opponent(self) -> Optional[Creature]:
        if self.trainer is not None:
            return self.trainer.get(self.cursor)
        return self.wild

    @property
    def active(self) -> Creature:
        c = self.player.party[self.player_slot]
        if c is None:
            raise InvariantViolation(f"active party slot {self.player_slot} is vacant")
        return c


class BattleSession:
    def __init__(self, player: Player, *, decisions: DecisionSource,
                 wild: Optional[Creature] = None, trainer: Optional[OpponentParty] = None,
                 renderer: Optional[BattleRenderer] = None, rng: Optional[random.Random] = None,
                 policy: Optional[NpcPolicy] = None):
        if (wild is None) == (trainer is None):
            raise InvariantViolation("a battle needs exactly one of a wild creature or a trainer party")
        slot = player.party.first_able()
        if slot is None:
            raise NoEligibleCreature("All of your creatures have fainted!")
        cursor = 0
        if trainer is not None:
            cursor = next((i for i, c in enumerate(trainer.members) if not c.fainted), -1)
            if cursor < 0:
                raise InvariantViolation("trainer party has no able creature")
        self.context: Optional[BattleContext] = BattleContext(
            player=player, player_slot=slot, wild=wild, trainer=trainer, cursor=cursor)
        self.decisions = decisions
        self.renderer = renderer or NullRenderer()
        self.rng = rng or random.Random()
        self.policy = policy or RandomMovePolicy()
        self.resolver = ItemResolver(player)
        self.state = BattleState.START
        self.outcome: Optional[Outcome] = None
        self._pending: List[BattleEvent] = []
        self._player_slot_choice = 0
        self._opponent_slot_choice = 0
        self._handlers: Dict[BattleState, Callable[[], BattleState]] = {
            BattleState.START: self._on_start,
            BattleState.PLAYER_ACTION: self._on_player_action,
            BattleState.RESOLVE_PLAYER_MOVE: self._on_resolve_player_move,
            BattleState.CHECK_OPPONENT_FAINT: self._on_check_opponent_faint,
            BattleState.ADVANCE_OPPONENT: self._on_advance_opponent,
            BattleState.OPPONENT_ACTION: self._on_opponent_action,
            BattleState.RESOLVE_OPPONENT_MOVE: self._on_resolve_opponent_move,
            BattleState.CHECK_PLAYER_FAINT: self._on_check_player_faint,
        }

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------
    @property
    def ctx(self) -> BattleContext:
        if self.context is None:
            raise InvariantViolation("battle context already released")
        return self.context

    def run(self) -> Outcome:
        while self.state is not BattleState.END:
            self.step()
        if self.outcome is None:
            raise InvariantViolation("battle reached END without an outcome")
        return self.outcome

    def step(self):
        if self.state is BattleState.END:
            return
        nxt = self._handlers[self.state]()
        self._transition(nxt)

    def _transition(self, nxt: BattleState):
        logger.debug("BattleTransition", src=self.state.value, dst=nxt.value, turn=self.ctx.turn)
        self.state = nxt
        self._render()
        if nxt is BattleState.END:
            self.context = None

    # ------------------------------------------------------------------
    # View / events
    # ------------------------------------------------------------------
    def _emit(self, kind: str, **data):
        self._pending.append(BattleEvent(kind, data))

    def view(self, prompt: Optional[Prompt] = None) -> BattleView:
        ctx = self.ctx
        events, self._pending = tuple(self._pending), []
        opp = ctx.opponent
        return BattleView(
            state=self.state.value,
            is_wild=ctx.is_wild,
            turn=ctx.turn,
            player=CreatureView.of(ctx.active),
            opponent=CreatureView.of(opp) if opp is not None else None,
            opponent_index=ctx.cursor,
            opponent_count=len(ctx.trainer) if ctx.trainer is not None else 1,
            prompt=prompt,
            bag=ctx.player.inventory.snapshot(),
            events=events,
            outcome=self.outcome.value if self.outcome else None,
        )

    def _require_opponent(self) -> Creature:
        opp = self.ctx.opponent
        if opp is None:
            raise InvariantViolation(f"no active opponent in state {self.state.value}")
        return opp

    def _render(self):
        self.renderer.render(self.view())

    def _ask(self, prompt: Prompt) -> Decision:
        return self.decisions.next_decision(self.view(prompt))

    def _reject(self, err: Exception):
        logger.debug("ActionRejected", reason=str(err), kind=type(err).__name__)
        self._emit("rejected", reason=str(err))
        self._render()

    def _finish(self, outcome: Outcome):
        ctx = self.ctx
        self.outcome = outcome
        ctx.in_battle = False
        self._emit("end", outcome=outcome.value)
        logger.info("BattleEnd", outcome=outcome.value, turns=ctx.turn, wild=ctx.is_wild)

    # ------------------------------------------------------------------
    # Shared mechanics
    # ------------------------------------------------------------------
    def _attack(self, attacker: Creature, defender: Creature, slot: int, side: str):
        move = attacker.move(slot)
        roll = self.rng.randrange(100)
        if roll < attacker.move_accuracy(slot):
            dmg = defender.apply_damage(attacker.move_damage(slot))
            self._emit("hit", side=side, attacker=attacker.name, defender=defender.name,
                       move=move.display_name, damage=dmg, hp=defender.current_hp)
        else:
            self._emit("miss", side=side, attacker=attacker.name, move=move.display_name)

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------
    def _on_start(self) -> BattleState:
        ctx = self.ctx
        opp = self._require_opponent()
        if ctx.is_wild:
            self._emit("wild_appeared", name=opp.name, level=opp.level, shiny=opp.shiny)
        else:
            self._emit("opponent_sent_out", name=opp.name, level=opp.level, index=ctx.cursor)
        self._emit("player_sent_out", name=ctx.active.name, level=ctx.active.level)
        logger.info("BattleStart", wild=ctx.is_wild, opponent=opp.name, level=opp.level)
        return BattleState.PLAYER_ACTION

    def _on_player_action(self) -> BattleState:
        while True:
            decision = self._ask(Prompt.ACTION)
            try:
                if decision.action is Action.ATTACK:
                    return self._choose_attack(decision)
                if decision.action is Action.OPEN_BAG:
                    nxt = self._open_bag()
                    if nxt is None:
                        continue
                    return nxt
                if decision.action is Action.FLEE:
                    return self._flee()
                raise InvalidAction("Invalid input!")
            except (InvalidAction, InsufficientStock) as e:
                self._reject(e)

    def _choose_attack(self, decision: Decision) -> BattleState:
        slot = decision.slot
        if slot is None or not 1 <= slot <= MOVE_SLOTS:
            raise InvalidAction("Choose a move from 1 to 4!")
        self.ctx.active.move(slot - 1)  # raises for an empty slot
        self._player_slot_choice = slot - 1
        return BattleState.RESOLVE_PLAYER_MOVE

    def _open_bag(self) -> Optional[BattleState]:
        """Bag sub-menu. Returns the next state, or None when the bag was closed unused."""
        ctx = self.ctx
        while True:
            decision = self._ask(Prompt.BAG)
            if decision.action is Action.CLOSE_BAG:
                return None
            try:
                if decision.action is not Action.USE_ITEM or decision.item is None:
                    raise InvalidAction("Invalid input!")
                result = self.resolver.use(decision.item, ctx.active, in_battle=True,
                                           capture_target=ctx.wild)
            except (InvalidAction, InsufficientStock) as e:
                self._reject(e)
                continue
            self._emit("item_used", item=decision.item.value, message=result.message, healed=result.healed)
            if result.capture is not None:
                captured = ctx.wild
                ctx.wild = None  # ownership moved to the party / storage
                self._emit("captured", name=captured.name if captured else "",
                           destination=result.capture.destination, index=result.capture.index)
                self._finish(Outcome.CAPTURED)
                return BattleState.END
            return BattleState.CHECK_OPPONENT_FAINT

    def _flee(self) -> BattleState:
        ctx = self.ctx
        if not ctx.is_wild:
            raise InvalidAction("There's no running from a trainer battle!")
        opp = self._require_opponent()
        ok = flee_success(self.rng, ctx.active.stats.speed, opp.stats.speed, ctx.flee_attempts)
        ctx.flee_attempts += 1
        if ok:
            self._emit("fled")
            self._finish(Outcome.FLED)
            return BattleState.END
        self._emit("flee_failed", attempts=ctx.flee_attempts - 1)
        return BattleState.CHECK_OPPONENT_FAINT

    def _on_resolve_player_move(self) -> BattleState:
        ctx = self.ctx
        opp = self._require_opponent()
        self._attack(ctx.active, opp, self._player_slot_choice, "player")
        return BattleState.CHECK_OPPONENT_FAINT

    def _on_check_opponent_faint(self) -> BattleState:
        ctx = self.ctx
        opp = self._require_opponent()
        if not opp.fainted:
            return BattleState.OPPONENT_ACTION
        self._emit("fainted", side="opponent", name=opp.name)
        if ctx.is_wild:
            self._finish(Outcome.VICTORY)
            return BattleState.END
        return BattleState.ADVANCE_OPPONENT

    def _on_advance_opponent(self) -> BattleState:
        ctx = self.ctx
        party = ctx.trainer
        if party is None:
            raise InvariantViolation("opponent advance outside a trainer battle")
        ctx.cursor += 1
        while ctx.cursor < len(party) and party.members[ctx.cursor].fainted:
            ctx.cursor += 1
        nxt = party.get(ctx.cursor)
        if nxt is None:
            party.defeated = True
            ctx.player.credit(party.money_given)
            self._emit("reward", money=party.money_given, total=ctx.player.money)
            self._finish(Outcome.VICTORY)
            return BattleState.END
        self._emit("opponent_sent_out", name=nxt.name, level=nxt.level, index=ctx.cursor)
        ctx.turn += 1
        return BattleState.PLAYER_ACTION

    def _on_opponent_action(self) -> BattleState:
        opp = self._require_opponent()
        self._opponent_slot_choice = self.policy.choose_slot(opp, self.rng)
        return BattleState.RESOLVE_OPPONENT_MOVE

    def _on_resolve_opponent_move(self) -> BattleState:
        ctx = self.ctx
        opp = self._require_opponent()
        self._attack(opp, ctx.active, self._opponent_slot_choice, "opponent")
        return BattleState.CHECK_PLAYER_FAINT

    def _on_check_player_faint(self) -> BattleState:
        ctx = self.ctx
        if ctx.active.fainted:
            self._emit("fainted", side="player", name=ctx.active.name)
            self._finish(Outcome.DEFEAT)
            return BattleState.END
        ctx.turn += 1
        return BattleState.PLAYER_ACTION

__all__ = ["BattleSession", "BattleContext", "BattleState", "Outcome"]
