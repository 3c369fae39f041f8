"""Battle entry points used by the overworld controller.

Every operation runs synchronously to completion; a battle blocks on the
context's decision source until it ends.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Union

from pokeworld.core.errors import InsufficientStock, InvalidAction, InvariantViolation, NoEligibleCreature
from pokeworld.core.logging import logger
from pokeworld.data.items import ItemKind
from pokeworld.encounters.generator import generate_wild
from .creature import Creature
from .items import ItemResolver, ItemResult
from .session import BattleSession, Outcome

if TYPE_CHECKING:
    from pokeworld.game.context import GameContext
    from pokeworld.world.npc import Trainer

class BattleService:
    def __init__(self, ctx: "GameContext"):
        self.ctx = ctx
        self.last_session: Optional[BattleSession] = None

    def _ensure_able(self):
        if not self.ctx.player.party.can_fight():
            logger.warn("BattleRefusedNoEligibleCreature")
            raise NoEligibleCreature("All of your creatures have fainted! Visit a Pokémon Center.")

    def _session(self, **opponent) -> BattleSession:
        session = BattleSession(
            self.ctx.player,
            decisions=self.ctx.decisions,
            renderer=self.ctx.renderer,
            rng=self.ctx.rng,
            policy=self.ctx.npc_policy,
            **opponent,
        )
        self.last_session = session
        return session

    def start_wild_encounter(self, creature: Creature) -> Outcome:
        self._ensure_able()
        return self._session(wild=creature).run()

    def start_trainer_battle(self, trainer: "Trainer") -> Outcome:
        self._ensure_able()
        if not trainer.initiates_battle:
            raise InvalidAction(f"{trainer.name} doesn't want to battle.")
        party = trainer.ensure_party(self.ctx.difficulty(), self.ctx.rng)
        logger.info("TrainerBattle", trainer=trainer.name, size=len(party), reward=party.money_given)
        return self._session(trainer=party).run()

    def encounter_wild(self) -> Optional[Outcome]:
        """Roll a wild creature for the current map and battle it (None if the party can't fight)."""
        if not self.ctx.player.party.can_fight():
            return None
        return self.start_wild_encounter(generate_wild(self.ctx.difficulty(), self.ctx.rng))

    def use_item_outside_battle(self, item: ItemKind, target: Union[Creature, int, None] = 0) -> ItemResult:
        """Use a bag item from the overworld menu; ``target`` is a creature or party slot."""
        party = self.ctx.player.party
        if isinstance(target, int):
            target = party[target]
        elif target is not None and target not in party:
            raise InvariantViolation("item target is not in the party")
        try:
            return ItemResolver(self.ctx.player).use(item, target, in_battle=False)
        except (InvalidAction, InsufficientStock) as e:
            logger.debug("ItemRejected", item=item.value, reason=str(e))
            return ItemResult(item, False, str(e))

__all__ = ["BattleService"]
