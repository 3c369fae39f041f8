from __future__ import annotations
import random
from typing import List, Optional, Tuple

from pokeworld.battle.creature import Creature
from pokeworld.battle.interfaces import BattleRenderer, DecisionSource, NpcPolicy, NullRenderer, RandomMovePolicy
from pokeworld.battle.service import BattleService
from pokeworld.battle.stores import Player
from pokeworld.core.errors import InvalidAction, InvariantViolation
from pokeworld.core.logging import logger
from pokeworld.system.settings import Settings, rng_seed_from_env
from pokeworld.world.difficulty import ORIGIN, in_world, map_distance

STARTER_CHOICES = 3

class GameContext:
    """Everything a battle may touch, passed explicitly instead of living in globals."""

    def __init__(self, settings: Optional[Settings] = None, *, decisions: DecisionSource,
                 renderer: Optional[BattleRenderer] = None, rng: Optional[random.Random] = None,
                 player: Optional[Player] = None, npc_policy: Optional[NpcPolicy] = None):
        self.settings = settings or Settings.defaults()
        self.settings.apply_log_level()
        self.rng = rng or random.Random(rng_seed_from_env())
        self.player = player or Player(money=self.settings.data.starting_money)
        self.decisions = decisions
        self.renderer = renderer or NullRenderer()
        self.npc_policy = npc_policy or RandomMovePolicy(self.settings.data.npc_move_slots)
        self.map_idx: Tuple[int, int] = ORIGIN
        self.battle_service = BattleService(self)

    # --- World ---
    def difficulty(self) -> int:
        return map_distance(self.map_idx)

    def move_to_map(self, map_idx: Tuple[int, int]):
        if not in_world(map_idx):
            raise InvalidAction(f"Map {map_idx} is outside the world")
        self.map_idx = map_idx
        logger.debug("MapChanged", map=map_idx, difficulty=self.difficulty())

    # --- Game start ---
    def starter_candidates(self) -> List[Creature]:
        return [Creature.create(1, self.rng) for _ in range(STARTER_CHOICES)]

    def choose_starter(self, candidates: List[Creature], index: int) -> Creature:
        if not 0 <= index < len(candidates):
            raise InvalidAction("Invalid Input!")
        if len(self.player.party):
            raise InvariantViolation("starter chosen twice")
        chosen = candidates[index]
        self.player.party.place(0, chosen)
        logger.info("StarterChosen", species=chosen.name)
        return chosen
