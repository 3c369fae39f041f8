"""Trainer NPCs as seen by the battle layer.

The overworld resolves what an NPC is once, at contact time, through its
:class:`NpcKind` tag. The battle engine only ever receives the opponent party.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import random
from typing import Optional

from pokeworld.battle.stores import OpponentParty
from pokeworld.core.logging import logger
from pokeworld.encounters.generator import generate_trainer_party

class NpcKind(str, Enum):
    HOSTILE = "hostile"   # walks up and challenges the player
    STATIC = "static"     # never initiates a battle

@dataclass
class Trainer:
    name: str
    kind: NpcKind = NpcKind.HOSTILE
    party: Optional[OpponentParty] = None
    money_given: Optional[int] = None

    @property
    def defeated(self) -> bool:
        return self.party is not None and self.party.defeated

    @property
    def initiates_battle(self) -> bool:
        return self.kind is NpcKind.HOSTILE and not self.defeated

    def ensure_party(self, difficulty: int, rng: random.Random) -> OpponentParty:
        """Generate the roster on first contact; later contacts reuse it as left.

        Members fainted in an earlier battle stay fainted; a roster with no
        able member is a defeated trainer and never reaches this point.
        """
        if self.party is None:
            self.party = generate_trainer_party(difficulty, rng, money_given=self.money_given)
            logger.debug("TrainerPartyAttached", trainer=self.name, size=len(self.party))
        return self.party

__all__ = ["NpcKind", "Trainer"]
