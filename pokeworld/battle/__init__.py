"""
Battle package.
- creature.py (Creature model: stats, HP, moves)
- stores.py (party slots, bag, PC storage, trainer rosters)
- items.py / capture.py (item effects, capture transfer, flee odds)
- session.py (turn state machine)
- service.py (overworld entry points; import it directly)
"""
from .session import BattleSession, Outcome
__all__ = ["BattleSession", "Outcome"]
