"""
Centralized path helpers.
"""
from __future__ import annotations
from pathlib import Path

# This file lives at pokeworld/core/paths.py
PACKAGE = Path(__file__).resolve().parents[1]
DATA = PACKAGE / "data"
SCHEMA = DATA / "schema"
SPECIES_FILE = DATA / "species.json"
MOVES_FILE = DATA / "moves.json"
