"""Runtime loader for the species and move tables.

Both tables are read-only JSON documents shipped next to this module and
validated against the schemas in ``data/schema`` on first access. Lookups are
keyed by the integer index used throughout the battle engine.
"""
from __future__ import annotations
import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple

import jsonschema

from pokeworld.core.errors import DataLoadError
from pokeworld.core.logging import logger
from pokeworld.core.paths import MOVES_FILE, SCHEMA, SPECIES_FILE

STAT_KEYS = ("hp", "atk", "def", "spatk", "spdef", "speed")

class SpeciesNotFound(KeyError):
    pass

class MoveNotFound(KeyError):
    pass

@dataclass(frozen=True)
class MoveData:
    id: int
    name: str
    type: str
    category: str  # physical | special | status
    power: int
    accuracy: int

    @property
    def display_name(self) -> str:
        return self.name.replace("-", " ").title()

@dataclass(frozen=True)
class SpeciesData:
    id: int
    name: str
    types: Tuple[str, ...]
    base_stats: Dict[str, int]
    learnset: Tuple[Tuple[int, int], ...]  # (level, move id), sorted by level

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


def _load_validated(path: Path, schema_name: str) -> List[Dict[str, Any]]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise DataLoadError(str(path), str(e)) from e
    schema = json.loads((SCHEMA / schema_name).read_text(encoding="utf-8"))
    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise DataLoadError(str(path), f"schema: {e.message}") from e
    return data


def parse_moves(raw: List[Dict[str, Any]]) -> Dict[int, MoveData]:
    return {m["id"]: MoveData(**m) for m in raw}


def parse_species(raw: List[Dict[str, Any]]) -> Dict[int, SpeciesData]:
    table: Dict[int, SpeciesData] = {}
    for s in raw:
        learn = sorted((e["level"], e["move"]) for e in s["learnset"])
        table[s["id"]] = SpeciesData(
            id=s["id"],
            name=s["name"],
            types=tuple(s["types"]),
            base_stats={k: int(s["base_stats"][k]) for k in STAT_KEYS},
            learnset=tuple(learn),
        )
    return table


@lru_cache(maxsize=None)
def _moves() -> Dict[int, MoveData]:
    table = parse_moves(_load_validated(MOVES_FILE, "moves.schema.json"))
    logger.debug("CatalogLoaded", table="moves", count=len(table))
    return table


@lru_cache(maxsize=None)
def _species() -> Dict[int, SpeciesData]:
    table = parse_species(_load_validated(SPECIES_FILE, "species.schema.json"))
    missing = {mid for s in table.values() for _, mid in s.learnset} - set(_moves())
    if missing:
        raise DataLoadError(str(SPECIES_FILE), f"unknown move ids {sorted(missing)}")
    logger.debug("CatalogLoaded", table="species", count=len(table))
    return table


def get_move(move_id: int) -> MoveData:
    try:
        return _moves()[move_id]
    except KeyError:
        raise MoveNotFound(f"Move id {move_id} not found") from None


def get_species(species_id: int) -> SpeciesData:
    try:
        return _species()[species_id]
    except KeyError:
        raise SpeciesNotFound(f"Species id {species_id} not found") from None


def all_species_ids() -> Tuple[int, ...]:
    return tuple(sorted(_species()))


def find_by_name(name: str) -> SpeciesData | None:
    name_lower = name.lower()
    for s in _species().values():
        if s.name == name_lower:
            return s
    return None


def moves_known_at(species_id: int, level: int) -> List[int]:
    """Last four level-up moves learned at or below ``level`` (oldest first).

    A species whose first move is learned above ``level`` still knows that
    first move, so every creature has at least one attack.
    """
    learnset = get_species(species_id).learnset
    learned = [mid for lvl, mid in learnset if lvl <= level]
    if not learned:
        learned = [learnset[0][1]]
    # Drop repeats but keep the most recent learn position
    seen: List[int] = []
    for mid in reversed(learned):
        if mid not in seen:
            seen.append(mid)
    return list(reversed(seen[:4]))

__all__ = [
    "MoveData", "SpeciesData", "SpeciesNotFound", "MoveNotFound", "STAT_KEYS",
    "get_move", "get_species", "all_species_ids", "find_by_name", "moves_known_at",
    "parse_moves", "parse_species",
]
