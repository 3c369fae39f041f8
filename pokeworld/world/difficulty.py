"""Difficulty signal: Manhattan distance of a map from the world's origin map."""
from __future__ import annotations
from typing import Tuple

WORLD_SIZE = 401
ORIGIN: Tuple[int, int] = (WORLD_SIZE // 2, WORLD_SIZE // 2)

def map_distance(map_idx: Tuple[int, int], origin: Tuple[int, int] = ORIGIN) -> int:
    x, y = map_idx
    return abs(x - origin[0]) + abs(y - origin[1])

def in_world(map_idx: Tuple[int, int]) -> bool:
    x, y = map_idx
    return 0 <= x < WORLD_SIZE and 0 <= y < WORLD_SIZE

__all__ = ["WORLD_SIZE", "ORIGIN", "map_distance", "in_world"]
