"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class PokeworldError(Exception):
    pass

class DataLoadError(PokeworldError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class InvalidAction(PokeworldError):
    """Player picked something that cannot be done right now (re-prompt, no turn used)."""

class InsufficientStock(PokeworldError):
    def __init__(self, item: str):
        super().__init__(f"You've run out of {item}!")
        self.item = item

class NoEligibleCreature(PokeworldError):
    """Every party creature is fainted; the player must heal before battling."""

class InvariantViolation(PokeworldError):
    """Programming defect: state the engine never allows."""
