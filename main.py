#!/usr/bin/env python3
"""
Pokéworld - terminal creature battles.

Thin wrapper around the overworld loop in :mod:`pokeworld.cli`.

To run: python main.py
"""

from pokeworld.cli import run

if __name__ == "__main__":
    run()
