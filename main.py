#!/usr/bin/env python3
"""
Pokerus duel simulator.

Thin wrapper around the command line interface in ``pokerus.cli``.

To run: python main.py duel chimchar turtwig --seed 7
"""

from pokerus.cli import run

if __name__ == "__main__":
    run()
