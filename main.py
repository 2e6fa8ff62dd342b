#!/usr/bin/env python3
"""
Pokebattle - terminal battle demo.

Thin wrapper around :mod:`pokebattle.cli`; the engine lives in the
``pokebattle.battle`` package.

To run: python main.py --auto
"""

from pokebattle.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
