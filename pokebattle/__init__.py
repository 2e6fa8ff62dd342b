"""Turn-based creature battle engine.

Public entry points live in :mod:`pokebattle.battle`.
"""
from __future__ import annotations

__version__ = "0.1.0"
