"""
Centralized path helpers for bundled data.
"""
from __future__ import annotations
from pathlib import Path

# This file lives at pokebattle/core/paths.py
PACKAGE = Path(__file__).resolve().parents[1]
DATA = PACKAGE / "data"
SPECIES_FILE = DATA / "species.json"
TRAINERS_FILE = DATA / "trainers.json"
