"""Damage formula.

Level is fixed at 50 for every participant; the random factor is drawn
uniformly from [0.85, 1.0] per call.
"""
from __future__ import annotations
import math
import random
from typing import Optional, Tuple
from pokebattle.core.rng import RandomSource
from .chart import DEFAULT_TYPE_CHART, TypeChart
from .models import BattlePokemon, Move, MoveCategory

LEVEL = 50
STAB = 1.5
RANDOM_MIN = 0.85
RANDOM_MAX = 1.0

_default_rng = random.Random()


def attack_defense_stats(attacker: BattlePokemon, defender: BattlePokemon, move: Move) -> Tuple[int, int]:
    if move.category is MoveCategory.PHYSICAL:
        return attacker.stats.attack, defender.stats.defense
    return attacker.stats.sp_atk, defender.stats.sp_def


def stab_multiplier(attacker: BattlePokemon, move: Move) -> float:
    return STAB if move.type.lower() in attacker.types else 1.0


def base_damage(attacker: BattlePokemon, defender: BattlePokemon, move: Move) -> float:
    atk_stat, def_stat = attack_defense_stats(attacker, defender, move)
    return ((2 * LEVEL / 5 + 2) * move.power * atk_stat / def_stat) / 50 + 2


def _finish(base: float, stab: float, eff: float, rand: float) -> int:
    return max(1, math.floor(base * stab * eff * rand))


def calculate_damage(attacker: BattlePokemon, defender: BattlePokemon, move: Move,
                     rng: Optional[RandomSource] = None, chart: Optional[TypeChart] = None) -> int:
    """Damage dealt by ``move``; never less than 1.

    Accuracy is not rolled here; callers decide whether the move connects.
    """
    chart = chart or DEFAULT_TYPE_CHART
    eff = chart.multiplier(move.type, defender.types)
    rand = (rng or _default_rng).uniform(RANDOM_MIN, RANDOM_MAX)
    return _finish(base_damage(attacker, defender, move), stab_multiplier(attacker, move), eff, rand)


def damage_range(attacker: BattlePokemon, defender: BattlePokemon, move: Move,
                 chart: Optional[TypeChart] = None) -> Tuple[int, int]:
    """Lowest and highest damage ``calculate_damage`` can return for these inputs."""
    chart = chart or DEFAULT_TYPE_CHART
    eff = chart.multiplier(move.type, defender.types)
    base = base_damage(attacker, defender, move)
    stab = stab_multiplier(attacker, move)
    return _finish(base, stab, eff, RANDOM_MIN), _finish(base, stab, eff, RANDOM_MAX)


__all__ = [
    "calculate_damage", "damage_range", "base_damage", "stab_multiplier",
    "attack_defense_stats", "LEVEL", "STAB", "RANDOM_MIN", "RANDOM_MAX",
]
