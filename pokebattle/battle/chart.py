"""Type effectiveness chart.

The table maps an attacking type to the multipliers it receives against each
defending type. Pairs missing from the table are neutral (x1).
"""
from __future__ import annotations
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

_TYPE_EFFECTIVENESS: Dict[str, Dict[str, float]] = {
    "normal":   {"rock": 0.5, "ghost": 0.0, "steel": 0.5},
    "fire":     {"fire": 0.5, "water": 0.5, "grass": 2.0, "ice": 2.0, "bug": 2.0, "rock": 0.5, "dragon": 0.5, "steel": 2.0},
    "water":    {"fire": 2.0, "water": 0.5, "grass": 0.5, "ground": 2.0, "rock": 2.0, "dragon": 0.5},
    "electric": {"water": 2.0, "electric": 0.5, "grass": 0.5, "ground": 0.0, "flying": 2.0, "dragon": 0.5},
    "grass":    {"fire": 0.5, "water": 2.0, "grass": 0.5, "poison": 0.5, "ground": 2.0, "flying": 0.5, "bug": 0.5, "rock": 2.0, "dragon": 0.5, "steel": 0.5},
    "ice":      {"fire": 0.5, "water": 0.5, "grass": 2.0, "ice": 0.5, "ground": 2.0, "flying": 2.0, "dragon": 2.0, "steel": 0.5},
    "fighting": {"normal": 2.0, "ice": 2.0, "poison": 0.5, "flying": 0.5, "psychic": 0.5, "bug": 0.5, "rock": 2.0, "ghost": 0.0, "dark": 2.0, "steel": 2.0, "fairy": 0.5},
    "poison":   {"grass": 2.0, "poison": 0.5, "ground": 0.5, "rock": 0.5, "ghost": 0.5, "steel": 0.0, "fairy": 2.0},
    "ground":   {"fire": 2.0, "electric": 2.0, "grass": 0.5, "poison": 2.0, "flying": 0.0, "bug": 0.5, "rock": 2.0, "steel": 2.0},
    "flying":   {"electric": 0.5, "grass": 2.0, "fighting": 2.0, "bug": 2.0, "rock": 0.5, "steel": 0.5},
    "psychic":  {"fighting": 2.0, "poison": 2.0, "psychic": 0.5, "dark": 0.0, "steel": 0.5},
    "bug":      {"fire": 0.5, "grass": 2.0, "fighting": 0.5, "poison": 0.5, "flying": 0.5, "psychic": 2.0, "ghost": 0.5, "dark": 2.0, "steel": 0.5, "fairy": 0.5},
    "rock":     {"fire": 2.0, "ice": 2.0, "fighting": 0.5, "ground": 0.5, "flying": 2.0, "bug": 2.0, "steel": 0.5},
    "ghost":    {"normal": 0.0, "psychic": 2.0, "ghost": 2.0, "dark": 0.5},
    "dragon":   {"dragon": 2.0, "steel": 0.5, "fairy": 0.0},
    "dark":     {"fighting": 0.5, "psychic": 2.0, "ghost": 2.0, "dark": 0.5, "fairy": 0.5},
    "steel":    {"fire": 0.5, "water": 0.5, "electric": 0.5, "ice": 2.0, "rock": 2.0, "steel": 0.5, "fairy": 2.0},
    "fairy":    {"fire": 0.5, "fighting": 2.0, "poison": 0.5, "dragon": 2.0, "dark": 2.0, "steel": 0.5},
}

NO_EFFECT_MESSAGE = "It doesn't affect the opponent!"
NOT_VERY_EFFECTIVE_MESSAGE = "It's not very effective..."
SUPER_EFFECTIVE_MESSAGE = "It's super effective!"


class TypeChart:
    """Immutable attacking-type -> defending-type multiplier table."""

    def __init__(self, table: Mapping[str, Mapping[str, float]]):
        self._table: Mapping[str, Mapping[str, float]] = MappingProxyType({
            atk.lower(): MappingProxyType({d.lower(): float(m) for d, m in row.items()})
            for atk, row in table.items()
        })

    @property
    def types(self) -> Tuple[str, ...]:
        seen = dict.fromkeys(self._table)
        for row in self._table.values():
            seen.update(dict.fromkeys(row))
        return tuple(seen)

    def single(self, attack_type: str, defending_type: str) -> float:
        return self._table.get(attack_type.lower(), {}).get(defending_type.lower(), 1.0)

    def multiplier(self, attack_type: str, defending_types: Iterable[str]) -> float:
        mult = 1.0
        for t in defending_types:
            mult *= self.single(attack_type, t)
        return mult

    def __repr__(self) -> str:
        return f"TypeChart({len(self._table)} attacking types)"


DEFAULT_TYPE_CHART = TypeChart(_TYPE_EFFECTIVENESS)


def effectiveness(attack_type: str, defending_types: Iterable[str], chart: Optional[TypeChart] = None) -> float:
    return (chart or DEFAULT_TYPE_CHART).multiplier(attack_type, defending_types)


def effectiveness_message(multiplier: float) -> Optional[str]:
    if multiplier == 0:
        return NO_EFFECT_MESSAGE
    if multiplier < 1:
        return NOT_VERY_EFFECTIVE_MESSAGE
    if multiplier > 1:
        return SUPER_EFFECTIVE_MESSAGE
    return None


__all__ = [
    "TypeChart", "DEFAULT_TYPE_CHART", "effectiveness", "effectiveness_message",
    "NO_EFFECT_MESSAGE", "NOT_VERY_EFFECTIVE_MESSAGE", "SUPER_EFFECTIVE_MESSAGE",
]
