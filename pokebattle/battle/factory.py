"""Factory helpers for constructing battle participants from species data.

Moves are not stored in the catalog; each participant gets a fixed set derived
from its types.
"""
from __future__ import annotations
from typing import Iterable, List, Union
from .models import BattlePokemon, Move, MoveCategory, Species

MOVE_PP = 15


def _move_specs(species: Species) -> List[tuple]:
    primary = species.types[0]
    secondary = species.types[1] if len(species.types) > 1 else None
    specs = [
        (f"{primary.capitalize()} Strike", primary, 80, 100, MoveCategory.PHYSICAL),
        (f"{primary.capitalize()} Blast", primary, 90, 85, MoveCategory.SPECIAL),
    ]
    if secondary:
        specs.append((f"{secondary.capitalize()} Attack", secondary, 75, 95, MoveCategory.PHYSICAL))
    specs.append(("Quick Attack", "normal", 40, 100, MoveCategory.PHYSICAL))
    return specs


def generate_moves(species: Species) -> List[Move]:
    moves = [
        Move(name=name, type=mtype, power=power, accuracy=acc, category=cat, max_pp=MOVE_PP, pp=MOVE_PP)
        for name, mtype, power, acc, cat in _move_specs(species)
    ]
    return moves[:4]


def participant_from_species(species: Species) -> BattlePokemon:
    max_hp = species.stats.hp
    return BattlePokemon(species=species, max_hp=max_hp, current_hp=max_hp, moves=generate_moves(species))


def to_participants(roster: Iterable[Union[Species, BattlePokemon]]) -> List[BattlePokemon]:
    return [m if isinstance(m, BattlePokemon) else participant_from_species(m) for m in roster]


__all__ = ["generate_moves", "participant_from_species", "to_participants", "MOVE_PP"]
