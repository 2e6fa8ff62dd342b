"""Display metadata for elemental types: Rich colours and short labels."""
from __future__ import annotations
from typing import Dict, Iterable

TYPE_COLORS_HEX: Dict[str, str] = {
    "normal": "#A8A77A",
    "fire": "#EE8130",
    "water": "#6390F0",
    "electric": "#F7D02C",
    "grass": "#7AC74C",
    "ice": "#96D9D6",
    "fighting": "#C22E28",
    "poison": "#A33EA1",
    "ground": "#E2BF65",
    "flying": "#A98FF3",
    "psychic": "#F95587",
    "bug": "#A6B91A",
    "rock": "#B6A136",
    "ghost": "#735797",
    "dragon": "#6F35FC",
    "dark": "#705746",
    "steel": "#B7B7CE",
    "fairy": "#D685AD",
}

TYPE_ABBREVIATIONS: Dict[str, str] = {
    "normal": "NRM",
    "fire": "FIR",
    "water": "WTR",
    "grass": "GRS",
    "electric": "ELE",
    "ice": "ICE",
    "fighting": "FGT",
    "poison": "PSN",
    "ground": "GRN",
    "flying": "FLY",
    "psychic": "PSY",
    "bug": "BUG",
    "rock": "RCK",
    "ghost": "GHO",
    "dragon": "DRA",
    "dark": "DRK",
    "steel": "STL",
    "fairy": "FRY",
}


def type_abbreviation(type_name: str) -> str:
    return TYPE_ABBREVIATIONS.get(type_name.lower(), type_name[:3].upper())


def rich_type_markup(type_name: str, text: str) -> str:
    """Wrap text in Rich color markup for the given type; unknown types stay plain."""
    hex_color = TYPE_COLORS_HEX.get(type_name.lower())
    if not hex_color:
        return text
    return f"[{hex_color}]{text}[/{hex_color}]"


def type_label(types: Iterable[str], sep: str = "/") -> str:
    """Coloured abbreviations, e.g. ``FIR/FLY`` for a fire/flying creature."""
    return sep.join(rich_type_markup(t, type_abbreviation(t)) for t in types)


__all__ = ['TYPE_COLORS_HEX', 'TYPE_ABBREVIATIONS', 'type_abbreviation', 'rich_type_markup', 'type_label']
