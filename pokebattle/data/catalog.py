"""Runtime loader for the species catalog.

Provides cached access to the bundled ``species.json`` (PokeAPI-style stat
names). Callers that want their own catalog pass a path or build
:class:`~pokebattle.battle.models.Species` objects directly.
"""
from __future__ import annotations
import json
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple, Union

from pokebattle.core.errors import DataLoadError, PokebattleError
from pokebattle.core.logging import logger
from pokebattle.core.paths import SPECIES_FILE
from pokebattle.battle.models import Species


class SpeciesNotFound(PokebattleError):
    pass


def _read_species(path: Path) -> Tuple[Species, ...]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise DataLoadError(str(path), str(e)) from e
    if not isinstance(raw, list):
        raise DataLoadError(str(path), "expected a JSON list of species")
    entries = []
    for i, item in enumerate(raw):
        try:
            entries.append(Species.from_dict(item))
        except (KeyError, TypeError, ValueError) as e:
            raise DataLoadError(str(path), f"entry {i}: {e!r}") from e
    logger.debug("CatalogLoaded", path=str(path), species=len(entries))
    return tuple(entries)


@lru_cache(maxsize=None)
def _bundled() -> Tuple[Species, ...]:
    return _read_species(SPECIES_FILE)


def load_catalog(path: Optional[Union[str, Path]] = None) -> Tuple[Species, ...]:
    if path is None:
        return _bundled()
    return _read_species(Path(path))


def get_species(identifier: Union[int, str], catalog: Optional[Tuple[Species, ...]] = None) -> Species:
    """Look up by dex id (int or digit string) or case-insensitive name."""
    entries = catalog if catalog is not None else load_catalog()
    s = str(identifier).strip().lower()
    if not s:
        raise SpeciesNotFound("Empty species identifier")
    for sp in entries:
        if (s.isdigit() and sp.id == int(s)) or sp.name == s:
            return sp
    raise SpeciesNotFound(f"Unknown species '{identifier}'")


__all__ = ["load_catalog", "get_species", "SpeciesNotFound"]
