"""Trainer profiles for opponent team generation."""

from __future__ import annotations
import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from pokebattle.core.errors import DataLoadError, PokebattleError
from pokebattle.core.logging import logger
from pokebattle.core.paths import TRAINERS_FILE
from pokebattle.battle.teams import Difficulty, TeamStrategy


class TrainerNotFound(PokebattleError):
    pass


@dataclass(frozen=True)
class TrainerProfile:
    """Configuration consumed once by the team generator."""
    name: str
    title: str
    strategy: TeamStrategy
    difficulty: Difficulty
    team_size: int

    @property
    def display_name(self) -> str:
        return f"{self.title} {self.name}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TrainerProfile':
        return cls(
            name=data['name'],
            title=data.get('title', 'Trainer'),
            strategy=TeamStrategy(data.get('strategy', 'random')),
            difficulty=Difficulty(data.get('difficulty', 'medium')),
            team_size=int(data.get('team_size', 6)),
        )


def _read_trainers(path: Path) -> Tuple[TrainerProfile, ...]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise DataLoadError(str(path), str(e)) from e
    trainers = []
    for item in raw:
        try:
            trainers.append(TrainerProfile.from_dict(item))
        except (KeyError, TypeError, ValueError) as e:
            logger.warn("TrainerSkipped", path=str(path), error=repr(e))
    return tuple(trainers)


@lru_cache(maxsize=None)
def _bundled() -> Tuple[TrainerProfile, ...]:
    return _read_trainers(TRAINERS_FILE)


def load_trainers(path: Optional[Union[str, Path]] = None) -> Tuple[TrainerProfile, ...]:
    if path is None:
        return _bundled()
    return _read_trainers(Path(path))


def get_trainer(name: str, trainers: Optional[Tuple[TrainerProfile, ...]] = None) -> TrainerProfile:
    wanted = name.strip().lower()
    for t in (trainers if trainers is not None else load_trainers()):
        if t.name.lower() == wanted:
            return t
    raise TrainerNotFound(f"Unknown trainer '{name}'")


__all__ = ["TrainerProfile", "TrainerNotFound", "load_trainers", "get_trainer"]
