"""Opponent team generation.

Every strategy except ``random`` ranks the pool by a strategy score and takes a
contiguous window of ``size`` entries; difficulty decides sort direction and
where the window starts. ``balanced`` additionally prefers members that bring
a type the partial team does not have yet.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence, Union
import math
import random

from pokebattle.core.errors import ValidationError
from pokebattle.core.logging import logger
from pokebattle.core.rng import RandomSource
from .models import Species

if TYPE_CHECKING:
    from pokebattle.data.trainers import TrainerProfile


class TeamStrategy(str, Enum):
    RANDOM = "random"
    TYPE_FOCUSED = "type-focused"
    BALANCED = "balanced"
    OFFENSIVE = "offensive"
    DEFENSIVE = "defensive"
    LEGENDARY = "legendary"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"


FOCUS_TYPES = ("fire", "water", "grass", "electric", "psychic", "fighting", "dragon", "ghost")


@dataclass(frozen=True)
class _Window:
    descending: bool
    start: float


def _windows(easy: _Window, medium: _Window, hard: _Window, expert: _Window) -> Dict[Difficulty, _Window]:
    return {Difficulty.EASY: easy, Difficulty.MEDIUM: medium, Difficulty.HARD: hard, Difficulty.EXPERT: expert}


_STRONGEST = _Window(True, 0.0)

_WINDOWS: Dict[TeamStrategy, Dict[Difficulty, _Window]] = {
    TeamStrategy.TYPE_FOCUSED: _windows(_Window(False, 0.0), _Window(True, 0.3), _Window(True, 0.1), _STRONGEST),
    TeamStrategy.BALANCED: _windows(_Window(False, 0.0), _STRONGEST, _STRONGEST, _STRONGEST),
    TeamStrategy.OFFENSIVE: _windows(_Window(True, 0.7), _Window(True, 0.4), _STRONGEST, _STRONGEST),
    TeamStrategy.DEFENSIVE: _windows(_Window(True, 0.7), _Window(True, 0.4), _STRONGEST, _STRONGEST),
    TeamStrategy.LEGENDARY: _windows(_Window(True, 0.2), _Window(True, 0.2), _Window(True, 0.1), _STRONGEST),
}

Score = Callable[[Species], int]


def power_level(s: Species) -> int:
    return s.stats.total


def offense_score(s: Species) -> int:
    return s.stats.attack + s.stats.sp_atk


def defense_score(s: Species) -> int:
    return s.stats.hp + s.stats.defense + s.stats.sp_def


_SCORES: Dict[TeamStrategy, Score] = {
    TeamStrategy.TYPE_FOCUSED: power_level,
    TeamStrategy.BALANCED: power_level,
    TeamStrategy.OFFENSIVE: offense_score,
    TeamStrategy.DEFENSIVE: defense_score,
    TeamStrategy.LEGENDARY: power_level,
}

_default_rng = random.Random()


def _coerce(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Unknown {enum_cls.__name__}: {value!r}") from None


def _rank(pool: Sequence[Species], score: Score, window: _Window) -> List[Species]:
    return sorted(pool, key=score, reverse=window.descending)


def _window_start(length: int, size: int, fraction: float) -> int:
    return max(0, min(math.floor(length * fraction), length - size))


def _slice(ranked: List[Species], size: int, window: _Window) -> List[Species]:
    start = _window_start(len(ranked), size, window.start)
    return ranked[start:start + size]


def _type_focused(pool: Sequence[Species], size: int, window: _Window, rng: RandomSource) -> List[Species]:
    focus = rng.choice(FOCUS_TYPES)
    typed = [p for p in pool if focus in p.types]
    logger.debug("TypeFocus", type=focus, candidates=len(typed))
    team = _slice(_rank(typed, power_level, window), size, window)
    if len(team) < size:
        rest = [p for p in _rank(pool, power_level, window) if focus not in p.types]
        team.extend(rest[:size - len(team)])
    return team


def _balanced(pool: Sequence[Species], size: int, window: _Window) -> List[Species]:
    ranked = _rank(pool, power_level, window)
    start = _window_start(len(ranked), size, window.start)
    ordered = ranked[start:] + ranked[:start]
    team: List[Species] = []
    used_types: set = set()
    for candidate in ordered:
        if len(team) >= size:
            break
        if not team or any(t not in used_types for t in candidate.types):
            team.append(candidate)
            used_types.update(candidate.types)
    for candidate in ordered:
        if len(team) >= size:
            break
        if not any(candidate is m for m in team):
            team.append(candidate)
    return team


def generate_team(pool: Sequence[Species], size: int = 6,
                  strategy: Union[TeamStrategy, str] = TeamStrategy.RANDOM,
                  difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
                  *, rng: Optional[RandomSource] = None) -> List[Species]:
    """Build an opponent roster of ``min(size, len(pool))`` distinct pool members."""
    strategy = _coerce(TeamStrategy, strategy)
    difficulty = _coerce(Difficulty, difficulty)
    rng = rng or _default_rng
    size = max(0, min(int(size), len(pool)))
    if size == 0:
        return []

    if strategy is TeamStrategy.RANDOM:
        shuffled = list(pool)
        rng.shuffle(shuffled)
        team = shuffled[:size]
    else:
        window = _WINDOWS[strategy][difficulty]
        if strategy is TeamStrategy.TYPE_FOCUSED:
            team = _type_focused(pool, size, window, rng)
        elif strategy is TeamStrategy.BALANCED:
            team = _balanced(pool, size, window)
        else:
            team = _slice(_rank(pool, _SCORES[strategy], window), size, window)
    if logger.is_enabled("DEBUG"):
        logger.debug("TeamGenerated", strategy=strategy.value, difficulty=difficulty.value,
                     members=",".join(s.name for s in team))
    return team


def generate_team_from_trainer(pool: Sequence[Species], trainer: 'TrainerProfile',
                               *, rng: Optional[RandomSource] = None) -> List[Species]:
    return generate_team(pool, trainer.team_size, trainer.strategy, trainer.difficulty, rng=rng)


__all__ = [
    "TeamStrategy", "Difficulty", "FOCUS_TYPES",
    "generate_team", "generate_team_from_trainer",
    "power_level", "offense_score", "defense_score",
]
