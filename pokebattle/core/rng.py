"""Injectable random source.

Anything with the subset of :class:`random.Random` used by the engine fits,
so tests can pass a seeded ``random.Random`` or a fixed-sequence stub.
"""
from __future__ import annotations
import random
from typing import Any, MutableSequence, Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def uniform(self, a: float, b: float) -> float: ...
    def choice(self, seq: Sequence[T]) -> T: ...
    def shuffle(self, x: MutableSequence[Any]) -> None: ...


def make_rng(seed: Optional[int] = None) -> random.Random:
    return random.Random(seed)


__all__ = ["RandomSource", "make_rng"]
