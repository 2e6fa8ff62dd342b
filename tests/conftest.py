import itertools
import pytest

from pokebattle.battle.factory import participant_from_species
from pokebattle.battle.models import BaseStats, Species

_ids = itertools.count(1000)


def _make_species(name, types=("normal",), hp=100, attack=50, defense=50, sp_atk=50, sp_def=50, speed=50):
    return Species(
        id=next(_ids), name=name, types=tuple(types),
        stats=BaseStats(hp=hp, attack=attack, defense=defense, sp_atk=sp_atk, sp_def=sp_def, speed=speed),
    )


@pytest.fixture
def make_species():
    return _make_species


@pytest.fixture
def make_participant():
    def _make(name, types=("normal",), hp_left=None, **stats):
        p = participant_from_species(_make_species(name, types, **stats))
        if hp_left is not None:
            p.take_damage(p.max_hp - hp_left)
        return p
    return _make


class FixedRandom:
    """Random source stub: constant uniform(), first-or-preset choice(), identity shuffle()."""

    def __init__(self, value=1.0, pick=None):
        self.value = value
        self.pick = pick
        self.uniform_calls = 0

    def uniform(self, a, b):
        self.uniform_calls += 1
        return self.value

    def choice(self, seq):
        if self.pick is not None and self.pick in seq:
            return self.pick
        return seq[0]

    def shuffle(self, x):
        return None


@pytest.fixture
def fixed_rng():
    return FixedRandom
