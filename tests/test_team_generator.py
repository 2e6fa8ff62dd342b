import itertools
import random
import pytest

from pokebattle.battle.teams import Difficulty, TeamStrategy, generate_team, generate_team_from_trainer
from pokebattle.core.errors import ValidationError
from pokebattle.core.logging import logger
from pokebattle.data.trainers import TrainerProfile


@pytest.fixture
def by_total(make_species):
    """Species whose stat total is exactly ``total`` (five non-HP stats at 50)."""
    def _make(name, types, total):
        return make_species(name, types, hp=total - 250)
    return _make


@pytest.fixture
def pool(make_species):
    types = ["fire", "water", "grass", "electric", "psychic", "normal", "rock", "ghost", "dragon", "ice"]
    return [
        make_species(f"mon{i}", (t,), hp=40 + i * 7, attack=30 + (i * 13) % 90,
                     defense=40 + (i * 17) % 80, sp_atk=35 + (i * 11) % 70, sp_def=45 + i * 3, speed=50)
        for i, t in enumerate(types)
    ]


def test_size_is_min_of_request_and_pool(pool):
    rng = random.Random(1)
    for strategy, difficulty in itertools.product(TeamStrategy, Difficulty):
        for size in range(0, len(pool) + 3):
            team = generate_team(pool, size, strategy, difficulty, rng=rng)
            assert len(team) == min(size, len(pool))
            assert len({id(s) for s in team}) == len(team)
            assert all(s in pool for s in team)


def test_random_strategy_caps_at_pool_size(pool):
    assert len(generate_team(pool[:6], 8, "random", rng=random.Random(5))) == 6


def test_empty_pool_gives_empty_team():
    for strategy in TeamStrategy:
        assert generate_team([], 6, strategy) == []


def test_negative_size_gives_empty_team(pool):
    assert generate_team(pool, -3, "offensive") == []


def test_offensive_hard_takes_strongest(pool):
    expected = sorted(pool, key=lambda s: s.stats.attack + s.stats.sp_atk, reverse=True)[:3]
    assert generate_team(pool, 3, TeamStrategy.OFFENSIVE, Difficulty.HARD) == expected


def test_offensive_easy_takes_weakest(pool):
    ranked = sorted(pool, key=lambda s: s.stats.attack + s.stats.sp_atk, reverse=True)
    assert generate_team(pool, 3, TeamStrategy.OFFENSIVE, Difficulty.EASY) == ranked[-3:]


def test_defensive_expert_takes_bulkiest(pool):
    expected = sorted(pool, key=lambda s: s.stats.hp + s.stats.defense + s.stats.sp_def, reverse=True)[:4]
    assert generate_team(pool, 4, "defensive", "expert") == expected


def test_legendary_expert_is_top_power(pool):
    expected = sorted(pool, key=lambda s: s.stats.total, reverse=True)[:5]
    assert generate_team(pool, 5, "legendary", "expert") == expected


def test_harder_difficulty_never_weaker(pool):
    def total(team):
        return sum(s.stats.attack + s.stats.sp_atk for s in team)
    teams = [generate_team(pool, 3, "offensive", d) for d in Difficulty]
    assert total(teams[0]) <= total(teams[1]) <= total(teams[2]) <= total(teams[3])


def test_balanced_prefers_new_types(by_total):
    a = by_total("a", ("fire",), 700)
    b = by_total("b", ("fire",), 650)
    c = by_total("c", ("water",), 600)
    d = by_total("d", ("grass",), 500)
    e = by_total("e", ("fire",), 400)
    pool = [e, d, c, b, a]
    assert generate_team(pool, 3, "balanced", "medium") == [a, c, d]
    assert generate_team(pool, 5, "balanced", "medium") == [a, c, d, b, e]


def test_type_focused_uses_chosen_type(by_total, fixed_rng):
    w1 = by_total("w1", ("water",), 600)
    w2 = by_total("w2", ("water", "ice"), 500)
    w3 = by_total("w3", ("water",), 400)
    f1 = by_total("f1", ("fire",), 650)
    g1 = by_total("g1", ("grass",), 450)
    team = generate_team([f1, w3, g1, w1, w2], 2, "type-focused", "expert", rng=fixed_rng(pick="water"))
    assert team == [w1, w2]


def test_type_focused_backfills_when_short(by_total, fixed_rng):
    w1 = by_total("w1", ("water",), 600)
    f1 = by_total("f1", ("fire",), 650)
    g1 = by_total("g1", ("grass",), 450)
    team = generate_team([g1, w1, f1], 3, "type-focused", "expert", rng=fixed_rng(pick="water"))
    assert team == [w1, f1, g1]


def test_unknown_strategy_rejected(pool):
    with pytest.raises(ValidationError):
        generate_team(pool, 3, "chaotic")
    with pytest.raises(ValidationError):
        generate_team(pool, 3, "balanced", "impossible")


def test_trainer_profile_drives_generation(pool):
    trainer = TrainerProfile(name="Ace", title="Cooltrainer", strategy=TeamStrategy.OFFENSIVE,
                             difficulty=Difficulty.HARD, team_size=2)
    assert generate_team_from_trainer(pool, trainer) == generate_team(pool, 2, "offensive", "hard")


# (strategy, difficulty, descending, window start) for a 10-member pool and size 3
WINDOW_TABLE = [
    ("type-focused", "easy", False, 0), ("type-focused", "medium", True, 3),
    ("type-focused", "hard", True, 1), ("type-focused", "expert", True, 0),
    ("balanced", "easy", False, 0), ("balanced", "medium", True, 0),
    ("balanced", "hard", True, 0), ("balanced", "expert", True, 0),
    ("offensive", "easy", True, 7), ("offensive", "medium", True, 4),
    ("offensive", "hard", True, 0), ("offensive", "expert", True, 0),
    ("defensive", "easy", True, 7), ("defensive", "medium", True, 4),
    ("defensive", "hard", True, 0), ("defensive", "expert", True, 0),
    ("legendary", "easy", True, 2), ("legendary", "medium", True, 2),
    ("legendary", "hard", True, 1), ("legendary", "expert", True, 0),
]


@pytest.mark.parametrize("strategy,difficulty,descending,start", WINDOW_TABLE)
def test_window_for_every_strategy_and_difficulty(make_species, fixed_rng, strategy, difficulty, descending, start):
    types = ["fire", "water", "grass", "electric", "psychic", "normal", "rock", "ghost", "dragon", "ice"]
    if strategy == "type-focused":
        types = ["Fire"] * len(types)
    # Every score (power, offense, bulk) rises with the index
    ladder = [make_species(f"rung{i}", (t,), hp=10 + 10 * i, attack=10 + 10 * i, defense=10 + 10 * i,
                           sp_atk=10 + 10 * i, sp_def=10 + 10 * i, speed=50)
              for i, t in enumerate(types)]
    shuffled = ladder[3:] + ladder[:3]
    ranked = list(reversed(ladder)) if descending else ladder
    team = generate_team(shuffled, 3, strategy, difficulty, rng=fixed_rng(pick="fire"))
    assert team == ranked[start:start + 3]


def test_team_members_logged_at_debug(pool, capsys):
    logger.set_level("DEBUG")
    try:
        generate_team(pool, 2, "legendary", "expert")
    finally:
        logger.set_level("INFO")
    assert "TeamGenerated" in capsys.readouterr().out
    generate_team(pool, 2, "legendary", "expert")
    assert "TeamGenerated" not in capsys.readouterr().out
