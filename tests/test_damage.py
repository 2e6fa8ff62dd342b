import random

from pokebattle.battle.chart import TypeChart
from pokebattle.battle.mechanics import base_damage, calculate_damage, damage_range, stab_multiplier
from pokebattle.battle.factory import participant_from_species
from pokebattle.battle.models import BaseStats, Move, MoveCategory, Species

THUNDER = Move(name="Thunder Shock", type="electric", power=40, accuracy=100, category=MoveCategory.SPECIAL)


def test_example_scenario_exact_bounds(make_participant):
    attacker = make_participant("Attacker", ("normal",), sp_atk=50)
    water = make_participant("Water", ("water",), sp_def=40)
    normal = make_participant("Plain", ("normal",), sp_def=40)
    assert base_damage(attacker, water, THUNDER) == 24.0
    assert damage_range(attacker, water, THUNDER) == (40, 48)
    assert damage_range(attacker, normal, THUNDER) == (20, 24)
    # Super effective always beats neutral for identical defenses
    assert damage_range(attacker, water, THUNDER)[0] > damage_range(attacker, normal, THUNDER)[1]


def test_stab_applies_when_move_matches_attacker_type(make_participant):
    electric = make_participant("Sparky", ("electric",), sp_atk=50)
    water = make_participant("Water", ("water",), sp_def=40)
    assert stab_multiplier(electric, THUNDER) == 1.5
    assert damage_range(electric, water, THUNDER) == (61, 72)


def test_damage_with_fixed_random_factor(make_participant, fixed_rng):
    attacker = make_participant("Attacker", ("normal",), sp_atk=50)
    water = make_participant("Water", ("water",), sp_def=40)
    assert calculate_damage(attacker, water, THUNDER, fixed_rng(1.0)) == 48
    assert calculate_damage(attacker, water, THUNDER, fixed_rng(0.85)) == 40


def test_damage_stays_within_bounds(make_participant):
    rng = random.Random(7)
    attacker = make_participant("Attacker", ("fire",), attack=84, sp_atk=109)
    defender = make_participant("Defender", ("grass", "poison"), defense=49, sp_def=65)
    for move in attacker.moves:
        lo, hi = damage_range(attacker, defender, move)
        for _ in range(200):
            assert lo <= calculate_damage(attacker, defender, move, rng) <= hi


def test_physical_and_special_use_matching_stats(make_participant, fixed_rng):
    attacker = make_participant("Mixed", ("normal",), attack=200, sp_atk=20)
    defender = make_participant("Wall", ("normal",), defense=50, sp_def=50)
    physical = Move(name="Hit", type="fire", power=60, category=MoveCategory.PHYSICAL)
    special = Move(name="Beam", type="fire", power=60, category=MoveCategory.SPECIAL)
    rng = fixed_rng(1.0)
    assert calculate_damage(attacker, defender, physical, rng) > calculate_damage(attacker, defender, special, rng)


def test_immune_target_still_takes_minimum_damage(make_participant, fixed_rng):
    attacker = make_participant("Attacker", ("normal",))
    ghost = make_participant("Ghost", ("ghost",))
    tackle = Move(name="Tackle", type="normal", power=40)
    assert calculate_damage(attacker, ghost, tackle, fixed_rng(1.0)) == 1
    assert damage_range(attacker, ghost, tackle) == (1, 1)


def test_damage_floor_for_weak_hits(make_participant):
    rng = random.Random(3)
    weak = make_participant("Weak", ("normal",), attack=1, sp_atk=1)
    tank = make_participant("Tank", ("rock", "steel"), defense=250, sp_def=250)
    for move in weak.moves:
        assert calculate_damage(weak, tank, move, rng) >= 1


def test_more_power_never_lowers_damage(make_participant):
    attacker = make_participant("Attacker", ("normal",), attack=90)
    defender = make_participant("Defender", ("fire",), defense=70)
    previous = (0, 0)
    for power in range(0, 200, 5):
        current = damage_range(attacker, defender, Move(name="X", type="water", power=power))
        assert current[0] >= previous[0] and current[1] >= previous[1]
        previous = current


def test_custom_chart_changes_result(make_participant, fixed_rng):
    attacker = make_participant("Attacker", ("normal",))
    defender = make_participant("Defender", ("water",))
    flat = TypeChart({})
    move = Move(name="Zap", type="electric", power=40)
    assert calculate_damage(attacker, defender, move, fixed_rng(1.0), flat) < \
        calculate_damage(attacker, defender, move, fixed_rng(1.0))
    assert damage_range(attacker, defender, move, flat)[1] < damage_range(attacker, defender, move)[1]


def test_capitalised_types_still_get_stab(fixed_rng):
    fire = participant_from_species(Species(
        id=1, name="Flamey", types=("Fire",),
        stats=BaseStats(hp=100, attack=50, defense=50, sp_atk=50, sp_def=50, speed=50),
    ))
    leafy = participant_from_species(Species(
        id=2, name="Leafy", types=("Grass",),
        stats=BaseStats(hp=100, attack=50, defense=50, sp_atk=50, sp_def=50, speed=50),
    ))
    strike = fire.moves[0]
    assert fire.types == ("fire",)
    assert stab_multiplier(fire, strike) == 1.5
    # 37.2 base x 1.5 STAB x 2 super effective
    assert calculate_damage(fire, leafy, strike, fixed_rng(1.0)) == 111
