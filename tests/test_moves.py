from pokebattle.battle.factory import MOVE_PP, generate_moves, participant_from_species, to_participants
from pokebattle.battle.models import MoveCategory


def test_single_type_gets_three_moves(make_species):
    moves = generate_moves(make_species("charmander", ("fire",)))
    assert [m.name for m in moves] == ["Fire Strike", "Fire Blast", "Quick Attack"]
    strike, blast, quick = moves
    assert (strike.power, strike.accuracy, strike.category) == (80, 100, MoveCategory.PHYSICAL)
    assert (blast.power, blast.accuracy, blast.category) == (90, 85, MoveCategory.SPECIAL)
    assert (quick.type, quick.power) == ("normal", 40)


def test_dual_type_adds_secondary_attack(make_species):
    moves = generate_moves(make_species("gengar", ("ghost", "poison")))
    assert len(moves) == 4
    assert moves[2].name == "Poison Attack"
    assert (moves[2].type, moves[2].power, moves[2].accuracy) == ("poison", 75, 95)


def test_moves_start_with_full_pp(make_species):
    for m in generate_moves(make_species("x", ("water", "ice"))):
        assert m.pp == m.max_pp == MOVE_PP


def test_participant_starts_at_full_hp(make_species):
    p = participant_from_species(make_species("snorlax", ("normal",), hp=160))
    assert p.max_hp == p.current_hp == 160
    assert not p.is_fainted
    assert p.name == "Snorlax"


def test_take_damage_clamps_and_faints(make_participant):
    p = make_participant("pikachu", ("electric",), hp=35)
    assert p.take_damage(10) == 10
    assert p.current_hp == 25
    assert p.take_damage(999) == 25
    assert p.current_hp == 0
    assert p.is_fainted


def test_to_participants_keeps_existing_participants(make_species, make_participant):
    existing = make_participant("hurt", hp_left=10)
    roster = to_participants([existing, make_species("fresh")])
    assert roster[0] is existing
    assert roster[1].current_hp == roster[1].max_hp
