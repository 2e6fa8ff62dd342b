"""
Battle engine package.
Modules:
- chart.py (type effectiveness)
- models.py (species, participants, teams, actions, battle log)
- factory.py (generated moves, participants from species)
- mechanics.py (damage formula)
- teams.py (opponent team generation)
- ai.py (opponent decision logic)
- engine.py (turn resolution state machine)
- history.py (finished battle tally)
- render.py (Rich views for the terminal demo)
"""
from .chart import TypeChart, DEFAULT_TYPE_CHART, effectiveness, effectiveness_message
from .models import (
    Action, Attack, Battle, BattlePokemon, BattleStatus, Forfeit, Species, Switch, Team, Winner,
)
from .mechanics import calculate_damage, damage_range
from .teams import Difficulty, TeamStrategy, generate_team, generate_team_from_trainer
from .ai import choose_action
from .engine import BattleEngine, initialize_battle, is_over, submit_action
from .history import BattleHistory

__all__ = [
    "TypeChart", "DEFAULT_TYPE_CHART", "effectiveness", "effectiveness_message",
    "Action", "Attack", "Battle", "BattlePokemon", "BattleStatus", "Forfeit", "Species", "Switch", "Team", "Winner",
    "calculate_damage", "damage_range",
    "Difficulty", "TeamStrategy", "generate_team", "generate_team_from_trainer",
    "choose_action",
    "BattleEngine", "initialize_battle", "is_over", "submit_action",
    "BattleHistory",
]
