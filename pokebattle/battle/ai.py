"""Opponent decision logic."""
from __future__ import annotations
from typing import Optional
from .chart import DEFAULT_TYPE_CHART, TypeChart
from .models import Action, Attack, BattlePokemon, Switch, Team

LOW_HP_FRACTION = 0.30
HEALTHY_HP_FRACTION = 0.50


def best_move_index(attacker: BattlePokemon, defender: BattlePokemon, chart: Optional[TypeChart] = None) -> int:
    """Index of the move with the highest type multiplier; ties keep the earliest."""
    chart = chart or DEFAULT_TYPE_CHART
    best = 0
    best_eff = -1.0
    for i, m in enumerate(attacker.moves):
        eff = chart.multiplier(m.type, defender.types)
        if eff > best_eff:
            best_eff = eff
            best = i
    return best


def choose_action(ai_team: Team, player_team: Team, chart: Optional[TypeChart] = None) -> Action:
    active = ai_team.active()
    if active.is_fainted:
        replacement = ai_team.first_available(exclude=ai_team.active_index)
        if replacement is not None:
            return Switch(replacement)
    elif active.hp_fraction < LOW_HP_FRACTION:
        for i, m in enumerate(ai_team.members):
            if i != ai_team.active_index and not m.is_fainted and m.hp_fraction > HEALTHY_HP_FRACTION:
                return Switch(i)
    return Attack(best_move_index(active, player_team.active(), chart))


class OpponentAI:
    """Callable wrapper so the engine can take any decision policy."""

    def __init__(self, chart: Optional[TypeChart] = None):
        self.chart = chart or DEFAULT_TYPE_CHART

    def __call__(self, ai_team: Team, player_team: Team) -> Action:
        return choose_action(ai_team, player_team, self.chart)


__all__ = ["choose_action", "best_move_index", "OpponentAI", "LOW_HP_FRACTION", "HEALTHY_HP_FRACTION"]
