"""Battle state machine.

A :class:`Battle` is created by :meth:`BattleEngine.initialize_battle` and only
changes through :meth:`BattleEngine.submit_action`. Each accepted player action
resolves one turn and appends a :class:`BattleTurn` to the battle log. Rejected
actions raise :class:`InvalidActionError` before anything is modified.

Turn outline for an ``Attack``:

1. The opponent policy is asked for its action once.
2. An opponent ``Switch`` is applied first and replaces its attack.
3. Attacks resolve in speed order (ties favour the player); a participant that
   fainted earlier in the turn does not act.
4. A fainted opponent is replaced immediately; a fainted player participant
   must be replaced by the player's next action.
"""
from __future__ import annotations
from typing import Callable, List, Optional, Sequence, Tuple, Union
import random
import time

from pokebattle.core.errors import BattleFinishedError, InvalidActionError, ValidationError
from pokebattle.core.logging import logger
from pokebattle.core.rng import RandomSource
from .ai import OpponentAI
from .chart import DEFAULT_TYPE_CHART, TypeChart, effectiveness_message
from .factory import to_participants
from .mechanics import calculate_damage
from .models import (
    Action, Attack, Battle, BattleEvent, BattlePokemon, BattleStatus, BattleTurn,
    EventKind, Forfeit, Move, Side, Species, Switch, Team, Winner,
)

AIPolicy = Callable[[Team, Team], Action]
Roster = Sequence[Union[Species, BattlePokemon]]


def _switch_problem(team: Team, index: int) -> Optional[str]:
    if not 0 <= index < len(team.members):
        return f"No team member at index {index}"
    if index == team.active_index:
        return f"{team.members[index].name} is already in battle"
    if team.members[index].is_fainted:
        return f"{team.members[index].name} has fainted"
    return None


def _prefix(side: Side) -> str:
    return "" if side is Side.PLAYER else "Opponent's "


class BattleEngine:
    def __init__(self, chart: Optional[TypeChart] = None, rng: Optional[RandomSource] = None,
                 ai: Optional[AIPolicy] = None, message_cb: Optional[Callable[[str], None]] = None):
        self.chart = chart or DEFAULT_TYPE_CHART
        self.rng = rng or random.Random()
        self.ai = ai or OpponentAI(self.chart)
        self.message_cb = message_cb

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def initialize_battle(self, player_roster: Roster, opponent_roster: Roster) -> Battle:
        if not player_roster or not opponent_roster:
            raise ValidationError("Both teams need at least one member")
        teams = []
        for roster in (player_roster, opponent_roster):
            team = Team(to_participants(roster))
            if team.active().is_fainted:
                team.active_index = team.first_available() or 0
            teams.append(team)
        battle = Battle(player_team=teams[0], opponent_team=teams[1])
        logger.debug("BattleStart", battle_id=battle.id,
                     player=len(battle.player_team), opponent=len(battle.opponent_team))
        return battle

    def submit_action(self, battle: Battle, action: Action) -> Battle:
        if not battle.is_ongoing:
            raise BattleFinishedError(battle.status.value)
        self._validate_player_action(battle, action)

        turn = BattleTurn(number=len(battle.turns) + 1, player_action=action)
        if isinstance(action, Forfeit):
            battle.status = BattleStatus.FORFEIT
            self._event(turn, EventKind.FORFEIT, Side.PLAYER, "You forfeited the battle.")
        elif isinstance(action, Switch):
            self._apply_switch(battle.player_team, Side.PLAYER, action.target_index, turn)
        else:
            self._resolve_attack(battle, action, turn)
            self._replace_fainted_opponent(battle, turn)
            self._update_status(battle, turn)

        if not battle.is_ongoing:
            battle.completed_at = time.time()
        battle.turns.append(turn)
        logger.debug("TurnResolved", battle_id=battle.id, turn=turn.number, status=battle.status.value)
        return battle

    @staticmethod
    def is_over(battle: Battle) -> Winner:
        if battle.player_team.is_defeated:
            return Winner.OPPONENT
        if battle.opponent_team.is_defeated:
            return Winner.PLAYER
        return Winner.NONE

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def _validate_player_action(self, battle: Battle, action: Action) -> None:
        team = battle.player_team
        if isinstance(action, Forfeit):
            return
        if isinstance(action, Switch):
            problem = _switch_problem(team, action.target_index)
            if problem:
                raise InvalidActionError(problem)
            return
        if isinstance(action, Attack):
            active = team.active()
            if active.is_fainted:
                raise InvalidActionError(f"{active.name} has fainted; switch to another member")
            if not 0 <= action.move_index < len(active.moves):
                raise InvalidActionError(f"{active.name} has no move at index {action.move_index}")
            return
        raise InvalidActionError(f"Unsupported action: {action!r}")

    def _opponent_action(self, battle: Battle) -> Action:
        team = battle.opponent_team
        action = self.ai(team, battle.player_team)
        if isinstance(action, Switch):
            problem = _switch_problem(team, action.target_index)
            if problem:
                raise ValidationError(f"Opponent policy chose an invalid switch: {problem}")
        elif isinstance(action, Attack):
            if not 0 <= action.move_index < len(team.active().moves):
                raise ValidationError(f"Opponent policy chose missing move {action.move_index}")
        else:
            raise ValidationError(f"Opponent policy returned unsupported action: {action!r}")
        return action

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def _resolve_attack(self, battle: Battle, action: Attack, turn: BattleTurn) -> None:
        opp_action = self._opponent_action(battle)
        turn.opponent_action = opp_action
        if isinstance(opp_action, Switch):
            self._apply_switch(battle.opponent_team, Side.OPPONENT, opp_action.target_index, turn)

        attacks: List[Tuple[Side, Move]] = [(Side.PLAYER, battle.player_team.active().moves[action.move_index])]
        if isinstance(opp_action, Attack):
            attacks.append((Side.OPPONENT, battle.opponent_team.active().moves[opp_action.move_index]))
        for side, move in self._speed_order(battle, attacks):
            self._attack(battle, side, move, turn)

    def _speed_order(self, battle: Battle, attacks: List[Tuple[Side, Move]]) -> List[Tuple[Side, Move]]:
        player_speed = battle.player_team.active().stats.speed
        opponent_speed = battle.opponent_team.active().stats.speed
        if opponent_speed > player_speed:
            return sorted(attacks, key=lambda a: a[0] is Side.PLAYER)
        return sorted(attacks, key=lambda a: a[0] is Side.OPPONENT)

    def _attack(self, battle: Battle, side: Side, move: Move, turn: BattleTurn) -> None:
        attacker_team = battle.team(side)
        target_side = Side.OPPONENT if side is Side.PLAYER else Side.PLAYER
        defender_team = battle.team(target_side)
        attacker = attacker_team.active()
        defender = defender_team.active()
        if attacker.is_fainted or defender.is_fainted:
            return
        damage = calculate_damage(attacker, defender, move, self.rng, self.chart)
        dealt = defender.take_damage(damage)
        parts = [f"{_prefix(side)}{attacker.name} used {move.name}!"]
        eff_msg = effectiveness_message(self.chart.multiplier(move.type, defender.types))
        if eff_msg:
            parts.append(eff_msg)
        parts.append(f"{_prefix(target_side)}{defender.name} has {defender.current_hp}/{defender.max_hp} HP left.")
        self._event(turn, EventKind.DAMAGE, target_side, " ".join(parts),
                    amount=dealt, member_index=defender_team.active_index)
        if defender.is_fainted:
            self._event(turn, EventKind.FAINT, target_side, f"{_prefix(target_side)}{defender.name} fainted!",
                        member_index=defender_team.active_index)

    def _apply_switch(self, team: Team, side: Side, index: int, turn: BattleTurn) -> None:
        team.active_index = index
        who = "You" if side is Side.PLAYER else "Opponent"
        self._event(turn, EventKind.SWITCH, side, f"{who} sent out {team.active().name}!", member_index=index)

    def _replace_fainted_opponent(self, battle: Battle, turn: BattleTurn) -> None:
        team = battle.opponent_team
        if not team.active().is_fainted or team.is_defeated:
            return
        choice = self.ai(team, battle.player_team)
        if isinstance(choice, Switch) and _switch_problem(team, choice.target_index) is None:
            index = choice.target_index
        else:
            logger.warn("OpponentReplacementFallback", battle_id=battle.id, choice=repr(choice))
            index = team.first_available()
        self._apply_switch(team, Side.OPPONENT, index, turn)

    def _update_status(self, battle: Battle, turn: BattleTurn) -> None:
        winner = self.is_over(battle)
        if winner is Winner.OPPONENT:
            battle.status = BattleStatus.LOST
            self._event(turn, EventKind.MESSAGE, Side.PLAYER, "All of your Pokemon have fainted!")
        elif winner is Winner.PLAYER:
            battle.status = BattleStatus.WON
            self._event(turn, EventKind.MESSAGE, Side.OPPONENT, "You defeated every opposing Pokemon!")
        if not battle.is_ongoing:
            logger.debug("BattleEnd", battle_id=battle.id, status=battle.status.value, turns=len(battle.turns) + 1)

    def _event(self, turn: BattleTurn, kind: EventKind, side: Side, message: str, *,
               amount: Optional[int] = None, member_index: Optional[int] = None) -> None:
        turn.events.append(BattleEvent(kind=kind, side=side, message=message, amount=amount, member_index=member_index))
        if self.message_cb:
            self.message_cb(message)


_default_engine = BattleEngine()


def initialize_battle(player_roster: Roster, opponent_roster: Roster) -> Battle:
    return _default_engine.initialize_battle(player_roster, opponent_roster)


def submit_action(battle: Battle, action: Action) -> Battle:
    return _default_engine.submit_action(battle, action)


def is_over(battle: Battle) -> Winner:
    return BattleEngine.is_over(battle)


__all__ = ["BattleEngine", "AIPolicy", "initialize_battle", "submit_action", "is_over"]
