"""Battle data model: species, moves, participants, teams, actions and battles."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union
import secrets
import time


class MoveCategory(str, Enum):
    PHYSICAL = "physical"
    SPECIAL = "special"


class ParticipantStatus(str, Enum):
    NORMAL = "normal"
    FAINTED = "fainted"


class BattleStatus(str, Enum):
    ONGOING = "ongoing"
    WON = "won"
    LOST = "lost"
    FORFEIT = "forfeit"


class Winner(str, Enum):
    NONE = "none"
    PLAYER = "player-won"
    OPPONENT = "opponent-won"


class Side(str, Enum):
    PLAYER = "player"
    OPPONENT = "opponent"


class EventKind(str, Enum):
    SWITCH = "switch"
    DAMAGE = "damage"
    MESSAGE = "message"
    FAINT = "faint"
    FORFEIT = "forfeit"


# Catalog stat names (PokeAPI style) -> BaseStats attribute
_STAT_KEYS = {
    "hp": "hp",
    "attack": "attack",
    "defense": "defense",
    "special-attack": "sp_atk",
    "special-defense": "sp_def",
    "speed": "speed",
}


@dataclass(frozen=True)
class BaseStats:
    hp: int
    attack: int
    defense: int
    sp_atk: int
    sp_def: int
    speed: int

    @property
    def total(self) -> int:
        return self.hp + self.attack + self.defense + self.sp_atk + self.sp_def + self.speed

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseStats':
        values: Dict[str, int] = {}
        for key, attr in _STAT_KEYS.items():
            raw = data.get(key, data.get(attr))
            if raw is None:
                raise KeyError(key)
            values[attr] = int(raw)
        return cls(**values)


@dataclass(frozen=True)
class Species:
    """Read-only catalog entry."""
    id: int
    name: str
    types: Tuple[str, ...]
    stats: BaseStats

    def __post_init__(self):
        if not 1 <= len(self.types) <= 2:
            raise ValueError(f"{self.name}: expected 1 or 2 types, got {len(self.types)}")
        # Frozen; chart lookups and STAB compare lower-case names
        object.__setattr__(self, "types", tuple(str(t).lower() for t in self.types))

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Species':
        return cls(
            id=int(data['id']),
            name=str(data['name']).lower(),
            types=tuple(str(t).lower() for t in data['types']),
            stats=BaseStats.from_dict(data['stats']),
        )


@dataclass
class Move:
    name: str
    type: str
    power: int
    accuracy: int = 100
    category: MoveCategory = MoveCategory.PHYSICAL
    max_pp: int = 15
    pp: int = 15


@dataclass
class BattlePokemon:
    species: Species
    max_hp: int
    current_hp: int
    moves: List[Move] = field(default_factory=list)
    status: ParticipantStatus = ParticipantStatus.NORMAL
    status_turns: int = 0

    def __post_init__(self):
        self.current_hp = max(0, min(int(self.current_hp), int(self.max_hp)))
        if self.current_hp == 0:
            self.status = ParticipantStatus.FAINTED
        elif self.status is ParticipantStatus.FAINTED:
            self.status = ParticipantStatus.NORMAL

    @property
    def name(self) -> str:
        return self.species.display_name

    @property
    def types(self) -> Tuple[str, ...]:
        return self.species.types

    @property
    def stats(self) -> BaseStats:
        return self.species.stats

    @property
    def is_fainted(self) -> bool:
        return self.status is ParticipantStatus.FAINTED

    @property
    def hp_fraction(self) -> float:
        if self.max_hp <= 0:
            return 0.0
        return self.current_hp / self.max_hp

    def take_damage(self, amount: int) -> int:
        """Subtract HP (clamped at 0) and return the amount actually removed."""
        old = self.current_hp
        self.current_hp = max(0, old - int(amount))
        if self.current_hp == 0:
            self.status = ParticipantStatus.FAINTED
            self.status_turns = 0
        return old - self.current_hp


@dataclass
class Team:
    members: List[BattlePokemon]
    active_index: int = 0

    def active(self) -> BattlePokemon:
        return self.members[self.active_index]

    def has_available(self) -> bool:
        return any(not m.is_fainted for m in self.members)

    @property
    def is_defeated(self) -> bool:
        return not self.has_available()

    def first_available(self, exclude: Optional[int] = None) -> Optional[int]:
        for i, m in enumerate(self.members):
            if i != exclude and not m.is_fainted:
                return i
        return None

    def __len__(self) -> int:
        return len(self.members)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Attack:
    move_index: int


@dataclass(frozen=True)
class Switch:
    target_index: int


@dataclass(frozen=True)
class Forfeit:
    pass


Action = Union[Attack, Switch, Forfeit]


# ---------------------------------------------------------------------------
# Battle log & battle
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class BattleEvent:
    kind: EventKind
    side: Side
    message: str
    amount: Optional[int] = None
    member_index: Optional[int] = None


@dataclass
class BattleTurn:
    number: int
    player_action: Action
    opponent_action: Optional[Action] = None
    events: List[BattleEvent] = field(default_factory=list)

    @property
    def messages(self) -> List[str]:
        return [e.message for e in self.events]


def _new_battle_id() -> str:
    return f"battle_{int(time.time() * 1000)}_{secrets.token_hex(5)}"


@dataclass
class Battle:
    player_team: Team
    opponent_team: Team
    turns: List[BattleTurn] = field(default_factory=list)
    status: BattleStatus = BattleStatus.ONGOING
    id: str = field(default_factory=_new_battle_id)
    created_at: float = field(default_factory=time.time)
    completed_at: Optional[float] = None

    @property
    def is_ongoing(self) -> bool:
        return self.status is BattleStatus.ONGOING

    @property
    def log(self) -> List[str]:
        return [msg for turn in self.turns for msg in turn.messages]

    def team(self, side: Side) -> Team:
        return self.player_team if side is Side.PLAYER else self.opponent_team


__all__ = [
    "MoveCategory", "ParticipantStatus", "BattleStatus", "Winner", "Side", "EventKind",
    "BaseStats", "Species", "Move", "BattlePokemon", "Team",
    "Attack", "Switch", "Forfeit", "Action",
    "BattleEvent", "BattleTurn", "Battle",
]
