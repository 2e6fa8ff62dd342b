"""In-memory record of finished battles."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Union
from .models import Battle, BattleStatus


@dataclass
class BattleHistory:
    battles: List[Battle] = field(default_factory=list)
    wins: int = 0
    losses: int = 0

    @property
    def total(self) -> int:
        return len(self.battles)

    def record(self, battle: Battle) -> bool:
        """Add a finished battle once; forfeits count as losses.

        Returns False when the battle is still ongoing or already recorded.
        """
        if battle.is_ongoing or any(b.id == battle.id for b in self.battles):
            return False
        self.battles.append(battle)
        if battle.status is BattleStatus.WON:
            self.wins += 1
        else:
            self.losses += 1
        return True

    def stats(self) -> Dict[str, Union[int, float]]:
        win_rate = (self.wins / self.total) * 100 if self.total else 0.0
        return {"wins": self.wins, "losses": self.losses, "total": self.total, "win_rate": round(win_rate, 1)}

    def clear(self):
        self.battles.clear()
        self.wins = 0
        self.losses = 0


__all__ = ["BattleHistory"]
