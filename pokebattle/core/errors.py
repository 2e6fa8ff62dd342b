"""
Error classes for clearer exception sources.
"""
from __future__ import annotations


class PokebattleError(Exception):
    """Base for internal errors."""


class DataLoadError(PokebattleError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed loading '{path}': {detail}")
        self.path = path
        self.detail = detail


class ValidationError(PokebattleError):
    pass


class InvalidActionError(PokebattleError):
    """A submitted action was rejected; the battle was not modified."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class BattleFinishedError(InvalidActionError):
    def __init__(self, status: str):
        super().__init__(f"Battle already finished ({status})")
        self.status = status
