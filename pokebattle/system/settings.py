from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional
from pokebattle.core.logging import logger

SETTINGS_FILENAME = ".pokebattle_settings.json"
SETTINGS_ENV = "POKEBATTLE_SETTINGS"

_LEVELS = {"DEBUG", "INFO", "WARN", "ERROR"}


@dataclass
class SettingsData:
    log_level: str = "INFO"        # DEBUG / INFO / WARN / ERROR
    debug: bool = False            # Echo battle events as they happen
    seed: Optional[int] = None     # Fixed RNG seed; None = fresh randomness
    team_size: int = 3             # Player team size for the demo

    def normalize(self):
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LEVELS:
            self.log_level = "INFO"
        if self.seed is not None:
            try:
                self.seed = int(self.seed)
            except (TypeError, ValueError):
                self.seed = None
        try:
            self.team_size = int(self.team_size)
        except (TypeError, ValueError):
            self.team_size = 3
        self.team_size = max(1, min(6, self.team_size))
        self.debug = bool(self.debug)


class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path

    @classmethod
    def _resolve_path(cls) -> Path:
        override = os.environ.get(SETTINGS_ENV)
        if override:
            return Path(override)
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = path or cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Unknown keys are ignored, missing ones fall back to defaults
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def update(self, **changes):
        unknown = [k for k in changes if not hasattr(self.data, k)]
        if unknown:
            raise AttributeError(f"Unknown setting '{unknown[0]}'")
        for k, v in changes.items():
            setattr(self.data, k, v)
        self.data.normalize()
        self.apply()
        logger.debug("SettingsUpdated", **changes)

    def apply(self):
        """Push settings that affect global state (log level)."""
        logger.set_level(self.data.log_level)  # type: ignore[arg-type]
