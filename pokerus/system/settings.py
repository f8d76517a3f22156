from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional
from pokerus.core.logging import logger, LEVELS

SETTINGS_FILENAME = ".pokerus_settings.json"

@dataclass
class SettingsData:
    log_level: str = "INFO"        # TRACE / DEBUG / INFO / WARN / ERROR
    seed: Optional[int] = None     # fixed seed for accuracy rolls & move choice
    max_turns: int = 200           # duel turn cap before a stalemate
    color: bool = True             # colorized log output

    def normalize(self):
        if self.log_level not in LEVELS:
            self.log_level = "INFO"
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            self.seed = None
        if isinstance(self.max_turns, bool) or not isinstance(self.max_turns, int) or self.max_turns <= 0:
            self.max_turns = 200
        self.color = bool(self.color)

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = Path(path) if path is not None else cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Unknown keys are dropped, missing ones fall back to defaults
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

    def apply_logging(self, target=None):
        """Push level & color preferences onto ``target`` (the global logger by default)."""
        target = target or logger
        target.set_level(self.data.log_level)  # type: ignore[arg-type]
        target.color = self.data.color
