"""User settings stored as JSON in the home directory.

Unknown keys in the file are ignored and missing ones take their defaults,
so older settings files keep loading after fields are added.
"""
from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from pokeworld.core.logging import LEVELS, logger

SETTINGS_FILENAME = ".pokeworld_settings.json"
SEED_ENV = "POKEWORLD_RNG_SEED"

@dataclass
class SettingsData:
    log_level: str = "INFO"        # DEBUG / INFO / WARN / ERROR
    debug: bool = False            # print every battle state transition
    npc_move_slots: int = 2        # leading move slots the NPC policy draws from
    starting_money: int = 3000

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "SettingsData":
        known = {f.name for f in fields(cls)}
        data = cls(**{k: v for k, v in raw.items() if k in known})
        data.normalize()
        return data

    def normalize(self):
        defaults = SettingsData.__dataclass_fields__
        if self.log_level not in LEVELS:
            self.log_level = defaults["log_level"].default
        if not isinstance(self.debug, bool):
            self.debug = bool(self.debug)
        if not isinstance(self.npc_move_slots, int) or not 1 <= self.npc_move_slots <= 4:
            self.npc_move_slots = defaults["npc_move_slots"].default
        if not isinstance(self.starting_money, int) or self.starting_money < 0:
            self.starting_money = defaults["starting_money"].default

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path
        self._listeners: List[Callable[[SettingsData], None]] = []

    @staticmethod
    def default_path() -> Path:
        """Home directory when writable, else the working directory."""
        home = Path(os.path.expanduser("~"))
        base = home if home.is_dir() and os.access(home, os.W_OK) else Path.cwd()
        return base / SETTINGS_FILENAME

    @classmethod
    def defaults(cls, path: Optional[Path] = None) -> "Settings":
        return cls(SettingsData(), path or cls.default_path())

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = path or cls.default_path()
        if not path.exists():
            return cls.defaults(path)
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict):
                raise ValueError("settings file must hold a JSON object")
            data = SettingsData.from_dict(raw)
        except (OSError, ValueError, TypeError) as e:
            logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
            return cls.defaults(path)
        logger.debug("SettingsLoaded", path=str(path))
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("SettingsSaveFailed", path=str(self.path), error=str(e))
            return
        logger.debug("SettingsSaved", path=str(self.path))

    def apply_log_level(self):
        # debug forces transition-level logging regardless of log_level
        logger.set_level("DEBUG" if self.data.debug else self.data.log_level)

    def on_change(self, fn: Callable[[SettingsData], None]):
        self._listeners.append(fn)

    def update(self, **changes):
        for k, v in changes.items():
            if not hasattr(self.data, k):
                raise KeyError(k)
            setattr(self.data, k, v)
        self.data.normalize()
        self.apply_log_level()
        for fn in self._listeners:
            fn(self.data)


def rng_seed_from_env() -> Optional[int]:
    """Seed for the game RNG from the environment, or None for an unseeded run."""
    seed = os.environ.get(SEED_ENV)
    if not seed:
        return None
    try:
        return int(seed)
    except ValueError:
        logger.warn("InvalidRngSeedIgnored", value=seed)
        return None
