"""
Project-wide event logger.

Lines look like ``2024-05-01T12:00:00+00:00 [INFO] BattleStart wild=True``,
coloured per level with colorama. Output goes to stdout unless a stream is given.
"""
from __future__ import annotations
import sys
from datetime import datetime, timezone
from typing import Any, Literal, Optional, TextIO

from colorama import Fore, Style, init as colorama_init

colorama_init()

Level = Literal["DEBUG", "INFO", "WARN", "ERROR"]

LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}
COLORS = {
    "DEBUG": Fore.BLUE,
    "INFO": Fore.GREEN,
    "WARN": Fore.YELLOW,
    "ERROR": Fore.RED,
}
RESET = Style.RESET_ALL

class Logger:
    def __init__(self, level: Level = "INFO", stream: Optional[TextIO] = None):
        self.threshold = LEVELS[level]
        self.stream = stream

    def set_level(self, level: str):
        # Unknown names fall back to INFO
        self.threshold = LEVELS.get(level, LEVELS["INFO"])

    def enabled(self, lvl: Level) -> bool:
        return LEVELS[lvl] >= self.threshold

    def _emit(self, lvl: Level, event: str, **fields: Any):
        if not self.enabled(lvl):
            return
        ts = datetime.now(timezone.utc).isoformat(timespec="seconds")
        line = f"{ts} [{lvl}] {event}"
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        out = self.stream or sys.stdout
        out.write(f"{COLORS[lvl]}{line}{RESET}\n")

    def debug(self, event: str, **kw): self._emit("DEBUG", event, **kw)
    def info(self, event: str, **kw): self._emit("INFO", event, **kw)
    def warn(self, event: str, **kw): self._emit("WARN", event, **kw)
    def error(self, event: str, **kw): self._emit("ERROR", event, **kw)

logger = Logger("INFO")
