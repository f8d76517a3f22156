"""
Lightweight logger used across the project.
Color output via colorama; the output stream is injectable so combat code
can be traced into a buffer (tests) or stdout (CLI).
"""
from __future__ import annotations
import sys
from datetime import datetime, timezone
from typing import Literal, Any, Optional, TextIO

from colorama import Fore, Style, init as colorama_init

# ANSI escapes on Windows consoles
colorama_init()

Level = Literal["TRACE","DEBUG","INFO","WARN","ERROR"]

COLORS = {
    "TRACE": Fore.CYAN,
    "DEBUG": Fore.BLUE,
    "INFO": Fore.GREEN,
    "WARN": Fore.YELLOW,
    "ERROR": Fore.RED,
}
RESET = Style.RESET_ALL

LEVELS = ("TRACE","DEBUG","INFO","WARN","ERROR")

class Logger:
    _order = {"TRACE":5,"DEBUG":10,"INFO":20,"WARN":30,"ERROR":40}

    def __init__(self, level: Level = "INFO", stream: Optional[TextIO] = None, color: bool = True):
        self.threshold = self._order[level]
        self.stream = stream
        self.color = color

    def set_level(self, level: Level):
        self.threshold = self._order.get(level, 20)

    def is_enabled(self, lvl: Level) -> bool:
        return self._order[lvl] >= self.threshold

    def _emit(self, lvl: Level, msg: str, **extra: Any):
        if not self.is_enabled(lvl):
            return
        ts = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")
        extras = ""
        if extra:
            kv = " ".join(f"{k}={v}" for k,v in extra.items())
            extras = " " + kv
        color, reset = (COLORS[lvl], RESET) if self.color else ("", "")
        out = self.stream if self.stream is not None else sys.stdout
        out.write(f"{color}{ts} [{lvl}] {msg}{extras}{reset}\n")

    def trace(self, msg: str, **kw): self._emit("TRACE", msg, **kw)
    def debug(self, msg: str, **kw): self._emit("DEBUG", msg, **kw)
    def info(self, msg: str, **kw): self._emit("INFO", msg, **kw)
    def warn(self, msg: str, **kw): self._emit("WARN", msg, **kw)
    def error(self, msg: str, **kw): self._emit("ERROR", msg, **kw)

logger = Logger("INFO")
