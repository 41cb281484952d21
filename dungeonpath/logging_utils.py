"""Minimal structured logging helper.

Provides a lightweight wrapper around print() to emit key=value pairs with a
timestamp and level, so generation events stay grep-able in CI output and
server logs alike.

Usage:
    from dungeonpath.logging_utils import get_logger
    log = get_logger("dungeon")
    log.info(event="dungeon_generated", seed=42, rooms=17)

Level and format come from DUNGEONPATH_LOG_LEVEL (debug/info/warn/error) and
DUNGEONPATH_LOG_JSON. Reserved keys: level, ts, logger.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}


def _current_level() -> int:
    return LEVELS.get(os.getenv("DUNGEONPATH_LOG_LEVEL", "info").lower(), 20)


def _json_mode() -> bool:
    return os.getenv("DUNGEONPATH_LOG_JSON", "0").lower() in ("1", "true", "yes", "on")


def _format(level: str, **fields):
    if _json_mode():
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None, context: dict | None = None):
        self.name = name or "dungeonpath"
        self.context = dict(context or {})

    def bind(self, **context):
        """Return a logger that adds ``context`` to every record (explicit fields win)."""
        return _Logger(self.name, {**self.context, **context})

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < _current_level():
            return
        fields = {**self.context, **fields}
        fields.setdefault("logger", self.name)
        print(_format(lvl, **fields), file=sys.stdout if lvl != "error" else sys.stderr)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("dungeonpath")
