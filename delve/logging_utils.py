"""Minimal structured logging helper.

Emits key=value pairs (or JSON lines) with a timestamp and level. Loggers
are plain values: the generator receives one as an argument instead of
reaching for a process-wide instance, so tests can hand in a logger bound
to their own stream.

Usage:
    from delve.logging_utils import get_logger
    log = get_logger("delve.topology")
    log.info(event="generation_start", seed=42)

All non-str key/value values are str()'d. Reserved keys: level, ts.
Environment defaults: DELVE_LOG_LEVEL (debug|info|warn|error),
DELVE_LOG_JSON (1/true/yes/on).
"""

from __future__ import annotations

import json
import os
import sys
import time
from typing import IO, Optional

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUE_VALUES = ("1", "true", "TRUE", "yes", "on")


def _format(level: str, json_mode: bool, **fields):
    if json_mode:
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
    def __init__(self, name: str | None = None, level: str | None = None, json_mode: bool | None = None, stream: Optional[IO[str]] = None):
        self.name = name or "delve"
        level = (level or os.getenv("DELVE_LOG_LEVEL", "info")).lower()
        self.threshold = LEVELS.get(level, 20)
        self.json_mode = json_mode if json_mode is not None else os.getenv("DELVE_LOG_JSON", "0") in _TRUE_VALUES
        self.stream = stream

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < self.threshold:
            return
        if "logger" not in fields:
            fields["logger"] = self.name
        out = self.stream or (sys.stdout if lvl != "error" else sys.stderr)
        print(_format(lvl, self.json_mode, **fields), file=out)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


def get_logger(name: str, level: str | None = None, json_mode: bool | None = None, stream: Optional[IO[str]] = None) -> _Logger:
    """Return a new logger handle; nothing is cached at module level."""
    return _Logger(name, level=level, json_mode=json_mode, stream=stream)

