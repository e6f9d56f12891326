"""Publish/subscribe bus for log records.

Every line the core logger emits is published here. Subscribers are the
observability hook for embedding applications: they may forward records to
their own logging stack, collect them in tests, or drop them.

Publishing is fail-safe: a raising subscriber never breaks the caller.
"""

from __future__ import annotations

import contextlib
import sys
import traceback
from collections.abc import Callable
from dataclasses import dataclass

LogCallback = Callable[["LogRecord"], None]


@dataclass(frozen=True)
class LogRecord:
    level_name: str
    message: str
    logger_name: str

    @property
    def plain(self) -> str:
        """Uncoloured console form, e.g. ``[info] copied 3 files``."""
        return f"[{self.level_name.lower()}] {self.message}"


class LogBus:
    def __init__(self) -> None:
        self._subs_by_level: dict[str, list[LogCallback]] = {}
        self._subs_all: list[LogCallback] = []

    def subscribe(self, level_name: str, cb: LogCallback) -> None:
        self._subs_by_level.setdefault(level_name.upper(), []).append(cb)

    def unsubscribe(self, level_name: str, cb: LogCallback) -> None:
        subs = self._subs_by_level.get(level_name.upper())
        if not subs or cb not in subs:
            return
        subs.remove(cb)
        if not subs:
            del self._subs_by_level[level_name.upper()]

    def subscribe_all(self, cb: LogCallback) -> None:
        self._subs_all.append(cb)

    def unsubscribe_all(self, cb: LogCallback) -> None:
        if cb in self._subs_all:
            self._subs_all.remove(cb)

    def publish(self, record: LogRecord) -> None:
        targets = list(self._subs_all) + list(self._subs_by_level.get(record.level_name, []))
        for cb in targets:
            try:
                cb(record)
            except Exception:
                # Never route this through the core logger (recursion).
                msg = "LogBus subscriber raised; suppressed.\n" + traceback.format_exc()
                with contextlib.suppress(Exception):
                    sys.stderr.write(msg)

    def clear(self) -> None:
        self._subs_by_level.clear()
        self._subs_all.clear()


_LOG_BUS: LogBus | None = None


def get_log_bus() -> LogBus:
    global _LOG_BUS
    if _LOG_BUS is None:
        _LOG_BUS = LogBus()
    return _LOG_BUS
