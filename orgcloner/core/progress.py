"""Progress counting and the sink interface the pipeline reports through."""

from __future__ import annotations

import sys
import threading
from typing import Protocol


class ProgressSink(Protocol):
    """Where progress goes: percentages, status text, fatal errors."""

    def update(self, percent: int) -> None: ...

    def message(self, text: str) -> None: ...

    def error(self, err: BaseException | str) -> None:
        """Render ``err`` and terminate the process. Never returns."""
        ...


class NullSink:
    """Discards updates and messages. ``error`` still exits."""

    def update(self, percent: int) -> None:
        pass

    def message(self, text: str) -> None:
        pass

    def error(self, err: BaseException | str) -> None:
        print(f"[error] {err}", file=sys.stderr)
        sys.exit(1)


class ProgressCounter:
    """Count of concluded tasks out of a fixed total.

    ``advance`` is safe to call from any thread; the new percentage is pushed
    to the sink while the lock is held so the sink sees non-decreasing values.
    """

    def __init__(self, total: int, sink: ProgressSink | None = None) -> None:
        if total < 0:
            raise ValueError("total must be >= 0")
        self.total = total
        self.sink = sink
        self._completed = 0
        self._lock = threading.Lock()

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    @property
    def percent(self) -> int:
        with self._lock:
            return self._percent()

    def _percent(self) -> int:
        if self.total == 0:
            return 100
        return self._completed * 100 // self.total

    def advance(self) -> int:
        with self._lock:
            if self._completed >= self.total:
                raise RuntimeError(f"progress advanced past its total of {self.total}")
            self._completed += 1
            if self.sink is not None:
                self.sink.update(self._percent())
            return self._completed
