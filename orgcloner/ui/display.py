"""Live terminal display: a status line above a percentage bar."""

from __future__ import annotations

import sys

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn


class RichDisplay:
    """ProgressSink backed by ``rich.progress``.

    Use as a context manager; the bar is live between ``start`` and ``stop``.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)
        self._progress = Progress(
            TextColumn("[bold]{task.description}"),
            BarColumn(complete_style="blue", finished_style="green"),
            TaskProgressColumn(),
            TextColumn("{task.fields[status]}"),
            console=self.console,
        )
        self._task = self._progress.add_task("Progress", total=100, status="")

    def start(self) -> None:
        self._progress.start()

    def stop(self) -> None:
        self._progress.stop()

    def __enter__(self) -> RichDisplay:
        self.start()
        return self

    def __exit__(self, *exc: object) -> None:
        self.stop()

    # ---------- ProgressSink ----------
    def update(self, percent: int) -> None:
        self._progress.update(self._task, completed=max(0, min(percent, 100)))

    def message(self, text: str) -> None:
        self._progress.update(self._task, status=escape(text))

    def error(self, err: BaseException | str) -> None:
        self._progress.update(self._task, status=f"[red]\\[error] {escape(str(err))}")
        self.stop()
        sys.exit(1)
