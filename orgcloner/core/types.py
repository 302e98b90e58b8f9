"""Small types and Enums used by orgcloner."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class RepoDescriptor:
    """A remote repository as returned by the organisation listing."""

    clone_url: str
    name: str


class Outcome(str, Enum):
    """How a single repository task concluded."""

    cloned = "cloned"
    archived = "archived"
    clone_failed = "clone_failed"
    archive_failed = "archive_failed"
    cleanup_failed = "cleanup_failed"

    @property
    def ok(self) -> bool:
        return self in (Outcome.cloned, Outcome.archived)


@dataclass
class TaskResult:
    repo: RepoDescriptor
    outcome: Outcome
    error: Exception | None = None


@dataclass
class RunResult:
    """Per-repository outcomes of a pipeline run, in input order."""

    results: list[TaskResult] = field(default_factory=list)

    @property
    def succeeded(self) -> list[TaskResult]:
        return [r for r in self.results if r.outcome.ok]

    @property
    def failed(self) -> list[TaskResult]:
        return [r for r in self.results if not r.outcome.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    def __len__(self) -> int:
        return len(self.results)
