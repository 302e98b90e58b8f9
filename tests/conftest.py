"""Shared test fixtures."""

from __future__ import annotations

import sys
import threading
from pathlib import Path

import pytest

from orgcloner.core.errors import CloneError
from orgcloner.core.git_client import working_copy_path
from orgcloner.core.types import RepoDescriptor


class RecordingSink:
    """ProgressSink that remembers everything it was given."""

    def __init__(self) -> None:
        self.percents: list[int] = []
        self.messages: list[str] = []
        self.errors: list[str] = []
        self._lock = threading.Lock()

    def update(self, percent: int) -> None:
        with self._lock:
            self.percents.append(percent)

    def message(self, text: str) -> None:
        self.messages.append(text)

    def error(self, err) -> None:
        self.errors.append(str(err))
        sys.exit(1)


class FakeGit:
    """Stands in for GitClient: writes a tiny tree instead of running git."""

    def __init__(self, fail: set[str] | None = None) -> None:
        self.fail = fail or set()
        self.calls: list[tuple[str, str | None]] = []
        self._lock = threading.Lock()

    def clone(self, repo: RepoDescriptor, token: str | None, dest) -> Path:
        with self._lock:
            self.calls.append((repo.name, token))
        if repo.name in self.fail:
            raise CloneError(f"cloning {repo.name}: authentication failed")
        target = working_copy_path(repo, dest)
        make_tree(target, repo.name)
        return target


def make_tree(root: Path, name: str = "repo") -> Path:
    (root / ".git").mkdir(parents=True)
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    (root / "README.md").write_text(f"# {name}\n")
    (root / "src").mkdir()
    (root / "src" / "app.py").write_text("print('hello')\n")
    return root


def make_repos(n: int, org: str = "acme") -> list[RepoDescriptor]:
    return [
        RepoDescriptor(clone_url=f"https://github.com/{org}/repo{i}.git", name=f"repo{i}")
        for i in range(1, n + 1)
    ]


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def repos() -> list[RepoDescriptor]:
    return make_repos(5)
