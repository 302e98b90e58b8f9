"""Small helpers for running git clone into per-repository working copies."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from urllib.parse import urlparse

from .constants import GIT_TIMEOUT_SEC
from .errors import CloneError
from .github_client import GitHubClient
from .types import RepoDescriptor

logger = logging.getLogger(__name__)


def local_name(repo: RepoDescriptor) -> str:
    """Directory name for ``repo``: last segment of the clone URL minus ``.git``."""
    path = urlparse(repo.clone_url).path.rstrip("/")
    name = path.rsplit("/", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    name = name or repo.name
    if name in ("", ".", "..") or os.sep in name:
        raise ValueError(f"cannot derive a local directory from {repo.clone_url!r}")
    return name


def working_copy_path(repo: RepoDescriptor, dest: str | os.PathLike[str]) -> Path:
    return Path(dest) / local_name(repo)


class GitClient:
    def __init__(self, git: str = "git", timeout: float = GIT_TIMEOUT_SEC) -> None:
        self.git = git
        self.timeout = timeout

    # ---------- process helpers ----------
    def _run(self, cmd: list[str], cwd: str | None = None, secret: str | None = None) -> None:
        env = os.environ.copy()
        env["GIT_TERMINAL_PROMPT"] = "0"
        try:
            subprocess.run(
                cmd, cwd=cwd, env=env, check=True, capture_output=True, text=True, timeout=self.timeout
            )
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
            raise CloneError(_redact(f"git failed: {detail}", secret)) from None
        except subprocess.TimeoutExpired:
            raise CloneError(f"git timed out after {self.timeout}s") from None
        except OSError as e:
            raise CloneError(f"could not run {self.git!r}: {e}") from e

    # ---------- clone ----------
    def clone(self, repo: RepoDescriptor, token: str | None, dest: str | os.PathLike[str]) -> Path:
        """Full clone of ``repo`` into ``dest``; returns the working copy path.

        Raises CloneError. A working copy created by a failed attempt is removed.
        """
        target = working_copy_path(repo, dest)
        url = repo.clone_url
        if token and url.startswith("https://"):
            url = GitHubClient.inject_token_into_https(url, token)

        existed = target.exists()
        # disable credential helpers so a bad token fails fast instead of prompting
        cmd = [self.git, "-c", "credential.helper=", "clone", url, str(target)]
        try:
            self._run(cmd, secret=token)
        except CloneError as e:
            if not existed and target.exists():
                shutil.rmtree(target, ignore_errors=True)
            raise CloneError(f"cloning {repo.name}: {e}") from e.__cause__
        return target


def _redact(text: str, secret: str | None) -> str:
    return text.replace(secret, "***") if secret else text
