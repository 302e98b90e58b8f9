"""Service: clone (and optionally archive) every repository concurrently."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ..core.archiver import archive_directory
from ..core.errors import ArchiveError, CleanupError, CloneError
from ..core.git_client import GitClient, working_copy_path
from ..core.types import Outcome, RepoDescriptor, RunResult, TaskResult

logger = logging.getLogger(__name__)

Archiver = Callable[[Path], Path]


def _check_distinct_paths(repos: Sequence[RepoDescriptor], dest: str | os.PathLike[str]) -> None:
    seen: dict[Path, RepoDescriptor] = {}
    for r in repos:
        p = working_copy_path(r, dest)
        if p in seen:
            raise ValueError(f"{r.clone_url} and {seen[p].clone_url} would both clone into {p}")
        seen[p] = r


def _process_one(
    repo: RepoDescriptor,
    token: str | None,
    dest: str | os.PathLike[str],
    compress: bool,
    git: GitClient,
    archiver: Archiver,
) -> TaskResult:
    logger.info("Cloning repo: %s", repo.clone_url)
    try:
        path = git.clone(repo, token, dest)
    except CloneError as e:
        logger.error("[fail] %s: %s", repo.name, e)
        return TaskResult(repo, Outcome.clone_failed, e)
    except Exception as e:
        logger.exception("[fail] %s: unexpected error while cloning", repo.name)
        return TaskResult(repo, Outcome.clone_failed, e)

    if not compress:
        logger.debug("[ok] %s -> %s", repo.name, path)
        return TaskResult(repo, Outcome.cloned)

    try:
        archive = archiver(path)
    except ArchiveError as e:
        logger.error("[fail] %s: %s", repo.name, e)
        return TaskResult(repo, Outcome.archive_failed, e)
    except CleanupError as e:
        logger.error("[fail] %s: %s", repo.name, e)
        return TaskResult(repo, Outcome.cleanup_failed, e)
    except Exception as e:
        logger.exception("[fail] %s: unexpected error while archiving", repo.name)
        return TaskResult(repo, Outcome.archive_failed, e)
    logger.debug("[ok] %s -> %s", repo.name, archive)
    return TaskResult(repo, Outcome.archived)


def clone_and_compress_repos(
    repos: Sequence[RepoDescriptor],
    token: str | None,
    dest: str | os.PathLike[str],
    compress: bool,
    on_progress: Callable[[], object],
    *,
    jobs: int | None = None,
    git: GitClient | None = None,
    archiver: Archiver = archive_directory,
) -> RunResult:
    """Run one task per repository and wait for all of them.

    ``jobs=None`` gives every repository its own worker; an integer caps the
    number of concurrent tasks. ``on_progress`` is called exactly once per
    task, whether it succeeded or failed. Per-task failures are logged and
    reported in the result, never raised.
    """
    if jobs is not None and jobs < 1:
        raise ValueError("jobs must be >= 1")
    if not repos:
        return RunResult()
    _check_distinct_paths(repos, dest)
    git = git or GitClient()

    def task(repo: RepoDescriptor) -> TaskResult:
        try:
            return _process_one(repo, token, dest, compress, git, archiver)
        finally:
            on_progress()

    workers = len(repos) if jobs is None else min(jobs, len(repos))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="orgcloner") as pool:
        futures = [pool.submit(task, r) for r in repos]
        results = [fut.result() for fut in futures]

    failed = sum(1 for r in results if not r.outcome.ok)
    logger.info("Processed %d repositories, %d failed", len(results), failed)
    return RunResult(results)
