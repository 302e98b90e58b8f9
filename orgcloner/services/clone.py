"""Service: list an organisation's repositories and run the clone pipeline."""

from __future__ import annotations

import logging
import os
import time

from ..core.errors import RemoteAPIError
from ..core.git_client import GitClient
from ..core.github_client import GitHubClient
from ..core.progress import NullSink, ProgressCounter, ProgressSink
from ..core.types import RunResult
from .pipeline import clone_and_compress_repos

logger = logging.getLogger(__name__)


def clone_org(
    *,
    org: str,
    token: str,
    dest: str,
    compress: bool,
    sink: ProgressSink | None = None,
    jobs: int | None = None,
    include_archived: bool = True,
    github: GitHubClient | None = None,
    git: GitClient | None = None,
) -> RunResult:
    """Clone (and optionally compress) every repository of ``org`` into ``dest``.

    Listing failures are fatal and go to ``sink.error``. Per-repository
    failures are logged and returned in the RunResult. Without a ``sink``
    nothing is displayed and fatal errors exit through NullSink.
    """
    sink = sink or NullSink()
    github = github or GitHubClient(token=token)

    sink.message("Fetching repos...")
    try:
        repos = github.list_org_repos(org, include_archived=include_archived)
    except RemoteAPIError as e:
        logger.error("Listing repositories of %s failed: %s", org, e)
        sink.error(e)
        raise  # sink.error exits; only reached with a non-exiting sink

    if not repos:
        sink.update(100)
        sink.message("No repositories found (check org name / permissions).")
        return RunResult()

    try:
        os.makedirs(dest, exist_ok=True)
    except OSError as e:
        logger.error("Cannot create %s: %s", dest, e)
        sink.error(e)
        raise
    logger.info("Found %d repositories in %s. Cloning to '%s'...", len(repos), org, dest)
    sink.message("Cloning and compressing repos..." if compress else "Cloning repos...")

    counter = ProgressCounter(len(repos), sink)
    start = time.time()
    try:
        result = clone_and_compress_repos(repos, token, dest, compress, counter.advance, jobs=jobs, git=git)
    except ValueError as e:
        # raised before any task starts: colliding or underivable working-copy paths
        logger.error("Cannot start cloning %s: %s", org, e)
        sink.error(e)
        raise
    secs = time.time() - start

    sink.message(f"Done! {len(result.succeeded)}/{len(result)} succeeded in {secs:.1f}s.")
    return result
