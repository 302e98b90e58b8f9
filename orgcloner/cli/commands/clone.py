"""CLI for cloning (and optionally compressing) every repository of an organisation."""

from __future__ import annotations

import typer

from ...config.settings import get_settings
from ...core.log import setup_logging
from ...services.clone import clone_org
from ...ui.display import RichDisplay


def clone(
    org: str | None = typer.Option(None, "--org", help="GitHub organisation to clone repos from"),
    token: str | None = typer.Option(None, "--token", help="GitHub token for authentication"),
    path: str | None = typer.Option(None, "--path", help="Path to clone the repos into"),
    compress: bool | None = typer.Option(
        None, "--compress/--no-compress", help="Compress each clone into <name>.tar.gz"
    ),
    jobs: int | None = typer.Option(None, "--jobs", "-j", min=1, help="Max concurrent clones (default: no cap)"),
    include_archived: bool = typer.Option(
        True, "--include-archived/--exclude-archived", help="Include archived repositories"
    ),
    fail_on_error: bool = typer.Option(False, "--fail-on-error", help="Exit 1 if any repository failed"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Clone every repository of an organisation, concurrently."""
    s = get_settings()
    _org = org or s.github_organization
    _token = token or s.github_token
    if not _org or not _token:
        typer.secho("GITHUB_ORGANIZATION and GITHUB_TOKEN must be set", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)

    with RichDisplay() as display:
        setup_logging(verbose, display.console)
        result = clone_org(
            org=_org,
            token=_token,
            dest=path or s.clone_path,
            compress=compress if compress is not None else s.compress,
            sink=display,
            jobs=jobs if jobs is not None else s.jobs,
            include_archived=include_archived,
        )

    for r in result.failed:
        typer.secho(f"[fail] {r.repo.name}: {r.outcome.value}: {r.error}", err=True, fg=typer.colors.RED)
    if fail_on_error and not result.ok:
        raise typer.Exit(code=1)
