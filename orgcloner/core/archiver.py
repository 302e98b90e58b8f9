"""Pack a working copy into ``<name>.tar.gz`` and remove the original tree."""

from __future__ import annotations

import logging
import os
import shutil
import tarfile
from collections.abc import Iterator
from pathlib import Path

from .constants import ARCHIVE_SUFFIX
from .errors import ArchiveError, CleanupError

logger = logging.getLogger(__name__)


def archive_path_for(working_copy: str | os.PathLike[str]) -> Path:
    p = Path(working_copy)
    return p.with_name(p.name + ARCHIVE_SUFFIX)


def iter_tree(root: Path) -> Iterator[Path]:
    """Yield ``root`` and everything below it in lexical path order.

    Symlinks to directories are yielded but not descended into.
    """
    yield root
    with os.scandir(root) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        path = Path(entry.path)
        if entry.is_dir(follow_symlinks=False):
            yield from iter_tree(path)
        else:
            yield path


def write_tarball(working_copy: Path, archive_path: Path) -> int:
    """Stream ``working_copy`` into a gzip tarball, one member at a time.

    Entries are named ``<basename>/<relative path>``. Regular file bodies are
    copied straight from disk into the compressor. Returns the member count.
    """
    base = working_copy.name
    count = 0
    with tarfile.open(archive_path, "w:gz") as tar:
        for path in iter_tree(working_copy):
            rel = path.relative_to(working_copy)
            arcname = base if rel == Path(".") else f"{base}/{rel.as_posix()}"
            info = tar.gettarinfo(str(path), arcname=arcname)
            if info is None:
                # sockets can't be represented in a tar stream
                logger.debug("Skipping unsupported file type: %s", path)
                continue
            if info.isreg():
                with open(path, "rb") as f:
                    tar.addfile(info, f)
            else:
                tar.addfile(info)
            count += 1
    return count


def archive_directory(
    working_copy: str | os.PathLike[str],
    archive_path: str | os.PathLike[str] | None = None,
) -> Path:
    """Archive ``working_copy`` and delete it.

    Raises ArchiveError when the tarball can't be produced (the partial archive
    is removed, the working copy kept) and CleanupError when the tarball was
    written but the working copy could not be deleted (the archive is kept).
    """
    src = Path(working_copy)
    dst = Path(archive_path) if archive_path is not None else archive_path_for(src)

    if not src.is_dir():
        raise ArchiveError(f"working copy not found: {src}")

    try:
        members = write_tarball(src, dst)
    except (OSError, tarfile.TarError) as e:
        dst.unlink(missing_ok=True)
        raise ArchiveError(f"archiving {src} into {dst}: {e}") from e
    logger.debug("Wrote %s (%d entries)", dst, members)

    try:
        shutil.rmtree(src)
    except OSError as e:
        raise CleanupError(f"removing {src} after archiving: {e}") from e
    return dst
