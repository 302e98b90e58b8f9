"""Error taxonomy for orgcloner."""

from __future__ import annotations


class OrgClonerError(RuntimeError):
    pass


class RemoteAPIError(OrgClonerError):
    """Listing the organisation's repositories failed. Fatal for the run."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class CloneError(OrgClonerError):
    pass


class ArchiveError(OrgClonerError):
    pass


class CleanupError(OrgClonerError):
    """The archive was written but the working copy could not be removed."""
