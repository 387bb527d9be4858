from enum import Enum

from pydantic import BaseModel


class BuildError(Exception):
    """A configuration problem that stops the whole run."""


class SourceRootError(BuildError):
    pass


class OutputRootError(BuildError):
    pass


class UnmappablePathError(ValueError):
    """A source file that does not live under the source root."""


class SkipReason(str, Enum):
    unmappable = "unmappable"
    unreadable = "unreadable"
    not_utf8 = "not_utf8"
    render = "render"
    write = "write"


class SkippedFile(BaseModel):
    file: str
    reason: SkipReason
    error: str


class BuildReport(BaseModel):
    written: int = 0
    skipped: list[SkippedFile] = []
    duration: float = 0.0

    @property
    def total(self) -> int:
        return self.written + len(self.skipped)


class FileSkipped(Exception):
    """One file could not be converted; the run carries on without it."""

    def __init__(self, reason: SkipReason, cause: Exception) -> None:
        self.reason = reason
        super().__init__(str(cause))
