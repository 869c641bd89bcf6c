from __future__ import annotations
import os
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models import FileDiagnostic


def describe_os_error(exc: BaseException) -> str:
    """Return the human readable system error text for ``exc``."""
    if isinstance(exc, OSError) and exc.errno is not None:
        return exc.strerror or os.strerror(exc.errno)
    return str(exc) or exc.__class__.__name__


class WordscanError(Exception):
    pass


class TraversalError(WordscanError):
    """A directory or directory entry that the walker has to skip."""

    def __init__(self, path: str, reason: str, action: str = "Cannot access") -> None:
        super().__init__(f"{action} {path}: {reason}")
        self.path = path
        self.reason = reason


class PathTooLongError(TraversalError):
    def __init__(self, path: str, limit: int) -> None:
        super().__init__(path, f"exceeds {limit} bytes", action="Path too long, skipping")
        self.limit = limit


class FileOpenError(WordscanError):
    def __init__(
        self,
        path: str,
        reason: str,
        diagnostic: Optional["FileDiagnostic"] = None,
        diagnostic_error: Optional[str] = None,
    ) -> None:
        super().__init__(f"Cannot open file {path}: {reason}")
        self.path = path
        self.reason = reason
        self.diagnostic = diagnostic
        self.diagnostic_error = diagnostic_error


class BufferGrowthError(WordscanError):
    """Raised when the line buffer cannot grow to hold the current line."""

    def __init__(self, requested: int, reason: str) -> None:
        super().__init__(f"cannot grow line buffer to {requested} bytes: {reason}")
        self.requested = requested
        self.reason = reason
