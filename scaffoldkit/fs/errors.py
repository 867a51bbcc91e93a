"""Error taxonomy, operation results and the reporting policy.

Every public file operation is a boundary: failures are caught there,
reported once through :class:`ErrorPolicy` and handed back to the caller as
an :class:`OperationResult` instead of an exception.  A failed step therefore
never aborts the rest of a scaffolding run, while callers and tests can still
inspect what happened.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from rich.console import Console

from scaffoldkit.config import ProjectContext
from scaffoldkit.utils import console as default_console
from scaffoldkit.utils import print_error

if TYPE_CHECKING:
    from scaffoldkit.fs.changelog import Classification


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Base class for failures raised inside scaffoldkit operations."""


class InvalidArgument(ScaffoldError):
    """The caller supplied arguments the operation cannot act on."""


class MissingArgument(ScaffoldError):
    """A required argument was not supplied."""


class PathRequired(MissingArgument):
    """A file operation was called without a path."""


class IOFailure(ScaffoldError):
    """An underlying read, write, rename, mkdir, readdir or rmdir failed."""


class ManifestMissing(ScaffoldError):
    """The project manifest could not be read."""


class ManifestParseFailure(ScaffoldError):
    """The project manifest is not a valid package descriptor."""


class FailureKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    MISSING_ARGUMENT = "missing_argument"
    IO_FAILURE = "io_failure"
    MANIFEST_MISSING = "manifest_missing"
    MANIFEST_PARSE_FAILURE = "manifest_parse_failure"


_KIND_BY_ERROR: dict[type[ScaffoldError], FailureKind] = {
    InvalidArgument: FailureKind.INVALID_ARGUMENT,
    MissingArgument: FailureKind.MISSING_ARGUMENT,
    PathRequired: FailureKind.MISSING_ARGUMENT,
    IOFailure: FailureKind.IO_FAILURE,
    ManifestMissing: FailureKind.MANIFEST_MISSING,
    ManifestParseFailure: FailureKind.MANIFEST_PARSE_FAILURE,
}


def kind_of(error: BaseException) -> FailureKind:
    """Map an exception to its ``FailureKind``; unknown errors count as IO."""
    for cls in type(error).__mro__:
        if cls in _KIND_BY_ERROR:
            return _KIND_BY_ERROR[cls]
    return FailureKind.IO_FAILURE


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class OperationResult:
    """Outcome of a single file operation.

    Attributes:
        ok: Whether the operation completed.
        classification: Change label for successful operations.
        path: The path acted on, as written to disk.
        kind: Failure category, ``None`` on success.
        message: The line that was reported.
        error: The raw exception behind a failure.
        children: Per-entry results of composite operations.
    """

    ok: bool
    classification: Classification | None = None
    path: str | None = None
    kind: FailureKind | None = None
    message: str = ""
    error: BaseException | None = None
    children: list["OperationResult"] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(
        cls,
        classification: Classification | None = None,
        path: str | None = None,
        message: str = "",
    ) -> "OperationResult":
        return cls(ok=True, classification=classification, path=path, message=message)

    @classmethod
    def failure(
        cls,
        kind: FailureKind,
        message: str,
        error: BaseException | None = None,
        path: str | None = None,
    ) -> "OperationResult":
        return cls(ok=False, kind=kind, message=message, error=error, path=path)


# ---------------------------------------------------------------------------
# Reporting policy
# ---------------------------------------------------------------------------


class ErrorPolicy:
    """Environment-sensitive failure reporting.

    In normal mode only the context message is shown.  In verbose mode the
    raw error is appended as ``"<context>. ERROR: <error>"``.  Nothing is
    ever re-raised.
    """

    def __init__(self, context: ProjectContext, out: Console | None = None) -> None:
        self.context = context
        self.console = out or default_console

    def format(self, context_message: str, raw_error: BaseException | str | None) -> str:
        if self.context.verbose and raw_error is not None:
            return f"{context_message}. ERROR: {raw_error}"
        return context_message

    def report_failure(
        self,
        context_message: str,
        raw_error: BaseException | None,
        kind: FailureKind | None = None,
        path: str | None = None,
    ) -> OperationResult:
        """Print *context_message* (plus the raw error when verbose)."""
        message = self.format(context_message, raw_error)
        print_error(message, self.console)
        if kind is None:
            kind = kind_of(raw_error) if raw_error is not None else FailureKind.IO_FAILURE
        return OperationResult.failure(kind, message, error=raw_error, path=path)

    def report_invalid(self, error: ScaffoldError) -> OperationResult:
        """Print an argument error detected before any IO took place."""
        message = str(error)
        print_error(message, self.console)
        return OperationResult.failure(kind_of(error), message, error=error)
