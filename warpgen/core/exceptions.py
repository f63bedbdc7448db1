"""Error taxonomy for template processing.

Fatal errors abort the current operation. The remaining errors are never
raised out of the engine: they are turned into diagnostics and collected
alongside the (possibly partial) output.
"""

from __future__ import annotations

from pathlib import Path


class WarpError(Exception):
    """Base exception for warpgen operations."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class TemplateNotFoundError(WarpError):
    """Raised when a template directory or template file does not exist."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Template not found: {path}")


class ParseError(WarpError):
    """Raised when a variables source cannot be read at all."""


class OptionsError(WarpError):
    """Raised when project options cannot be parsed."""


class RecoverableError(WarpError):
    """An anomaly recorded as a diagnostic instead of aborting."""

    code = "recoverable"

    def __init__(self, message: str, source: Path | None = None) -> None:
        self.source = source
        super().__init__(message)


class IncludeNotFoundError(RecoverableError):
    code = "include-not-found"


class IncludeCycleError(RecoverableError):
    code = "include-cycle"


class UnknownFunctionError(RecoverableError):
    code = "unknown-function"


class FileWriteError(RecoverableError):
    """A single output file could not be read from its source or written."""

    code = "file-write"
