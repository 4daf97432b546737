"""
Error taxonomy and diagnostic records.

Stages never print. They return `Diagnostic` records which the batch
driver aggregates and logs.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Severity(str, Enum):
    """Diagnostic severities."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class RemodelError(Exception):
    """Base class for errors raised while processing a schema document."""

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None):
        super().__init__(message)
        self.message = message
        self.line_number = line_number
        self.line = line

    def to_diagnostic(self, severity: Severity = Severity.ERROR) -> Diagnostic:
        return Diagnostic(
            severity=severity,
            code=self.__class__.__name__,
            message=self.message,
            line_number=self.line_number,
            line=self.line,
        )


class StructuralError(RemodelError):
    """Unbalanced or over-nested scope markers."""


class FieldArityError(RemodelError):
    """A field line that does not hold exactly two tokens."""


class UnknownTopLevelDirective(RemodelError):
    """A top-level line that is not a recognized `Set` directive.

    Never fatal: the line is reported and skipped.
    """


class SchemaValidationError(RemodelError):
    """A completed schema rejected by an enabled validation rule."""


class ArtifactWriteError(RemodelError):
    """Raised when a generated artifact cannot be written.

    This can happen when:
    - The artifact fails the structural sanity check
    - The target directory is not writable
    """


@dataclass(frozen=True)
class Diagnostic:
    """A structured log record produced by a pipeline stage."""

    severity: Severity
    code: str
    message: str
    line_number: int | None = None
    line: str | None = None
    source: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def with_source(self, source: str) -> Diagnostic:
        return replace(self, source=source)

    def format(self) -> str:
        """Render as a single human-readable line."""
        location = self.source or ""
        if self.line_number is not None:
            location = f"{location}:{self.line_number}" if location else f"line {self.line_number}"
        prefix = f"{location}: " if location else ""
        text = f"{prefix}[{self.code}] {self.message}"
        if self.line:
            text += f": {self.line}"
        return text
