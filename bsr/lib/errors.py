"""
Error kinds shared by the parse/transform/save pipeline.

Results keep a plain ``errors`` list of human-readable strings (callers and
tests match on substrings such as "not found", "YAML", "Unsupported").
Alongside it, each result carries ``issues`` tagged with an ErrorKind so
callers can branch on the kind instead of the text.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    PARSE = "parse"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation"
    IO = "io"


@dataclass
class Issue:
    """A single pipeline error with its kind."""
    kind: ErrorKind
    message: str
    format: str | None = None  # "yaml", "markdown" for PARSE errors

    def __str__(self) -> str:
        return self.message


class IssueCollector:
    """Mixin for result objects holding errors, warnings and issues."""

    def add_error(self, kind: ErrorKind, message: str, format: str | None = None) -> None:
        self.errors.append(message)
        self.issues.append(Issue(kind=kind, message=message, format=format))

    def extend_from(self, other) -> None:
        """Append another result's errors/issues/warnings to this one."""
        self.errors.extend(other.errors)
        self.issues.extend(other.issues)
        self.warnings.extend(other.warnings)

    def has_error(self, kind: ErrorKind) -> bool:
        return any(issue.kind == kind for issue in self.issues)
