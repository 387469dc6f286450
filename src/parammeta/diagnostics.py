"""Diagnostic types collected while merging an overlay document.

The loader never raises for a bad document.  Instead it degrades the
affected part to blank metadata and records a ``LoadDiagnostic`` on the
resulting ``SchemaOverlay`` so that callers can surface what was lost.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class DiagnosticSeverity(Enum):
    """Severity levels for load diagnostics."""

    ERROR = auto()
    WARNING = auto()
    INFORMATION = auto()


class DiagnosticCode:
    """Machine-readable diagnostic codes."""

    NO_DOCUMENT = "NO_DOCUMENT"
    DOCUMENT_REJECTED = "DOCUMENT_REJECTED"
    INVALID_ENUM = "INVALID_ENUM"
    DUPLICATE_ENUM = "DUPLICATE_ENUM"
    DUPLICATE_ENUM_OPTION = "DUPLICATE_ENUM_OPTION"
    INVALID_FIELD_ENTRY = "INVALID_FIELD_ENTRY"
    UNRESOLVED_ENUM = "UNRESOLVED_ENUM"
    UNMATCHABLE_FIELD_NAME = "UNMATCHABLE_FIELD_NAME"
    UNMATCHED_ENTRY = "UNMATCHED_ENTRY"


@dataclass(frozen=True)
class LoadDiagnostic:
    """A single finding from one overlay load.

    Parameters
    ----------
    severity:
        How serious this finding is.
    code:
        One of the ``DiagnosticCode`` constants.
    message:
        Human-readable description of the problem.
    field_name:
        Internal name of the affected schema field, or the document key
        for entries that matched no field.
    index:
        Position of the affected field in the schema, when known.
    """

    severity: DiagnosticSeverity
    code: str
    message: str
    field_name: str | None = field(default=None)
    index: int | None = field(default=None)

    def __str__(self) -> str:
        prefix = f"[{self.code}] {self.severity.name}"
        if self.field_name is not None:
            loc = self.field_name if self.index is None else f"{self.field_name}#{self.index}"
            return f"{prefix} at {loc}: {self.message}"
        return f"{prefix}: {self.message}"

    @property
    def is_error(self) -> bool:
        """Return True if this diagnostic should fail a strict check."""
        return self.severity == DiagnosticSeverity.ERROR

    def promoted(self) -> "LoadDiagnostic":
        """Return a copy with WARNING promoted to ERROR."""
        if self.severity != DiagnosticSeverity.WARNING:
            return self
        return LoadDiagnostic(
            severity=DiagnosticSeverity.ERROR,
            code=self.code,
            message=self.message,
            field_name=self.field_name,
            index=self.index,
        )
