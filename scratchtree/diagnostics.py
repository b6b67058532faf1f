"""Diagnostic messages for the project structure extractor.

This module provides error and warning reporting during extraction,
tracking issues like unreadable archives, malformed project descriptions,
and scripts sections that never close. A failing project is reported here and
skipped; the rest of the run carries on.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class DiagnosticLevel(Enum):
    """Severity level for diagnostic messages."""
    ERROR = "Error"
    WARNING = "Warning"


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    level: DiagnosticLevel
    message: str
    project: str
    owner: Optional[int] = None
    line: Optional[int] = None
    line_text: Optional[str] = None

    def __str__(self) -> str:
        loc = f"Project '{self.project}'"
        if self.owner is not None:
            loc += f" (owner {self.owner})"
        if self.line is not None:
            loc += f" Line {self.line}"
        result = f"{self.level.value}: {self.message}: {loc}"
        if self.line_text:
            result += f"\n  -> {self.line_text}"
        return result


@dataclass
class DiagnosticContext:
    """Context for collecting diagnostics while extracting one project file."""
    project_name: str = ""
    owner_id: Optional[int] = None
    current_line: Optional[int] = None
    current_line_text: Optional[str] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def set_location(self, line_number: Optional[int], line_text: Optional[str] = None) -> None:
        """Set the current line context for subsequent diagnostics."""
        self.current_line = line_number
        self.current_line_text = line_text

    def clear_location(self) -> None:
        self.set_location(None, None)

    def add(
        self,
        level: DiagnosticLevel,
        message: str,
        line: Optional[int] = None,
        line_text: Optional[str] = None,
    ) -> None:
        """Add a diagnostic message."""
        self.diagnostics.append(Diagnostic(
            level=level,
            message=message,
            project=self.project_name,
            owner=self.owner_id,
            line=line if line is not None else self.current_line,
            line_text=line_text if line_text is not None else self.current_line_text,
        ))

    def error(self, message: str, line: Optional[int] = None, line_text: Optional[str] = None) -> None:
        """Add an error diagnostic."""
        self.add(DiagnosticLevel.ERROR, message, line, line_text)

    def warning(self, message: str, line: Optional[int] = None, line_text: Optional[str] = None) -> None:
        """Add a warning diagnostic."""
        self.add(DiagnosticLevel.WARNING, message, line, line_text)

    def has_errors(self) -> bool:
        """Check if any error diagnostics have been recorded."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.diagnostics)

    def get_warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level == DiagnosticLevel.WARNING]


class DiagnosticCollector:
    """Global collector for diagnostics across every project of a run."""

    def __init__(self) -> None:
        self.all_diagnostics: List[Diagnostic] = []

    def add_context_diagnostics(self, ctx: DiagnosticContext) -> None:
        """Add all diagnostics from a context."""
        self.all_diagnostics.extend(ctx.diagnostics)

    def has_errors(self) -> bool:
        return any(d.level == DiagnosticLevel.ERROR for d in self.all_diagnostics)

    def print_all(self) -> None:
        """Print all diagnostics to stdout."""
        for diag in self.all_diagnostics:
            print(diag)

    def summary(self) -> str:
        """Return a summary of diagnostics."""
        errors = sum(1 for d in self.all_diagnostics if d.level == DiagnosticLevel.ERROR)
        warnings = sum(1 for d in self.all_diagnostics if d.level == DiagnosticLevel.WARNING)
        parts = []
        if errors:
            parts.append(f"{errors} error{'s' if errors != 1 else ''}")
        if warnings:
            parts.append(f"{warnings} warning{'s' if warnings != 1 else ''}")
        return ", ".join(parts) if parts else "No issues"
