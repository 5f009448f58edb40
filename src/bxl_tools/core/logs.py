"""Parse log entries and the immutable log returned with every document."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from .severity import SeverityMixin


class LogSeverity(SeverityMixin, Enum):
    """Severity of a parse diagnostic, ordered from least to most severe."""

    INFORMATION = "information"
    WARNING = "warning"
    ERROR = "error"
    INTERNAL_ERROR = "internal_error"

    @property
    def rank(self) -> int:
        """Position in severity order, 0 for INFORMATION."""
        return _SEVERITY_ORDER.index(self)

    @property
    def is_error(self) -> bool:
        return self in (LogSeverity.ERROR, LogSeverity.INTERNAL_ERROR)


_SEVERITY_ORDER = tuple(LogSeverity)


@dataclass(frozen=True)
class LogEntry:
    """A single diagnostic produced while parsing."""

    severity: LogSeverity
    message: str

    @property
    def is_error(self) -> bool:
        """True for ERROR and INTERNAL_ERROR entries."""
        return self.severity.is_error

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict:
        return {"severity": self.severity.value, "message": self.message}


@dataclass(frozen=True)
class Logs:
    """Ordered, read-only sequence of log entries for one parse call."""

    entries: tuple[LogEntry, ...] = ()

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> LogEntry:
        return self.entries[index]

    @property
    def has_errors(self) -> bool:
        """True if any entry is an ERROR or INTERNAL_ERROR."""
        return any(e.is_error for e in self.entries)

    @property
    def errors(self) -> list[LogEntry]:
        """Get ERROR and INTERNAL_ERROR entries."""
        return [e for e in self.entries if e.is_error]

    @property
    def warnings(self) -> list[LogEntry]:
        """Get WARNING entries."""
        return [e for e in self.entries if e.severity == LogSeverity.WARNING]

    @property
    def informations(self) -> list[LogEntry]:
        """Get INFORMATION entries."""
        return [e for e in self.entries if e.severity == LogSeverity.INFORMATION]

    @property
    def error_count(self) -> int:
        return sum(1 for e in self.entries if e.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for e in self.entries if e.severity == LogSeverity.WARNING)

    def filter(self, min_severity: LogSeverity) -> list[LogEntry]:
        """Get entries at or above the given severity."""
        return [e for e in self.entries if e.severity.rank >= min_severity.rank]

    def summary(self) -> dict:
        """Count entries per severity."""
        return {
            "total": len(self.entries),
            "has_errors": self.has_errors,
            "by_severity": {
                severity.value: sum(1 for e in self.entries if e.severity == severity)
                for severity in LogSeverity
            },
        }
