"""Tests for bxl_tools.core.logs module."""

import itertools

import pytest

from bxl_tools.core.logs import LogEntry, Logs, LogSeverity


def make_logs():
    return Logs(
        (
            LogEntry(LogSeverity.INFORMATION, ":1:1 note"),
            LogEntry(LogSeverity.WARNING, ":2:1 careful"),
            LogEntry(LogSeverity.ERROR, ":3:1 broken"),
            LogEntry(LogSeverity.WARNING, ":4:1 careful again"),
        )
    )


class TestLogSeverity:
    """Tests for severity ordering and parsing."""

    def test_rank_order(self):
        """Severities are ordered from information to internal error."""
        ranks = [s.rank for s in LogSeverity]
        assert ranks == sorted(ranks)
        assert LogSeverity.INFORMATION.rank == 0

    def test_is_error(self):
        """Only the two error severities count as errors."""
        assert LogSeverity.ERROR.is_error
        assert LogSeverity.INTERNAL_ERROR.is_error
        assert not LogSeverity.WARNING.is_error

    def test_from_string(self):
        """Severity names parse loosely."""
        assert LogSeverity.from_string("Warning") is LogSeverity.WARNING
        assert LogSeverity.from_string("info") is LogSeverity.INFORMATION
        assert LogSeverity.from_string("InternalError") is LogSeverity.INTERNAL_ERROR
        assert LogSeverity.from_string("error") is LogSeverity.ERROR

    def test_from_string_default(self):
        """Unknown names fall back to the least severe member."""
        assert LogSeverity.from_string("whatever") is LogSeverity.INFORMATION


class TestLogs:
    """Tests for the immutable log sequence."""

    def test_sequence_protocol(self):
        """Logs iterate, index and report their length in order."""
        logs = make_logs()
        assert len(logs) == 4
        assert logs[2].message == ":3:1 broken"
        assert [e.severity for e in logs][0] is LogSeverity.INFORMATION

    def test_empty(self):
        """An empty log has no errors."""
        logs = Logs()
        assert len(logs) == 0
        assert not logs.has_errors

    @pytest.mark.parametrize(
        "severities",
        [combo for n in range(4) for combo in itertools.product(LogSeverity, repeat=n)],
        ids=lambda combo: "-".join(s.value for s in combo) or "none",
    )
    def test_has_errors_for_any_mix(self, severities):
        """has_errors holds exactly when an error or internal error is present."""
        logs = Logs(tuple(LogEntry(s, f":{i}:1 entry") for i, s in enumerate(severities, 1)))
        expected = any(
            s in (LogSeverity.ERROR, LogSeverity.INTERNAL_ERROR) for s in severities
        )
        assert logs.has_errors is expected
        assert (logs.error_count > 0) is expected

    def test_counts(self):
        """Entries are counted by severity."""
        logs = make_logs()
        assert logs.has_errors
        assert logs.error_count == 1
        assert logs.warning_count == 2
        assert len(logs.informations) == 1
        assert [e.message for e in logs.errors] == [":3:1 broken"]

    def test_filter(self):
        """Filtering keeps entries at or above a severity."""
        logs = make_logs()
        assert len(logs.filter(LogSeverity.INFORMATION)) == 4
        assert len(logs.filter(LogSeverity.WARNING)) == 3
        assert len(logs.filter(LogSeverity.ERROR)) == 1

    def test_summary(self):
        """Summary counts every severity, including absent ones."""
        summary = make_logs().summary()
        assert summary == {
            "total": 4,
            "has_errors": True,
            "by_severity": {
                "information": 1,
                "warning": 2,
                "error": 1,
                "internal_error": 0,
            },
        }

    def test_entry_to_dict(self):
        """Entries serialize to plain dicts."""
        entry = LogEntry(LogSeverity.WARNING, ":1:1 x")
        assert entry.to_dict() == {"severity": "warning", "message": ":1:1 x"}
        assert str(entry) == ":1:1 x"
