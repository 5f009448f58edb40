"""Shared severity parsing utilities for parse log entries."""

from __future__ import annotations

from typing import Any


class SeverityMixin:
    """Mixin providing severity parsing from strings.

    This mixin expects the enum to have ERROR and WARNING members.
    INTERNAL_ERROR and INFORMATION are detected dynamically.
    """

    @classmethod
    def from_string(cls, s: str, default: Any = None) -> Any:
        """Parse severity from string.

        Args:
            s: String to parse (e.g., "error", "Warning", "info", "InternalError")
            default: Default value if no match found. If None, uses the
                     first enum member as default.

        Returns:
            Matching severity enum member.
        """
        s_lower = s.lower().strip()

        # Internal errors also contain "error", so check them first
        if hasattr(cls, "INTERNAL_ERROR") and "internal" in s_lower:
            return cls.INTERNAL_ERROR  # type: ignore[attr-defined]

        if "error" in s_lower:
            return cls.ERROR  # type: ignore[attr-defined]

        if "warn" in s_lower:
            return cls.WARNING  # type: ignore[attr-defined]

        if hasattr(cls, "INFORMATION") and "info" in s_lower:
            return cls.INFORMATION  # type: ignore[attr-defined]

        if default is not None:
            return default

        # Fall back to the least severe member
        members = list(cls)  # type: ignore[call-overload]
        return members[0] if members else cls.WARNING  # type: ignore[attr-defined]
