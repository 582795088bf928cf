"""
coffdump Error Types
=====================

Exception hierarchy for COFF decoding failures.  Every error raised while
walking a file derives from :class:`CoffError` and carries enough context
(phase, byte offset, owning section) to diagnose a malformed object file.

Command-line usage errors are reported by Click itself
(:class:`click.UsageError`) and are therefore not part of this hierarchy.
"""

from __future__ import annotations


class CoffError(Exception):
    """Base class for all decoding failures.

    Attributes:
        message: Human-readable description of the failure.
        phase:   Walker phase in which the failure occurred
                 (``header``, ``sections``, ``relocations``, ``symbols``).
        offset:  Absolute byte offset at which the failure was detected.
        section: 1-based section number for per-section failures.
    """

    def __init__(
        self,
        message: str,
        *,
        phase: str | None = None,
        offset: int | None = None,
        section: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.phase = phase
        self.offset = offset
        self.section = section

    def context(self) -> str:
        """Return the ``phase=... section=... offset=...`` suffix."""
        parts: list[str] = []
        if self.phase is not None:
            parts.append(f"phase={self.phase}")
        if self.section is not None:
            parts.append(f"section={self.section}")
        if self.offset is not None:
            parts.append(f"offset=0x{self.offset:x}")
        return " ".join(parts)

    def __str__(self) -> str:
        ctx = self.context()
        return f"{self.message} ({ctx})" if ctx else self.message


class ReadError(CoffError):
    """The byte source could not be opened, read, or repositioned."""


class TruncatedError(CoffError):
    """Fewer bytes remain than a fixed-width read requires."""

    def __init__(
        self,
        expected: int,
        available: int,
        *,
        offset: int | None = None,
        phase: str | None = None,
        section: int | None = None,
    ) -> None:
        super().__init__(
            f"Truncated read: expected {expected} bytes, {available} available",
            phase=phase,
            offset=offset,
            section=section,
        )
        self.expected = expected
        self.available = available


class OutOfRangeError(CoffError):
    """A seek target lies outside the byte source."""

    def __init__(
        self,
        target: int,
        size: int,
        *,
        phase: str | None = None,
        section: int | None = None,
    ) -> None:
        super().__init__(
            f"Seek target 0x{target:x} outside source of {size} bytes",
            phase=phase,
            offset=target,
            section=section,
        )
        self.target = target
        self.size = size


class NameEncodingError(CoffError):
    """A fixed-width name field is not valid text."""

    def __init__(self, raw: bytes) -> None:
        super().__init__(f"Name bytes are not valid text: {raw.hex(' ')}")
        self.raw = raw
