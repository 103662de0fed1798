# src/exceptions.py
"""
Shared exception classes used across the codebase.

This module centralizes the error taxonomy so callers can tell a malformed
record apart from a DNS failure without inspecting messages.
"""

from __future__ import annotations


class PodnsError(Exception):
    """Base class for every error raised by this package."""

    pass


class PronounParseError(PodnsError, ValueError):
    """
    Raised when a pronoun record (or a batch of records) is malformed.

    Examples:
        - Empty record
        - Fewer than 2 or more than 5 pronoun components
        - Empty component (trailing slash)
        - Non-letter characters in a component
        - Unknown tag token
    """

    def __init__(self, reason: str, raw: str | None = None) -> None:
        self.reason = reason
        self.raw = raw
        msg = reason if raw is None else f"{reason}: {raw!r}"
        super().__init__(msg)


class StructuralConflictError(PronounParseError):
    """
    Raised when records parse individually but the batch is invalid.

    Example: a none record ("!") published next to any other record.
    """

    pass


class ResolutionError(PodnsError):
    """
    Raised when TXT records cannot be fetched for a hostname.

    Examples:
        - Resolver timeout
        - No reachable nameservers
        - SERVFAIL / protocol errors
    """

    def __init__(self, hostname: str, detail: str) -> None:
        self.hostname = hostname
        self.detail = detail
        super().__init__(f"TXT lookup failed for {hostname}: {detail}")


__all__ = [
    "PodnsError",
    "PronounParseError",
    "StructuralConflictError",
    "ResolutionError",
]
