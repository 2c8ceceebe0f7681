"""
Exception hierarchy for localstorage.

None of these escape a public ``LocalStorage`` operation: the facade
absorbs engine failures and reports them as ``False`` (or ``None`` for
reads). They are raised by the engines themselves, so code talking to an
engine directly can tell the failure kinds apart.
"""

from __future__ import annotations


class LocalStorageError(Exception):
    """Base exception for all localstorage errors."""


class EngineUnavailableError(LocalStorageError):
    """Host storage facility is absent or failed its usability probe."""


class WriteRejectedError(LocalStorageError):
    """Host storage facility refused a write (clear, set or remove).

    The underlying error (usually an ``OSError``) is chained as
    ``__cause__``.
    """

    def __init__(self, message: str, *, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)


class InvalidArgumentError(LocalStorageError, TypeError):
    """``set_item`` was called without a value."""


class DecodeError(LocalStorageError, ValueError):
    """Stored text is not valid JSON."""
