"""Error definitions for textcast."""

from __future__ import annotations

from typing import Any


class TextcastError(Exception):
    """Base class for textcast errors."""


class SerializationError(TextcastError, ValueError):
    """Raised when a value cannot be encoded as JSON text."""

    def __init__(self, value: Any, reason: str) -> None:
        super().__init__(f"marshal value, value: {value!r}: {reason}")
        self.value = value
        self.reason = reason
