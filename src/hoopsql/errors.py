"""🚨 Error types raised by hoopsql.

All errors carry a human-readable message plus optional key/value details
that the CLI prints alongside the message.
"""

from __future__ import annotations


class HoopsqlError(Exception):
    """Base exception for all hoopsql errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class QueryError(HoopsqlError):
    """Malformed query, unsupported statement, or unknown dataset/column."""


class TypeMismatchError(HoopsqlError):
    """An operation was applied to incompatible column types."""


class EncodingError(HoopsqlError):
    """A text value cannot be represented in the target encoding.

    Raised and handled inside the normalization layer only.
    """

    def __init__(self, value: str, encoding: str):
        super().__init__(
            "Value cannot be represented in target encoding",
            {"encoding": encoding, "value": repr(value[:40])},
        )
        self.value = value
        self.encoding = encoding


class DatasetError(HoopsqlError):
    """A dataset could not be loaded or is not usable as a table."""


class ConfigError(HoopsqlError):
    """Configuration file is missing or invalid."""
