"""
Rotating Digest Exceptions
==========================
Exception classes for configuration, clock and hashing failures.
"""

from typing import Any, Optional


class RotatingDigestError(Exception):
    """Base exception for all rotating digest errors."""
    pass


class ConfigurationError(RotatingDigestError, ValueError):
    """Raised when the engine is constructed with invalid configuration."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        if field:
            super().__init__(f"Invalid {field}: {message}")
        else:
            super().__init__(message)


class ClockError(RotatingDigestError):
    """Raised when the clock reports a time the engine cannot use."""

    def __init__(self, message: str, reading: Any = None):
        self.reading = reading
        super().__init__(message)


class HashFunctionError(RotatingDigestError):
    """Raised when the injected hash function fails or returns a non-bytes value."""
    pass
