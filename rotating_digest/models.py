"""
Rotating Digest Models
======================
Configuration dataclass and capability types for the rotating digest engine.
"""

from dataclasses import dataclass, field
from typing import Callable, Union

import structlog

from .exceptions import ConfigurationError
from .hashing import sha256_digest

logger = structlog.get_logger(__name__)

HashFunction = Callable[[bytes], bytes]
Predicate = Callable[[bytes], bool]
SecretLike = Union[bytes, bytearray, memoryview, str]

DEFAULT_LOOKBACK_WINDOW_SIZE = 1


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class RotatingDigestConfig:
    """
    Immutable configuration for a RotatingDigest engine.

    The shared secret is stored as bytes and excluded from repr.
    """
    shared_secret: bytes = field(repr=False)
    rotation_period_seconds: int
    lookback_window_size: int = DEFAULT_LOOKBACK_WINDOW_SIZE
    hash_function: HashFunction = sha256_digest

    def __post_init__(self):
        secret = self.shared_secret
        if isinstance(secret, str):
            secret = secret.encode("utf-8")
        elif isinstance(secret, (bytearray, memoryview)):
            secret = bytes(secret)
        elif not isinstance(secret, bytes):
            raise ConfigurationError(
                f"expected bytes or str, got {type(secret).__name__}",
                field="shared_secret",
            )
        # frozen dataclass
        object.__setattr__(self, "shared_secret", secret)

        if not secret:
            logger.warning("Rotating digest configured with an empty shared secret")

        if not _is_int(self.rotation_period_seconds) or self.rotation_period_seconds <= 0:
            raise ConfigurationError(
                "must be a positive integer",
                field="rotation_period_seconds",
                value=self.rotation_period_seconds,
            )

        if not _is_int(self.lookback_window_size) or self.lookback_window_size < 0:
            raise ConfigurationError(
                "must be a non-negative integer",
                field="lookback_window_size",
                value=self.lookback_window_size,
            )

        if not callable(self.hash_function):
            raise ConfigurationError(
                "must be callable",
                field="hash_function",
                value=self.hash_function,
            )
