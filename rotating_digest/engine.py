"""
Rotating Digest Engine
======================
Time-rotating digests derived from a shared secret.

A digest is hash(salt || shared_secret || int64_be(rotation_index + offset)),
where rotation_index = unix_seconds // rotation_period_seconds. Both sides of
a conversation that share the secret compute the same digest for the same
rotation without talking to each other. Verification accepts the current
rotation and up to lookback_window_size previous ones, never future ones.
"""

import hashlib
import math
from typing import Optional

import structlog

from .clock import Clock, system_clock
from .config import load_config_from_env
from .exceptions import ClockError, HashFunctionError
from .hashing import encode_rotation, matches, sha256_digest
from .models import (
    DEFAULT_LOOKBACK_WINDOW_SIZE,
    HashFunction,
    Predicate,
    RotatingDigestConfig,
    SecretLike,
)

logger = structlog.get_logger(__name__)


def _fingerprint(salt: str) -> str:
    """Short, non-reversible salt identifier for logs."""
    return hashlib.sha256(salt.encode("utf-8")).hexdigest()[:8]


class RotatingDigest:
    """
    Generates and verifies rotating digests.

    Instances hold only immutable configuration and can be shared across
    threads without locking.
    """

    def __init__(
        self,
        shared_secret: SecretLike,
        rotation_period_seconds: int,
        lookback_window_size: int = DEFAULT_LOOKBACK_WINDOW_SIZE,
        hash_function: Optional[HashFunction] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Args:
            shared_secret: Secret shared with the other party
            rotation_period_seconds: Seconds after which the digest rotates
            lookback_window_size: Number of previous rotations accepted by is_valid
            hash_function: bytes -> bytes digest function, SHA-256 by default
            clock: Callable returning seconds since the Unix epoch

        Raises:
            ConfigurationError: If any configuration value is invalid
        """
        self._config = RotatingDigestConfig(
            shared_secret=shared_secret,
            rotation_period_seconds=rotation_period_seconds,
            lookback_window_size=lookback_window_size,
            hash_function=hash_function if hash_function is not None else sha256_digest,
        )
        self._clock = clock if clock is not None else system_clock

    @classmethod
    def default(cls, shared_secret: SecretLike, rotation_period_seconds: int) -> "RotatingDigest":
        """Engine with a lookback window of 1 and the default hash function."""
        return cls(shared_secret, rotation_period_seconds)

    @classmethod
    def from_config(
        cls,
        config: RotatingDigestConfig,
        clock: Optional[Clock] = None,
    ) -> "RotatingDigest":
        return cls(
            config.shared_secret,
            config.rotation_period_seconds,
            lookback_window_size=config.lookback_window_size,
            hash_function=config.hash_function,
            clock=clock,
        )

    @classmethod
    def from_env(cls, clock: Optional[Clock] = None, **overrides) -> "RotatingDigest":
        """
        Build an engine from ROTATING_DIGEST_* environment variables.

        Args:
            clock: Optional clock source
            **overrides: Explicit configuration values

        Raises:
            ConfigurationError: If the secret is missing or a value is invalid
        """
        return cls.from_config(load_config_from_env(**overrides), clock=clock)

    @property
    def config(self) -> RotatingDigestConfig:
        return self._config

    @property
    def shared_secret(self) -> bytes:
        return self._config.shared_secret

    @property
    def rotation_period_seconds(self) -> int:
        return self._config.rotation_period_seconds

    @property
    def lookback_window_size(self) -> int:
        return self._config.lookback_window_size

    @property
    def hash_function(self) -> HashFunction:
        return self._config.hash_function

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"rotation_period_seconds={self.rotation_period_seconds}, "
            f"lookback_window_size={self.lookback_window_size}, "
            f"hash_function={getattr(self.hash_function, '__name__', self.hash_function)!s})"
        )

    def _now(self) -> int:
        reading = self._clock()
        if isinstance(reading, bool) or not isinstance(reading, (int, float)):
            logger.error("Clock returned a non-numeric value", reading_type=type(reading).__name__)
            raise ClockError("Clock returned a non-numeric value", reading=reading)
        if isinstance(reading, float) and not math.isfinite(reading):
            logger.error("Clock returned a non-finite value", reading=reading)
            raise ClockError("Clock returned a non-finite value", reading=reading)
        if reading < 0:
            logger.error("Clock is before the Unix epoch", reading=reading)
            raise ClockError("Clock is before the Unix epoch", reading=reading)
        return int(reading)

    def current_rotation(self) -> int:
        """Return the rotation index for the current clock reading."""
        return self._now() // self.rotation_period_seconds

    def calculate_digest(self, salt: str, offset: int) -> bytes:
        """
        Calculate the digest for the current rotation shifted by offset.

        Args:
            salt: Subject identifier, e.g. a client ID
            offset: Rotations relative to the current one, usually in
                [-lookback_window_size, 0]

        Returns:
            Digest bytes

        Raises:
            ClockError: If the clock reading is unusable
            HashFunctionError: If the hash function fails
        """
        if not isinstance(salt, str):
            raise TypeError(f"salt must be str, not {type(salt).__name__}")
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise TypeError(f"offset must be int, not {type(offset).__name__}")

        rotation = self.current_rotation() + offset
        data = salt.encode("utf-8") + self.shared_secret + encode_rotation(rotation)

        try:
            digest = self.hash_function(data)
        except Exception as exc:
            logger.error(
                "Hash function failed",
                hash_function=getattr(self.hash_function, "__name__", None),
                error=str(exc),
            )
            raise HashFunctionError(f"Hash function failed: {exc}") from exc

        if not isinstance(digest, (bytes, bytearray, memoryview)):
            logger.error("Hash function returned non-bytes", result_type=type(digest).__name__)
            raise HashFunctionError(
                f"Hash function must return bytes, not {type(digest).__name__}"
            )

        logger.debug("Digest calculated", salt=_fingerprint(salt), offset=offset)
        return bytes(digest)

    def digest(self, salt: str) -> bytes:
        """Return the digest for the current rotation."""
        return self.calculate_digest(salt, 0)

    def hexdigest(self, salt: str) -> str:
        return self.digest(salt).hex()

    def is_valid(self, salt: str, predicate: Predicate) -> bool:
        """
        Check the current and lookback_window_size previous rotations.

        The predicate is called with each candidate digest, newest first,
        until it returns True. It is called at most lookback_window_size + 1
        times.

        Args:
            salt: Subject identifier
            predicate: Receives a candidate digest, returns whether it matches

        Returns:
            True if any rotation in the window satisfied the predicate
        """
        for index in range(self.lookback_window_size + 1):
            if predicate(self.calculate_digest(salt, -index)):
                logger.debug(
                    "Digest verified",
                    salt=_fingerprint(salt),
                    rotations_back=index,
                )
                return True

        logger.warning(
            "Digest verification failed",
            salt=_fingerprint(salt),
            window=self.lookback_window_size,
        )
        return False

    def verify(self, salt: str, code) -> bool:
        """
        Verify a submitted code with constant-time comparison.

        Args:
            salt: Subject identifier
            code: Digest bytes or their hex representation

        Returns:
            True if the code matches a rotation in the window

        Raises:
            ValueError: If a string code is not valid hex
            TypeError: If the code is not bytes-like or str
        """
        return self.is_valid(salt, matches(code))
