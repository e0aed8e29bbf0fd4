"""
Rotating Digest
===============
Time-rotating, shared-secret digests for short-lived proof-of-possession codes.
"""

__version__ = "0.1.0"

# Engine
from rotating_digest.engine import RotatingDigest

# Models
from rotating_digest.models import (
    RotatingDigestConfig,
    HashFunction,
    Predicate,
    DEFAULT_LOOKBACK_WINDOW_SIZE,
)

# Hashing
from rotating_digest.hashing import (
    sha256_digest,
    sha512_digest,
    blake2b_digest,
    sha3_256_digest,
    blake3_digest,
    get_hash_function,
    encode_rotation,
    matches,
    matches_any,
    HASH_FUNCTIONS,
)

# Clock
from rotating_digest.clock import system_clock, FixedClock

# Config
from rotating_digest.config import load_config_from_env

# Exceptions
from rotating_digest.exceptions import (
    RotatingDigestError,
    ConfigurationError,
    ClockError,
    HashFunctionError,
)

__all__ = [
    # Engine
    "RotatingDigest",
    # Models
    "RotatingDigestConfig",
    "HashFunction",
    "Predicate",
    "DEFAULT_LOOKBACK_WINDOW_SIZE",
    # Hashing
    "sha256_digest",
    "sha512_digest",
    "blake2b_digest",
    "sha3_256_digest",
    "blake3_digest",
    "get_hash_function",
    "encode_rotation",
    "matches",
    "matches_any",
    "HASH_FUNCTIONS",
    # Clock
    "system_clock",
    "FixedClock",
    # Config
    "load_config_from_env",
    # Exceptions
    "RotatingDigestError",
    "ConfigurationError",
    "ClockError",
    "HashFunctionError",
]
