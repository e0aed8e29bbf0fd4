"""
Digest Hashing Utilities
========================
Hash capabilities, rotation index encoding and comparison predicates.
"""

import hashlib
import hmac
import struct
from typing import Callable, Dict, Iterable, Union

from .exceptions import ConfigurationError, RotatingDigestError

# 8-byte big-endian two's complement
ROTATION_FORMAT = ">q"
ROTATION_MIN = -(2 ** 63)
ROTATION_MAX = 2 ** 63 - 1

DEFAULT_HASH_NAME = "sha256"


def sha256_digest(data: bytes) -> bytes:
    """
    Compute the SHA-256 digest of data.

    This is the default hash function of the engine.

    Args:
        data: Bytes to hash

    Returns:
        32-byte digest
    """
    return hashlib.sha256(data).digest()


def sha512_digest(data: bytes) -> bytes:
    """Compute the SHA-512 digest of data."""
    return hashlib.sha512(data).digest()


def blake2b_digest(data: bytes) -> bytes:
    """Compute a 256-bit BLAKE2b digest of data."""
    return hashlib.blake2b(data, digest_size=32).digest()


def sha3_256_digest(data: bytes) -> bytes:
    """Compute the SHA3-256 digest of data."""
    return hashlib.sha3_256(data).digest()


def _load_blake3():
    try:
        import blake3
    except ImportError:
        raise ConfigurationError(
            "blake3 is not installed, install rotating-digest[blake3]",
            field="hash_function",
            value="blake3",
        ) from None
    return blake3


def blake3_digest(data: bytes) -> bytes:
    """
    Compute the 256-bit BLAKE3 digest of data.

    Requires the optional blake3 package (pip install rotating-digest[blake3]).

    Raises:
        ConfigurationError: If blake3 is not installed
    """
    return _load_blake3().blake3(data).digest()


HASH_FUNCTIONS: Dict[str, Callable[[bytes], bytes]] = {
    "sha256": sha256_digest,
    "sha512": sha512_digest,
    "blake2b": blake2b_digest,
    "sha3_256": sha3_256_digest,
    "blake3": blake3_digest,
}


def get_hash_function(name: str) -> Callable[[bytes], bytes]:
    """
    Look up a hash function by name.

    Args:
        name: One of the keys of HASH_FUNCTIONS (case-insensitive)

    Returns:
        The hash function

    Raises:
        ConfigurationError: If the name is unknown or its backing package is not installed
    """
    try:
        hash_function = HASH_FUNCTIONS[name.strip().lower()]
    except KeyError:
        raise ConfigurationError(
            f"unknown hash function {name!r}, expected one of "
            f"{', '.join(sorted(HASH_FUNCTIONS))}",
            field="hash_function",
            value=name,
        ) from None

    if hash_function is blake3_digest:
        _load_blake3()
    return hash_function


def encode_rotation(rotation: int) -> bytes:
    """
    Serialize a rotation index as an 8-byte big-endian signed integer.

    Args:
        rotation: Rotation index, possibly shifted by an offset

    Returns:
        8 bytes

    Raises:
        RotatingDigestError: If the index does not fit in 64 signed bits
    """
    if not ROTATION_MIN <= rotation <= ROTATION_MAX:
        raise RotatingDigestError(f"Rotation index {rotation} is out of the signed 64-bit range")
    return struct.pack(ROTATION_FORMAT, rotation)


def _as_bytes(code: Union[bytes, bytearray, memoryview, str]) -> bytes:
    if isinstance(code, str):
        return bytes.fromhex(code)
    if isinstance(code, (bytes, bytearray, memoryview)):
        return bytes(code)
    raise TypeError(f"code must be bytes or a hex str, not {type(code).__name__}")


def matches(code: Union[bytes, bytearray, str]) -> Callable[[bytes], bool]:
    """
    Build a predicate that compares a digest against a submitted code.

    Uses constant-time comparison.

    Args:
        code: Raw digest bytes or their hex representation

    Returns:
        Predicate for RotatingDigest.is_valid

    Raises:
        ValueError: If a string code is not valid hex
        TypeError: If the code is not bytes-like or str
    """
    expected = _as_bytes(code)

    def predicate(digest: bytes) -> bool:
        return hmac.compare_digest(digest, expected)

    return predicate


def matches_any(codes: Iterable[Union[bytes, bytearray, str]]) -> Callable[[bytes], bool]:
    """Build a predicate that accepts a digest equal to any of the given codes."""
    expected = [_as_bytes(code) for code in codes]

    def predicate(digest: bytes) -> bool:
        # Compares against every code, no early exit
        found = False
        for candidate in expected:
            found |= hmac.compare_digest(digest, candidate)
        return found

    return predicate
