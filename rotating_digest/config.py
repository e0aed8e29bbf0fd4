"""
Rotating Digest Configuration
=============================
Configuration constants and environment variables.
"""

import os
from typing import Any

from .exceptions import ConfigurationError
from .hashing import DEFAULT_HASH_NAME, get_hash_function
from .models import DEFAULT_LOOKBACK_WINDOW_SIZE, RotatingDigestConfig

SECRET_ENV = "ROTATING_DIGEST_SECRET"
PERIOD_ENV = "ROTATING_DIGEST_PERIOD_SECONDS"
LOOKBACK_ENV = "ROTATING_DIGEST_LOOKBACK_WINDOW"
HASH_ENV = "ROTATING_DIGEST_HASH"

DEFAULT_ROTATION_PERIOD_SECONDS = 30


def _int_from_env(name: str, default: int, field: str) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{name}={raw!r} is not an integer",
            field=field,
            value=raw,
        ) from None


def load_config_from_env(**overrides: Any) -> RotatingDigestConfig:
    """
    Build a configuration from environment variables.

    Environment is read at call time. Keyword overrides take precedence
    over the environment and accept any RotatingDigestConfig field.

    Args:
        **overrides: Explicit field values

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If the secret is missing or a value is invalid
    """
    values = dict(overrides)

    if "rotation_period_seconds" not in values:
        values["rotation_period_seconds"] = _int_from_env(
            PERIOD_ENV, DEFAULT_ROTATION_PERIOD_SECONDS, "rotation_period_seconds"
        )
    if "lookback_window_size" not in values:
        values["lookback_window_size"] = _int_from_env(
            LOOKBACK_ENV, DEFAULT_LOOKBACK_WINDOW_SIZE, "lookback_window_size"
        )
    if "hash_function" not in values:
        values["hash_function"] = get_hash_function(os.getenv(HASH_ENV, DEFAULT_HASH_NAME))

    secret = os.getenv(SECRET_ENV)
    if "shared_secret" not in values and secret is not None:
        values["shared_secret"] = secret

    if "shared_secret" not in values:
        raise ConfigurationError(f"{SECRET_ENV} is not set", field="shared_secret")

    return RotatingDigestConfig(**values)
