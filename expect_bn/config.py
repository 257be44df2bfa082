"""Runtime configuration for assertion messages and tracebacks."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

import structlog

logger = structlog.get_logger()

ENV_PREFIX = "EXPECT_BN_"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(ENV_PREFIX + name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("config_invalid_env_value", variable=ENV_PREFIX + name, value=raw, default=default)
        return default


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(ENV_PREFIX + name)
    if raw is None:
        return default
    return raw.lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class ExpectConfig:
    """Settings shared by every assertion.

    Attributes:
        show_diff: Attach actual/expected to failures for diff display
        truncate_threshold: Max characters of a rendered value in a failure
            message. Longer values are shortened with "...". 0 disables.
            Strings are always shown in full.
        include_stack: If False, frames inside this package are hidden from
            pytest tracebacks.
    """

    show_diff: bool = True
    truncate_threshold: int = 40
    include_stack: bool = False

    @classmethod
    def from_env(cls) -> ExpectConfig:
        """Build a config from EXPECT_BN_* environment variables."""
        return cls(
            show_diff=_env_flag("SHOW_DIFF", True),
            truncate_threshold=_env_int("TRUNCATE_THRESHOLD", 40),
            include_stack=_env_flag("INCLUDE_STACK", False),
        )


DEFAULT_CONFIG = ExpectConfig()

_current = ExpectConfig.from_env()


def get_config() -> ExpectConfig:
    """Return the active configuration."""
    return _current


def configure(**overrides: object) -> ExpectConfig:
    """Replace fields of the active configuration.

    Returns:
        The previous configuration, so callers can restore it.
    """
    global _current
    previous = _current
    _current = replace(_current, **overrides)  # type: ignore[arg-type]
    return previous


def reset_config(config: ExpectConfig | None = None) -> None:
    """Restore a saved configuration, or the environment defaults."""
    global _current
    _current = config if config is not None else ExpectConfig.from_env()
