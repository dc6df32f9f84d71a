"""Environment-aware configuration for humancron.

Settings are read once from environment variables and held in an
immutable :class:`HumanCronConfig`. A process-wide instance is available
through :func:`get_config` and can be replaced with :func:`set_config`
(useful in tests).

Environment variables:
    HUMANCRON_DEFAULT_TIMEZONE: Zone assumed for parsed phrases.
    HUMANCRON_LOCAL_TIMEZONE: Zone cron daemons run in (falls back to ``TZ``).
    HUMANCRON_MAX_INPUT_LENGTH: Longest phrase accepted by the parser.
    HUMANCRON_MAX_INTERVAL: Largest interval count accepted.

Usage:
    >>> from humancron.config import get_config, ParserOptions
    >>>
    >>> config = get_config()
    >>> options = ParserOptions(timezone="America/New_York")
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)

ENV_PREFIX = "HUMANCRON_"

DEFAULT_TIMEZONE = "UTC"
DEFAULT_MAX_INPUT_LENGTH = 1000
DEFAULT_MAX_INTERVAL = 1000


def _parse_int(environ: Mapping[str, str], key: str, default: int) -> int:
    """Read a positive integer variable, keeping the default on bad values."""
    raw = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.warning(f"Ignoring non-integer value for {key}: {raw!r}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive value for {key}: {value}")
        return default
    return value


@dataclass(frozen=True)
class HumanCronConfig:
    """Library-wide defaults.

    Attributes:
        default_timezone: Zone attached to specifications produced by the parser.
        local_timezone: Zone of the host that executes generated cron lines.
        max_input_length: Longest accepted phrase, in characters.
        max_interval: Largest accepted interval count.
    """

    default_timezone: str = DEFAULT_TIMEZONE
    local_timezone: str = DEFAULT_TIMEZONE
    max_input_length: int = DEFAULT_MAX_INPUT_LENGTH
    max_interval: int = DEFAULT_MAX_INTERVAL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "HumanCronConfig":
        """Build configuration from environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``.

        Returns:
            Configuration with unset variables at their defaults.
        """
        env = os.environ if environ is None else environ
        default_tz = env.get(f"{ENV_PREFIX}DEFAULT_TIMEZONE") or DEFAULT_TIMEZONE
        # TZ values like ":/etc/localtime" are paths, not zone keys.
        tz_fallback = env.get("TZ", "")
        if not tz_fallback or tz_fallback.startswith(":") or tz_fallback.startswith("/"):
            tz_fallback = DEFAULT_TIMEZONE
        local_tz = env.get(f"{ENV_PREFIX}LOCAL_TIMEZONE") or tz_fallback
        return cls(
            default_timezone=default_tz,
            local_timezone=local_tz,
            max_input_length=_parse_int(
                env, f"{ENV_PREFIX}MAX_INPUT_LENGTH", DEFAULT_MAX_INPUT_LENGTH
            ),
            max_interval=_parse_int(env, f"{ENV_PREFIX}MAX_INTERVAL", DEFAULT_MAX_INTERVAL),
        )


@dataclass(frozen=True)
class ParserOptions:
    """Options for a single :class:`~humancron.parser.NaturalLanguageParser`.

    Attributes:
        timezone: Zone the parsed time of day is expressed in.
        max_input_length: Longest accepted phrase.
        max_interval: Largest accepted interval count.
    """

    timezone: str = DEFAULT_TIMEZONE
    max_input_length: int = DEFAULT_MAX_INPUT_LENGTH
    max_interval: int = DEFAULT_MAX_INTERVAL

    @classmethod
    def from_config(cls, config: HumanCronConfig | None = None) -> "ParserOptions":
        """Derive parser options from library configuration."""
        config = config or get_config()
        return cls(
            timezone=config.default_timezone,
            max_input_length=config.max_input_length,
            max_interval=config.max_interval,
        )


# =============================================================================
# Global Configuration
# =============================================================================

_config: HumanCronConfig | None = None
_lock = threading.Lock()


def get_config() -> HumanCronConfig:
    """Get the process-wide configuration, loading it on first use."""
    global _config
    with _lock:
        if _config is None:
            _config = HumanCronConfig.from_env()
        return _config


def set_config(config: HumanCronConfig) -> None:
    """Replace the process-wide configuration."""
    global _config
    with _lock:
        _config = config


def reset_config() -> None:
    """Forget the process-wide configuration so the next read reloads it."""
    global _config
    with _lock:
        _config = None
