"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field

from sshexec.models.handle import DEFAULT_CONNECT_TIMEOUT

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Client settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Timeouts (seconds, except close_grace_ms)
    connect_timeout: int = field(default=DEFAULT_CONNECT_TIMEOUT)
    command_timeout: int = field(default=0)
    close_grace_ms: int = field(default=500)

    # Security
    known_hosts: str | None = field(default=None)

    # Logging
    log_level: str = field(default="INFO")
    log_colors: bool = field(default=True)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from SSHEXEC_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            connect_timeout=cls._get_int("SSHEXEC_CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT),
            command_timeout=cls._get_int("SSHEXEC_COMMAND_TIMEOUT", 0),
            close_grace_ms=cls._get_int("SSHEXEC_CLOSE_GRACE_MS", 500),
            known_hosts=os.getenv("SSHEXEC_KNOWN_HOSTS") or None,
            log_level=os.getenv("SSHEXEC_LOG_LEVEL", "INFO").upper(),
            log_colors=cls._get_bool("SSHEXEC_LOG_COLORS", True),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get non-negative integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set or invalid

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            parsed = int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

        if parsed < 0:
            logger.warning("Negative value for %s: %d, using default %d", key, parsed, default)
            return default
        return parsed

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")
