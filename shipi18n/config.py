"""Client configuration read from the environment."""

import dataclasses
import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_API_BASE_URL = "https://shipi18n.com/api"
API_KEY_ENV = "SHIPI18N_API_KEY"
API_URL_ENV = "SHIPI18N_API_URL"
TIMEOUT_ENV = "SHIPI18N_TIMEOUT"


def parse_timeout(value: Optional[str]) -> Optional[float]:
    """Seconds from a SHIPI18N_TIMEOUT value; None when unset, malformed or not positive."""
    if not value:
        return None
    try:
        timeout = float(value)
    except ValueError:
        return None
    if not math.isfinite(timeout) or timeout <= 0:
        return None
    return timeout


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the Shipi18n API."""

    api_base_url: str = DEFAULT_API_BASE_URL
    api_key: Optional[str] = None
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            ClientConfig with SHIPI18N_API_URL (or the default endpoint),
            SHIPI18N_API_KEY (None when unset) and SHIPI18N_TIMEOUT
            (None when unset or invalid).
        """
        if environ is None:
            environ = os.environ

        return cls(
            api_base_url=environ.get(API_URL_ENV) or DEFAULT_API_BASE_URL,
            api_key=environ.get(API_KEY_ENV) or None,
            timeout=parse_timeout(environ.get(TIMEOUT_ENV)),
        )


_config = ClientConfig.from_env()


def get_config() -> ClientConfig:
    """Return the process-wide configuration."""
    return _config


def set_config(**fields) -> ClientConfig:
    """
    Merge fields into the process-wide configuration.

    Values are not validated here. Not thread-safe: requests already in
    flight may have been built from the previous configuration.

    Args:
        **fields: Any of api_key, api_base_url, timeout

    Returns:
        The new configuration
    """
    global _config
    _config = dataclasses.replace(_config, **fields)
    return _config


def reset_config() -> ClientConfig:
    """Restore the unset state: no API key, default base URL, no timeout."""
    global _config
    _config = ClientConfig()
    return _config
