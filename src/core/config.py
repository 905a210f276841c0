"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from core.errors import ConfigError

DEFAULT_SERVICE_URL = "https://pastebin.com/api/api_post.php"
DEFAULT_SNIPPET_LENGTH = 60
DEFAULT_CUTOFF_LENGTH = 300
DEFAULT_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class OffloadConfig:
    """Paste offload settings, replaced wholesale on reload."""

    service_url: str = DEFAULT_SERVICE_URL
    api_key: str = ""
    snippet_length: int = DEFAULT_SNIPPET_LENGTH
    cutoff_length: int = DEFAULT_CUTOFF_LENGTH
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


def validate_config(config: OffloadConfig) -> list[str]:
    """Raise ConfigError for unusable values and return soft warnings."""

    if config.snippet_length < 0:
        raise ConfigError(f"sniplen must be non-negative, got {config.snippet_length}")
    if config.cutoff_length <= 0:
        raise ConfigError(f"cutofflen must be positive, got {config.cutoff_length}")
    if config.timeout_seconds <= 0:
        raise ConfigError(f"timeout must be positive, got {config.timeout_seconds}")

    parsed = urlparse(config.service_url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigError(f"service_url must be an http(s) URL, got {config.service_url!r}")

    warnings: list[str] = []
    if not config.api_key:
        warnings.append("apikey is not set; messages will not be offloaded")
    if config.snippet_length > config.cutoff_length:
        warnings.append(
            f"sniplen ({config.snippet_length}) is larger than cutofflen ({config.cutoff_length})"
        )
    return warnings


class ConfigStore:
    """Holds the active OffloadConfig snapshot.

    Snapshots are immutable, so a reader that grabbed one keeps a consistent
    view even if a reload swaps the store underneath it.
    """

    def __init__(self, config: Optional[OffloadConfig] = None) -> None:
        self._lock = threading.Lock()
        self._config = config or OffloadConfig()

    def snapshot(self) -> OffloadConfig:
        with self._lock:
            return self._config

    def replace(self, config: OffloadConfig) -> OffloadConfig:
        """Swap in a new config and return the previous one."""

        with self._lock:
            previous = self._config
            self._config = config
        return previous
