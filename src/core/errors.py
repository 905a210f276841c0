"""Error taxonomy for the offload workflow."""

from __future__ import annotations

from typing import Optional


class OffloadError(RuntimeError):
    """Raised when a paste upload cannot produce a usable link."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class TransportError(OffloadError):
    """Connection, DNS, TLS, timeout, or bad-response failure during upload."""

    def __init__(self, reason: str, status: Optional[int] = None) -> None:
        super().__init__(reason)
        self.status = status


class ConfigError(ValueError):
    """Raised when the configured values cannot be used."""
