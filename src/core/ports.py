"""Ports (interfaces) used by the core offload workflow.

Ports define the minimal contracts for the paste service and the config
source so that the core can be reused with different backends and hosts.
"""

from __future__ import annotations

from typing import Protocol

from core.config import OffloadConfig
from core.models import PasteRequest, PasteResponse


class PasteServicePort(Protocol):
    """Upload operation required by the offloader."""

    def upload(self, request: PasteRequest, config: OffloadConfig) -> PasteResponse:
        ...


class ConfigSourcePort(Protocol):
    """Config store the host re-reads on reload."""

    def read_offload_config(self) -> OffloadConfig:
        ...
