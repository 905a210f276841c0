"""Host daemon module for large text offloading.

Binds the core offloader to the two hooks a chat daemon drives: the
pre-message hook, called once per outbound message, and the rehash hook,
called whenever the daemon reloads its configuration.
"""

from __future__ import annotations

import logging

from adapters.pastebin_client import PastebinClient
from core.config import ConfigStore, OffloadConfig, validate_config
from core.errors import ConfigError
from core.models import ModResult, OutboundMessage
from core.offloader import PasteOffloader
from core.ports import ConfigSourcePort

LOGGER = logging.getLogger(__name__)

MODULE_NAME = "largetextpaste"
MODULE_VERSION = "1.0.0"
MODULE_DESCRIPTION = (
    "Sends messages longer than a set number of characters to a paste service "
    "and replaces them with a snippet and a link"
)


class LargeTextPasteModule:
    """Module object the host loads once and keeps for the process lifetime."""

    def __init__(self, paste_service: PastebinClient, config_source: ConfigSourcePort) -> None:
        self._paste_service = paste_service
        self._config_source = config_source
        self._store = ConfigStore()
        self._offloader = PasteOffloader(paste_service, self._store)

    @property
    def config(self) -> OffloadConfig:
        return self._store.snapshot()

    def init(self) -> None:
        """Read config and set up the HTTP client before any message arrives."""

        self.on_rehash()
        self._paste_service.open()
        LOGGER.info("%s %s loaded", MODULE_NAME, MODULE_VERSION)

    def close(self) -> None:
        self._paste_service.close()
        LOGGER.info("%s unloaded", MODULE_NAME)

    def on_user_pre_message(self, message: OutboundMessage) -> ModResult:
        return self._offloader.handle(message)

    async def on_user_pre_message_async(self, message: OutboundMessage) -> ModResult:
        return await self._offloader.handle_async(message)

    def on_rehash(self) -> bool:
        """Re-read the config source and swap the active snapshot.

        Returns False when the new config is rejected; the previous snapshot
        stays active in that case.
        """

        try:
            config = self._config_source.read_offload_config()
            warnings = validate_config(config)
        except ConfigError as exc:
            LOGGER.error("Rehash rejected, keeping previous config: %s", exc)
            return False

        for warning in warnings:
            LOGGER.warning("Config: %s", warning)

        self._store.replace(config)
        LOGGER.debug(
            "Rehashed: config read (sniplen: %s, cutofflen: %s, apikey: %s)",
            config.snippet_length,
            config.cutoff_length,
            "set" if config.api_key else "unset",
        )
        return True

    @staticmethod
    def get_version() -> str:
        return f"{MODULE_NAME} {MODULE_VERSION}: {MODULE_DESCRIPTION}"
