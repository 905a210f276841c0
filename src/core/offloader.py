"""Core paste offload workflow.

This module is integration-agnostic. It only relies on the paste service
port and the config store, so hosts and transports can change without
touching the decision and rewrite policy here.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from core.config import ConfigStore, OffloadConfig
from core.errors import OffloadError, TransportError
from core.models import ModResult, OutboundMessage, PasteRequest
from core.ports import PasteServicePort

LOGGER = logging.getLogger(__name__)

MORE_PREFIX = "... (more "
MORE_SUFFIX = " )"


def should_offload(message: OutboundMessage, config: OffloadConfig) -> bool:
    """Return True for long channel messages from locally connected senders."""

    return (
        message.is_channel_target
        and message.is_local_origin
        and len(message.body_text) > config.cutoff_length
    )


def rewrite(message: OutboundMessage, paste_text: str, config: OffloadConfig) -> str:
    """Shorten the body to a snippet followed by the paste reference.

    The marker is appended even when the snippet already covers the whole
    body.
    """

    snippet = message.body_text[: config.snippet_length]
    return f"{snippet}{MORE_PREFIX}{paste_text}{MORE_SUFFIX}"


class PasteOffloader:
    """Decides, uploads, and rewrites one message at a time."""

    def __init__(self, paste_service: PasteServicePort, config_store: ConfigStore) -> None:
        self._paste_service = paste_service
        self._config_store = config_store
        # Snapshot already reported as lacking an apikey.
        self._keyless_config: Optional[OffloadConfig] = None

    def offload(self, message: OutboundMessage, config: OffloadConfig) -> str:
        """Upload the full body and return the paste reference text.

        Raises OffloadError when the service cannot be reached or its reply
        is unusable.
        """

        request = PasteRequest.from_message(message)
        LOGGER.debug(
            "Uploading %s chars for %s to %s",
            len(request.paste_body),
            message.originator_name,
            config.service_url,
        )
        response = self._paste_service.upload(request, config)
        # An empty reply would otherwise end up verbatim in the channel.
        if not response.raw_body or not response.raw_body.strip():
            raise TransportError("paste service returned an empty response", response.status)
        LOGGER.debug("Paste service returned %s", response.raw_body)
        return response.raw_body

    async def offload_async(self, message: OutboundMessage, config: OffloadConfig) -> str:
        """Run the blocking upload in a worker thread."""

        return await asyncio.to_thread(self.offload, message, config)

    def handle(self, message: OutboundMessage) -> ModResult:
        """Process one outbound message, rewriting its body in place."""

        config = self._config_store.snapshot()
        if not self._ready(message, config):
            return ModResult.PASSTHRU

        try:
            paste_text = self.offload(message, config)
        except OffloadError as exc:
            LOGGER.warning("Paste upload failed for %s: %s", message.originator_name, exc)
            return ModResult.PASSTHRU

        message.body_text = rewrite(message, paste_text, config)
        return ModResult.PASSTHRU

    async def handle_async(self, message: OutboundMessage) -> ModResult:
        """Async variant of handle with an await point at the upload."""

        config = self._config_store.snapshot()
        if not self._ready(message, config):
            return ModResult.PASSTHRU

        try:
            paste_text = await self.offload_async(message, config)
        except OffloadError as exc:
            LOGGER.warning("Paste upload failed for %s: %s", message.originator_name, exc)
            return ModResult.PASSTHRU

        message.body_text = rewrite(message, paste_text, config)
        return ModResult.PASSTHRU

    def _ready(self, message: OutboundMessage, config: OffloadConfig) -> bool:
        if not should_offload(message, config):
            return False
        if not config.api_key:
            # Once per snapshot, then quiet until the next rehash.
            if self._keyless_config is not config:
                self._keyless_config = config
                LOGGER.warning(
                    "No apikey configured, long messages are sent unchanged (first from %s)",
                    message.originator_name,
                )
            else:
                LOGGER.debug("No apikey configured, leaving message from %s as is", message.originator_name)
            return False
        return True
