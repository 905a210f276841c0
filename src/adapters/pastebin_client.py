"""Pastebin API upload adapter.

Posts the form-encoded paste request and returns the raw reply text, which
the paste service sends back as the URL of the new paste.
"""

from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.request
from typing import Optional

from core.config import OffloadConfig
from core.errors import TransportError
from core.models import PasteRequest, PasteResponse

LOGGER = logging.getLogger(__name__)

READ_CHUNK_BYTES = 4096
USER_AGENT = "largetextpaste/1.0"


class PastebinClient:
    """Paste service adapter built on a process-wide urllib opener."""

    def __init__(self, chunk_size: int = READ_CHUNK_BYTES, proxies: Optional[dict[str, str]] = None) -> None:
        self._chunk_size = chunk_size
        # None means "use the environment proxy settings"; {} disables proxies.
        self._proxies = proxies
        self._opener: Optional[urllib.request.OpenerDirector] = None

    @property
    def is_open(self) -> bool:
        return self._opener is not None

    def open(self) -> None:
        """Build the shared opener once per process."""

        if self._opener is not None:
            return
        LOGGER.debug("HTTP client init")
        handlers = []
        if self._proxies is not None:
            handlers.append(urllib.request.ProxyHandler(self._proxies))
        self._opener = urllib.request.build_opener(*handlers)
        self._opener.addheaders = [("User-Agent", USER_AGENT)]

    def close(self) -> None:
        if self._opener is None:
            return
        LOGGER.debug("HTTP client cleanup")
        self._opener.close()
        self._opener = None

    def __enter__(self) -> "PastebinClient":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def upload(self, request: PasteRequest, config: OffloadConfig) -> PasteResponse:
        """Send one paste request and return the service reply."""

        if self._opener is None:
            raise RuntimeError("PastebinClient.open() must be called before upload")

        try:
            data = request.to_form_body(config.api_key).encode("ascii")
        except UnicodeEncodeError as e:
            # Lone surrogates outside the surrogateescape range have no byte form.
            raise TransportError(f"paste text cannot be encoded: {e.reason}") from e
        http_request = urllib.request.Request(config.service_url, data=data, method="POST")
        http_request.add_header("Content-Type", "application/x-www-form-urlencoded")

        LOGGER.debug("POST %s (%s bytes)", config.service_url, len(data))
        try:
            with self._opener.open(http_request, timeout=config.timeout_seconds) as response:
                status = response.status
                body = self._read_body(response)
        except urllib.error.HTTPError as e:
            detail = e.read().decode("utf-8", errors="replace").strip()
            raise TransportError(f"paste service error {e.code}: {detail}", e.code) from e
        except urllib.error.URLError as e:
            raise TransportError(f"paste service unreachable: {e.reason}") from e
        except TimeoutError as e:
            raise TransportError(f"paste request timed out after {config.timeout_seconds}s") from e
        except (OSError, http.client.HTTPException) as e:
            raise TransportError(f"paste request failed: {e}") from e

        # urllib only raises for 4xx/5xx; anything else outside 2xx is unusable too.
        if not 200 <= status < 300:
            raise TransportError(f"paste service returned HTTP {status}", status)

        LOGGER.debug("%s bytes received for paste response", len(body))
        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TransportError("paste service returned a non-text response", status) from e
        if not text.strip():
            raise TransportError("paste service returned an empty response", status)
        return PasteResponse(raw_body=text, status=status)

    def _read_body(self, response) -> bytes:
        # The reply may arrive in several chunks; keep reading until EOF.
        buffer = bytearray()
        while True:
            chunk = response.read(self._chunk_size)
            if not chunk:
                break
            buffer.extend(chunk)
        return bytes(buffer)
