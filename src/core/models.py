"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any host-daemon or HTTP-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote, urlencode

# Paste service codes for the two request knobs we expose.
VISIBILITY_CODES = {"public": "0", "unlisted": "1", "private": "2"}
EXPIRY_CODES = {"never": "N", "10m": "10M", "1h": "1H", "1d": "1D", "1w": "1W"}


class ModResult(Enum):
    """Disposition returned to the host after a message hook runs."""

    PASSTHRU = "passthru"


@dataclass
class OutboundMessage:
    """One outbound message as handed over by the host.

    The host owns the message; the core may only replace ``body_text``.
    """

    originator_name: str
    body_text: str
    is_channel_target: bool
    is_local_origin: bool


def percent_encode(value: str) -> str:
    """Escape everything except unreserved characters (RFC 3986).

    Bytes smuggled in by surrogateescape decoding go out as the raw bytes.
    """

    return quote(value, safe="", encoding="utf-8", errors="surrogateescape")


@dataclass(frozen=True)
class PasteRequest:
    """Transient upload request derived from a message."""

    paste_name: str
    paste_body: str
    visibility: str = "unlisted"
    expiry: str = "never"

    @classmethod
    def from_message(cls, message: OutboundMessage) -> "PasteRequest":
        return cls(paste_name=f"{message.originator_name} wrote", paste_body=message.body_text)

    def form_fields(self, api_key: str) -> list[tuple[str, str]]:
        """Return the form fields in the order the paste API documents them."""

        return [
            ("api_option", "paste"),
            ("api_dev_key", api_key),
            ("api_paste_code", self.paste_body),
            ("api_paste_name", self.paste_name),
            ("api_paste_private", VISIBILITY_CODES[self.visibility]),
            ("api_paste_expire_date", EXPIRY_CODES[self.expiry]),
        ]

    def to_form_body(self, api_key: str) -> str:
        """URL-encode the form fields for an x-www-form-urlencoded POST."""

        return urlencode(
            self.form_fields(api_key),
            quote_via=quote,
            encoding="utf-8",
            errors="surrogateescape",
        )


@dataclass(frozen=True)
class PasteResponse:
    """Raw paste service reply; the body is expected to be a URL."""

    raw_body: str
    status: int = 200
