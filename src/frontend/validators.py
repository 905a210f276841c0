"""Validation helpers for config editing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urlparse


@dataclass
class FieldCheck:
    value: Optional[Union[int, float, str]]
    error: Optional[str] = None


def parse_length(raw_value: str, name: str, allow_zero: bool = True) -> FieldCheck:
    raw_value = raw_value.strip()
    if not raw_value:
        return FieldCheck(None, f"{name} is required")
    if not raw_value.isdigit():
        return FieldCheck(None, f"{name} must be a non-negative integer")
    value = int(raw_value)
    if value == 0 and not allow_zero:
        return FieldCheck(None, f"{name} must be greater than zero")
    return FieldCheck(value)


def parse_timeout(raw_value: str) -> FieldCheck:
    raw_value = raw_value.strip()
    if not raw_value:
        return FieldCheck(None, "timeout is required")
    try:
        value = float(raw_value)
    except ValueError:
        return FieldCheck(None, "timeout must be a number of seconds")
    if value <= 0:
        return FieldCheck(None, "timeout must be greater than zero")
    return FieldCheck(value)


def parse_service_url(raw_value: str) -> FieldCheck:
    raw_value = raw_value.strip()
    if not raw_value:
        return FieldCheck(None, "service_url is required")
    parsed = urlparse(raw_value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        return FieldCheck(None, "service_url must start with http:// or https://")
    return FieldCheck(raw_value)

