from __future__ import annotations

from frontend.validators import parse_length, parse_service_url, parse_timeout


def test_parse_length() -> None:
    assert parse_length("60", "sniplen").value == 60
    assert parse_length(" 0 ", "sniplen").value == 0
    assert parse_length("", "sniplen").error == "sniplen is required"
    assert parse_length("-5", "sniplen").error
    assert parse_length("abc", "cutofflen").error
    assert parse_length("0", "cutofflen", allow_zero=False).error


def test_parse_timeout() -> None:
    assert parse_timeout("2.5").value == 2.5
    assert parse_timeout("0").error
    assert parse_timeout("soon").error


def test_parse_service_url() -> None:
    assert parse_service_url(" https://pastebin.com/api/api_post.php ").value == (
        "https://pastebin.com/api/api_post.php"
    )
    assert parse_service_url("pastebin.com").error
    assert parse_service_url("").error

