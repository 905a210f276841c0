from __future__ import annotations

from urllib.parse import parse_qsl, unquote

from core.models import OutboundMessage, PasteRequest, percent_encode


def _request(name: str = "bob", body: str = "hello") -> PasteRequest:
    message = OutboundMessage(
        originator_name=name,
        body_text=body,
        is_channel_target=True,
        is_local_origin=True,
    )
    return PasteRequest.from_message(message)


def test_form_fields_follow_paste_api() -> None:
    fields = dict(_request().form_fields("dev-key"))
    assert fields == {
        "api_option": "paste",
        "api_dev_key": "dev-key",
        "api_paste_code": "hello",
        "api_paste_name": "bob wrote",
        "api_paste_private": "1",
        "api_paste_expire_date": "N",
    }


def test_form_body_escapes_reserved_characters() -> None:
    body = _request(body="a&b=c%d e+f").to_form_body("k")
    assert "api_paste_code=a%26b%3Dc%25d%20e%2Bf" in body
    assert "api_paste_name=bob%20wrote" in body
    assert body.startswith("api_option=paste&api_dev_key=k&")
    assert body.endswith("&api_paste_private=1&api_paste_expire_date=N")


def test_form_body_decodes_back_to_original_text() -> None:
    samples = [
        "a&b=c",
        "100% done",
        "tabs\tand\nnew lines  ",
        "emoji ✓ ünïcödé 日本語",
        "+plus+ and ?query#frag/",
    ]
    for text in samples:
        request = _request(name=f"n{text}", body=text)
        decoded = dict(parse_qsl(request.to_form_body("key"), keep_blank_values=True))
        assert decoded["api_paste_code"] == text
        assert decoded["api_paste_name"] == f"n{text} wrote"


def test_percent_encode_leaves_only_unreserved_bare() -> None:
    assert percent_encode("AZaz09-._~") == "AZaz09-._~"
    assert percent_encode("/ :") == "%2F%20%3A"
    assert unquote(percent_encode("ü&")) == "ü&"
