"""Tests for request construction: body fragments, encoding, URL, headers."""

from __future__ import annotations

from pwpush_cli.api.models import PushTextIntent
from pwpush_cli.api.request_builder import (
    build_body,
    build_headers,
    build_text_push,
    encode_value,
    text_push_url,
)
from pwpush_cli.config.schema import Credentials, InstanceConfig

# ── Body serialisation ───────────────────────────────────────────────────


class TestBuildBody:
    def test_empty_payload_only(self):
        assert build_body(PushTextIntent(payload="")) == "password[payload]="

    def test_payload_only(self):
        assert build_body(PushTextIntent(payload="secret")) == "password[payload]=secret"

    def test_special_characters_encoded(self):
        intent = PushTextIntent(payload="random_§$%&%$_characters with spaces")
        assert build_body(intent) == (
            "password[payload]=random_%C2%A7%24%25%26%25%24_characters%20with%20spaces"
        )

    def test_five_fields(self):
        intent = PushTextIntent(
            payload="password",
            passphrase="passphrase",
            note="this is a note",
            expire_after_days=5,
            expire_after_views=2,
        )
        assert build_body(intent) == (
            "password[payload]=password"
            "&password[passphrase]=passphrase"
            "&password[note]=this%20is%20a%20note"
            "&password[expire_after_days]=5"
            "&password[expire_after_views]=2"
        )

    def test_all_fields(self):
        intent = PushTextIntent(
            payload="password",
            passphrase="passphrase",
            note="this is a note",
            expire_after_days=5,
            expire_after_views=2,
            deletable_by_viewer=True,
            retrieval_step=False,
        )
        assert build_body(intent) == (
            "password[payload]=password"
            "&password[passphrase]=passphrase"
            "&password[note]=this%20is%20a%20note"
            "&password[expire_after_days]=5"
            "&password[expire_after_views]=2"
            "&password[deletable_by_viewer]=true"
            "&password[retrieval_step]=false"
        )

    def test_unset_fields_are_omitted(self):
        intent = PushTextIntent(payload="x", retrieval_step=True)
        body = build_body(intent)
        assert body == "password[payload]=x&password[retrieval_step]=true"
        for key in ("passphrase", "note", "expire_after_days", "expire_after_views",
                    "deletable_by_viewer"):
            assert f"password[{key}]" not in body

    def test_false_and_zero_are_sent(self):
        intent = PushTextIntent(
            payload="x",
            expire_after_days=0,
            expire_after_views=0,
            deletable_by_viewer=False,
        )
        assert build_body(intent) == (
            "password[payload]=x"
            "&password[expire_after_days]=0"
            "&password[expire_after_views]=0"
            "&password[deletable_by_viewer]=false"
        )

    def test_empty_optional_string_is_sent(self):
        # Empty is not the same as unset.
        intent = PushTextIntent(payload="x", note="")
        assert build_body(intent) == "password[payload]=x&password[note]="

    def test_order_is_fixed_for_any_subset(self):
        intent = PushTextIntent(
            payload="p",
            retrieval_step=True,
            note="n",
            expire_after_views=1,
        )
        keys = [frag.split("=", 1)[0] for frag in build_body(intent).split("&")]
        assert keys == [
            "password[payload]",
            "password[note]",
            "password[expire_after_views]",
            "password[retrieval_step]",
        ]

    def test_separators_inside_values_are_escaped(self):
        intent = PushTextIntent(payload="a&b=c", note="[x]")
        assert build_body(intent) == "password[payload]=a%26b%3Dc&password[note]=%5Bx%5D"

    def test_body_is_rebuilt_per_call(self):
        intent = PushTextIntent(payload="same")
        assert build_body(intent) == build_body(intent)


class TestEncodeValue:
    def test_unreserved_kept(self):
        assert encode_value("abcXYZ019_.-~") == "abcXYZ019_.-~"

    def test_slash_and_plus_escaped(self):
        assert encode_value("a/b+c") == "a%2Fb%2Bc"

    def test_non_ascii_utf8(self):
        assert encode_value("ü") == "%C3%BC"

    def test_newline(self):
        assert encode_value("line1\nline2") == "line1%0Aline2"


# ── URL and headers ──────────────────────────────────────────────────────


class TestTextPushUrl:
    def test_default_instance(self):
        assert text_push_url(InstanceConfig()) == "https://pwpush.com/p.json"

    def test_http_custom_host(self):
        cfg = InstanceConfig(protocol="http", host="localhost:5100")
        assert text_push_url(cfg) == "http://localhost:5100/p.json"


class TestBuildHeaders:
    def test_without_credentials(self):
        headers = build_headers(InstanceConfig())
        assert "X-User-Email" not in headers
        assert "X-User-Token" not in headers
        assert headers["Content-Type"] == "application/x-www-form-urlencoded"

    def test_with_credentials_raw_values(self):
        cfg = InstanceConfig(
            credentials=Credentials(email="me+cli@example.com", token="t0k/en=="),
        )
        headers = build_headers(cfg)
        assert headers["X-User-Email"] == "me+cli@example.com"
        assert headers["X-User-Token"] == "t0k/en=="


class TestBuildTextPush:
    def test_bundles_all_parts(self):
        cfg = InstanceConfig(host="pw.example.org")
        req = build_text_push(cfg, PushTextIntent(payload="hello world"))
        assert req.url == "https://pw.example.org/p.json"
        assert req.body == "password[payload]=hello%20world"
        assert req.headers == {"Content-Type": "application/x-www-form-urlencoded"}
