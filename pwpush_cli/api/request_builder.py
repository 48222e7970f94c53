"""Request construction for text pushes.

The API does not take JSON. Each field is sent as a
``password[<key>]=<value>`` fragment and fragments are joined by ``&``.
Only the values are percent-encoded: the square brackets of the keys must
stay literal, so the body cannot be encoded as a whole.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple
from urllib.parse import quote

from pwpush_cli.api.models import PushRequest, PushTextIntent
from pwpush_cli.config.schema import InstanceConfig
from pwpush_cli.constants import (
    EMAIL_HEADER,
    FORM_CONTENT_TYPE,
    TEXT_PUSH_PATH,
    TOKEN_HEADER,
)

# Outer key of every fragment for text pushes.
_TEXT_OBJECT = "password"


def _render_str(value: str) -> str:
    return value


def _render_int(value: int) -> str:
    return str(value)


def _render_bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class _FieldSpec:
    """One row of the fragment table."""

    attribute: str
    key: str
    render: Callable[[Any], str]


# Wire order is significant. A row is emitted only when its attribute is set.
_TEXT_FIELDS: Tuple[_FieldSpec, ...] = (
    _FieldSpec("payload", "payload", _render_str),
    _FieldSpec("passphrase", "passphrase", _render_str),
    _FieldSpec("note", "note", _render_str),
    _FieldSpec("expire_after_days", "expire_after_days", _render_int),
    _FieldSpec("expire_after_views", "expire_after_views", _render_int),
    _FieldSpec("deletable_by_viewer", "deletable_by_viewer", _render_bool),
    _FieldSpec("retrieval_step", "retrieval_step", _render_bool),
)


def encode_value(value: str) -> str:
    """Percent-encode a single value.

    Alphanumerics and ``_.-~`` are kept, everything else (``/`` and space
    included) is escaped from its UTF-8 bytes.
    """
    return quote(value, safe="")


def _fragment(obj: str, key: str, value: str) -> str:
    return f"{obj}[{key}]={encode_value(value)}"


def build_body(intent: PushTextIntent) -> str:
    """Serialize *intent* into the form body of a text push.

    The payload fragment is always present and first, even for an empty
    payload.  Unset optional fields produce no fragment at all.
    """
    fragments: List[str] = []
    for spec in _TEXT_FIELDS:
        value = getattr(intent, spec.attribute)
        if value is None:
            continue
        fragments.append(_fragment(_TEXT_OBJECT, spec.key, spec.render(value)))
    return "&".join(fragments)


def text_push_url(config: InstanceConfig) -> str:
    """``<protocol>://<host>/p.json``"""
    return f"{config.base_url}{TEXT_PUSH_PATH}"


def build_headers(config: InstanceConfig) -> Dict[str, str]:
    """Headers for a push request. Credentials are passed through as stored."""
    headers: Dict[str, str] = {"Content-Type": FORM_CONTENT_TYPE}
    if config.credentials is not None:
        headers[EMAIL_HEADER] = config.credentials.email
        headers[TOKEN_HEADER] = config.credentials.token
    return headers


def build_text_push(config: InstanceConfig, intent: PushTextIntent) -> PushRequest:
    """Bundle URL, headers and body for a text push."""
    return PushRequest(
        url=text_push_url(config),
        body=build_body(intent),
        headers=build_headers(config),
    )
