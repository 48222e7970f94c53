"""Password Pusher API: request construction, submission and dispatch."""

from pwpush_cli.api.client import publish_text
from pwpush_cli.api.dispatch import PushAction, PushObject, execute
from pwpush_cli.api.models import (
    NotSupported,
    Outcome,
    PushFailure,
    PushResult,
    PushTextIntent,
)
from pwpush_cli.api.request_builder import build_body, build_text_push

__all__ = [
    "NotSupported",
    "Outcome",
    "PushAction",
    "PushFailure",
    "PushObject",
    "PushResult",
    "PushTextIntent",
    "build_body",
    "build_text_push",
    "execute",
    "publish_text",
]
