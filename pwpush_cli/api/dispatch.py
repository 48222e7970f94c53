"""Dispatch of ``<action> <object>`` commands to API calls.

Only ``push text`` is implemented.  Every other combination returns a
:class:`NotSupported` outcome so callers can handle it like any other
result.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

import httpx

from pwpush_cli.api.client import publish_text
from pwpush_cli.api.models import NotSupported, Outcome, PushTextIntent
from pwpush_cli.config.schema import InstanceConfig

logger = logging.getLogger(__name__)


class PushAction(str, Enum):
    PUSH = "push"
    EXPIRE = "expire"


class PushObject(str, Enum):
    """Object types of the API. Values are the CLI names."""

    TEXT = "text"
    FILE = "file"
    URL = "url"


async def execute(
    config: InstanceConfig,
    action: PushAction,
    obj: PushObject,
    intent: Optional[PushTextIntent] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Outcome:
    """Run one command against the configured instance."""
    if action is PushAction.PUSH and obj is PushObject.TEXT:
        if intent is None:
            raise ValueError("push text requires an intent")
        return await publish_text(config, intent, transport=transport)

    operation = f"{action.value} {obj.value}"
    logger.debug("Operation '%s' has no implementation", operation)
    return NotSupported(operation)
