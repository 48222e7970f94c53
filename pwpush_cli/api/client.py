"""HTTP client for publishing secrets to a Password Pusher instance.

One call, one ``POST``.  The client keeps no state between calls: every
:func:`publish_text` opens its own ``httpx.AsyncClient`` so connections are
never shared across different credential sets.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from pwpush_cli.api.models import Outcome, PushFailure, PushResult, PushTextIntent
from pwpush_cli.api.request_builder import build_text_push
from pwpush_cli.config.schema import InstanceConfig

module_logger = logging.getLogger(__name__)


def _error_message(exc: Exception) -> str:
    # Some transport errors carry no text; fall back to the exception type.
    return str(exc) or type(exc).__name__


async def publish_text(
    config: InstanceConfig,
    intent: PushTextIntent,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    logger: Optional[logging.Logger] = None,
) -> Outcome:
    """``POST /p.json``

    Parameters
    ----------
    config:
        Where to send the request and which credentials to attach.
    intent:
        The secret to push.
    transport:
        Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
    logger:
        Diagnostic sink. Only DEBUG records are emitted.

    Any status code the server answers with becomes a :class:`PushResult`;
    interpreting it is left to the caller.  Errors while sending or while
    reading the response body become a :class:`PushFailure`.
    """
    log = logger or module_logger
    request = build_text_push(config, intent)
    log.debug(
        "Pushing text to %s (authenticated: %s)",
        request.url,
        config.credentials is not None,
    )

    async with httpx.AsyncClient(transport=transport) as client:
        try:
            async with client.stream(
                "POST",
                request.url,
                content=request.body.encode("utf-8"),
                headers=request.headers,
            ) as resp:
                log.debug("Received HTTP %s from %s", resp.status_code, request.url)
                try:
                    await resp.aread()
                except httpx.HTTPError as exc_read:
                    log.debug("Reading response body failed: %r", exc_read)
                    return PushFailure(_error_message(exc_read))
                return PushResult(status_code=resp.status_code, body=resp.text)
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc_send:
            # Non-ASCII header values fail while httpx builds the request.
            log.debug("Request to %s failed: %s", request.url, _error_message(exc_send))
            return PushFailure(_error_message(exc_send))
