"""Data models for text pushes and their outcomes.

``PushTextIntent`` is the validated description of one secret to push.
The outcome types are plain values: the API client never raises for
transport problems, it returns a :class:`PushFailure` instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Union


@dataclass(frozen=True)
class PushTextIntent:
    """Everything needed to push one text secret.

    Optional fields left as ``None`` are not sent, so the server applies
    its own default.  The two booleans are tri-state: ``None`` means unset,
    ``True``/``False`` are explicit overrides.
    """

    payload: str
    passphrase: Optional[str] = None
    note: Optional[str] = None
    expire_after_days: Optional[int] = None
    expire_after_views: Optional[int] = None
    deletable_by_viewer: Optional[bool] = None
    retrieval_step: Optional[bool] = None


@dataclass(frozen=True)
class PushRequest:
    """A fully built request, ready to be sent."""

    url: str
    body: str
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PushResult:
    """The server answered. Carries any status code, 4xx/5xx included."""

    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class PushFailure:
    """The request could not be sent or its response could not be read."""

    message: str


@dataclass(frozen=True)
class NotSupported:
    """The requested operation exists in the CLI but is not implemented yet."""

    operation: str

    @property
    def message(self) -> str:
        return f"'{self.operation}' is not supported yet"


Outcome = Union[PushResult, PushFailure, NotSupported]
