"""Pydantic configuration models for pwpush-cli.

``InstanceConfig`` is what the API layer consumes.  ``PwPushConfig``
describes the optional YAML file the CLI reads defaults from.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pwpush_cli.constants import DEFAULT_INSTANCE_URL, DEFAULT_LOG_LEVEL, DEFAULT_PROTOCOL

ProtocolName = Literal["http", "https"]
LogLevel = Literal["error", "warn", "info", "debug", "trace"]

# ── Instance configuration (consumed by the API client) ─────────────────


class Credentials(BaseModel):
    """Account email and API token, sent as ``X-User-Email``/``X-User-Token``."""

    model_config = ConfigDict(frozen=True)

    email: str = Field(..., min_length=1)
    token: str = Field(..., min_length=1)

    def __repr__(self) -> str:
        return f"Credentials(email={self.email!r}, token='****')"


class InstanceConfig(BaseModel):
    """Where and how to reach a Password Pusher instance.

    ``host`` is taken as given.  A malformed host shows up as a transport
    error when the request is sent.
    """

    model_config = ConfigDict(frozen=True)

    protocol: ProtocolName = DEFAULT_PROTOCOL
    host: str = DEFAULT_INSTANCE_URL
    credentials: Optional[Credentials] = None

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}"


# ── YAML file ────────────────────────────────────────────────────────────


class InstanceSection(BaseModel):
    url: Optional[str] = Field(default=None, description="Instance host, e.g. pwpush.com")
    protocol: Optional[ProtocolName] = None

    @field_validator("url")
    @classmethod
    def _strip_url(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v


class AuthSection(BaseModel):
    """Credentials from the config file. Both or neither must be set."""

    email: Optional[str] = None
    token: Optional[str] = None

    @model_validator(mode="after")
    def _both_or_neither(self) -> AuthSection:
        if bool(self.email) != bool(self.token):
            raise ValueError("'email' and 'token' must be set together")
        return self


class OutputSection(BaseModel):
    json_output: bool = Field(default=False, alias="json")

    model_config = ConfigDict(populate_by_name=True)


class PwPushConfig(BaseModel):
    """Top-level structure of ``pwpush.yaml``."""

    model_config = ConfigDict(extra="forbid")

    instance: InstanceSection = Field(default_factory=InstanceSection)
    auth: AuthSection = Field(default_factory=AuthSection)
    output: OutputSection = Field(default_factory=OutputSection)
    log_level: LogLevel = DEFAULT_LOG_LEVEL
