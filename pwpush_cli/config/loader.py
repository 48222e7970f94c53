"""Configuration file loading and instance resolution.

Loads an optional YAML configuration file, substitutes ``${ENV_VAR}``
placeholders in the ``instance`` and ``auth`` sections, and validates
against the Pydantic models in :mod:`schema`.

:func:`resolve_instance_config` merges CLI flags, environment variables,
the config file and built-in defaults (first match wins, in that order)
into the :class:`InstanceConfig` handed to the API layer.
"""

import logging
import os
import re
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import ValidationError

from pwpush_cli.config.schema import Credentials, InstanceConfig, PwPushConfig
from pwpush_cli.constants import (
    DEFAULT_INSTANCE_URL,
    DEFAULT_PROTOCOL,
    ENV_CONFIG,
    ENV_EMAIL,
    ENV_PROTOCOL,
    ENV_TOKEN,
    ENV_URL,
    PROTOCOLS,
)
from pwpush_cli.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Sections whose string values may reference environment variables.
_EXPANDED_SECTIONS = ("instance", "auth")
_PLACEHOLDER_RE = re.compile(r"\$\{(\w+)\}")

# Recognised config file extensions.
_YAML_EXTS = frozenset({".yaml", ".yml"})

# Config file search order (first match wins)
_CONFIG_SEARCH_ORDER = (
    "pwpush.yaml",
    "pwpush.yml",
    os.path.join("~", ".config", "pwpush", "config.yaml"),
)


def find_config_file(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Locate the config file.

    ``PWPUSH_CONFIG`` wins when set.  Otherwise the current directory is
    checked for ``pwpush.yaml``/``pwpush.yml``, then
    ``~/.config/pwpush/config.yaml``.  Returns *None* if nothing exists;
    the file is optional.
    """
    env = os.environ if environ is None else environ
    explicit = env.get(ENV_CONFIG)
    if explicit:
        return explicit
    for name in _CONFIG_SEARCH_ORDER:
        candidate = os.path.expanduser(name)
        if os.path.isfile(candidate):
            return candidate
    return None


def _read_config_file(cfg_fpath: str) -> Dict[str, Any]:
    """Read and parse a YAML config file from *cfg_fpath*.

    Raises :class:`ConfigurationError` on I/O or parse errors.
    """
    ext = os.path.splitext(cfg_fpath)[1].lower()
    if ext not in _YAML_EXTS:
        raise ConfigurationError(
            f"Unsupported config file extension '{ext}'. "
            "Only YAML files (.yaml, .yml) are supported."
        )

    try:
        with open(cfg_fpath, "r", encoding="utf-8") as f:
            raw_data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Error reading configuration file: {cfg_fpath}\n  {exc}") from exc

    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        raise ConfigurationError(
            "Top-level configuration content must be a YAML mapping (dictionary)."
        )
    return raw_data


def _format_validation_errors(exc: ValidationError) -> str:
    """Format Pydantic validation errors into a readable multi-line string."""
    lines: List[str] = []
    for err in exc.errors():
        loc = " → ".join(str(part) for part in err["loc"]) or "(root)"
        lines.append(f"  • {loc}: {err['msg']}")
    return "\n".join(lines)


def _substitute_env(
    raw_data: Dict[str, Any], environ: Mapping[str, str]
) -> Dict[str, Any]:
    """Replace ``${VAR}`` in the string values of the instance and auth sections.

    An unset variable is an error: a literal ``${PWPUSH_TOKEN}`` must never
    be sent to the server as a token.
    """

    def _lookup(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name not in environ:
            raise ConfigurationError(
                f"Environment variable '{name}' referenced in the config file is not set."
            )
        return environ[name]

    data = dict(raw_data)
    for section in _EXPANDED_SECTIONS:
        values = data.get(section)
        if not isinstance(values, dict):
            continue
        data[section] = {
            key: _PLACEHOLDER_RE.sub(_lookup, val) if isinstance(val, str) else val
            for key, val in values.items()
        }
    return data


def load_pwpush_config(
    cfg_fpath: str, environ: Optional[Mapping[str, str]] = None
) -> PwPushConfig:
    """Load, expand and validate the YAML config file at *cfg_fpath*."""
    env = os.environ if environ is None else environ
    raw_data = _substitute_env(_read_config_file(cfg_fpath), env)
    try:
        cfg = PwPushConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid configuration in {cfg_fpath}:\n{_format_validation_errors(exc)}"
        ) from exc
    logger.debug("Configuration loaded from %s", cfg_fpath)
    return cfg


def _pick(
    name: str,
    flag: Optional[str],
    env_value: Optional[str],
    file_value: Optional[str],
) -> Optional[str]:
    """First source that sets *name*: CLI flag, env var, config file.

    An exported but empty env var counts as unset.  An empty flag or file
    value is rejected instead of silently falling through.
    """
    for value in (flag, env_value or None, file_value):
        if value is None:
            continue
        if not value.strip():
            raise ConfigurationError(f"{name} must not be empty.")
        return value
    return None


def resolve_instance_config(
    url: Optional[str] = None,
    protocol: Optional[str] = None,
    email: Optional[str] = None,
    token: Optional[str] = None,
    file_cfg: Optional[PwPushConfig] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> InstanceConfig:
    """Merge CLI flags → env vars → config file → defaults.

    Raises :class:`ConfigurationError` if only one of email/token ends up
    set, if a value is given but empty, or if the protocol is not
    ``http``/``https``.
    """
    env = os.environ if environ is None else environ
    file_cfg = file_cfg or PwPushConfig()

    host = (
        _pick("Instance URL", url, env.get(ENV_URL), file_cfg.instance.url)
        or DEFAULT_INSTANCE_URL
    )
    proto = (
        _pick("Protocol", protocol, env.get(ENV_PROTOCOL), file_cfg.instance.protocol)
        or DEFAULT_PROTOCOL
    )
    if proto not in PROTOCOLS:
        raise ConfigurationError(
            f"Invalid protocol '{proto}'. Choose one of: {', '.join(PROTOCOLS)}."
        )

    user_email = _pick("Email", email, env.get(ENV_EMAIL), file_cfg.auth.email)
    user_token = _pick("Token", token, env.get(ENV_TOKEN), file_cfg.auth.token)
    if (user_email is None) != (user_token is None):
        missing = "token" if user_email else "email"
        raise ConfigurationError(
            f"Authenticated requests need both email and token; {missing} is missing."
        )

    credentials = None
    if user_email is not None and user_token is not None:
        credentials = Credentials(email=user_email, token=user_token)

    try:
        return InstanceConfig(protocol=proto, host=host, credentials=credentials)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid instance configuration:\n{_format_validation_errors(exc)}"
        ) from exc
