"""Logging configuration setup.

All log output goes to stderr so stdout stays reserved for command
results.
"""

from __future__ import annotations

import copy
import logging
import logging.config
import sys
from typing import List

from pwpush_cli.constants import DEFAULT_LOG_LEVEL

# ── Secret redaction ─────────────────────────────────────────────────────

_REDACTED = "***REDACTED***"

# Shorter values would mask unrelated words.
_MIN_SECRET_LEN = 4


class SecretRedactionFilter(logging.Filter):
    """Masks the API token, passphrase and payload in every log line.

    The record is rendered once with its arguments, so a secret is caught
    whether it sits in the format string, in an argument, or inside the
    ``repr`` of an exception.
    """

    def __init__(self) -> None:
        super().__init__()
        self._secrets: List[str] = []

    def register(self, value: str | None) -> None:
        if not value or len(value) < _MIN_SECRET_LEN or value in self._secrets:
            return
        self._secrets.append(value)
        # Longest first so a secret containing another is masked whole.
        self._secrets.sort(key=len, reverse=True)

    def clear(self) -> None:
        self._secrets = []

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        message = record.getMessage()
        for secret in self._secrets:
            message = message.replace(secret, _REDACTED)
        record.msg = message
        record.args = ()
        return True


# Module-level singleton so the CLI can register values once they are known.
secret_redaction_filter = SecretRedactionFilter()

# CLI verbosity name → stdlib level name
LOG_LEVELS = {
    "error": "ERROR",
    "warn": "WARNING",
    "info": "INFO",
    "debug": "DEBUG",
    "trace": "DEBUG",
}

BASE_LOG_CFG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple_stderr": {
            "format": "%(asctime)s - %(name)s - %(levelname)-7s - %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%S",
        },
    },
    "handlers": {
        "stderr_handler": {
            "class": "logging.StreamHandler",
            "level": "DEBUG",
            "formatter": "simple_stderr",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "pwpush_cli": {
            "handlers": ["stderr_handler"],
            "propagate": False,
            "level": "WARNING",
        },
        "httpx": {
            "handlers": ["stderr_handler"],
            "propagate": False,
            "level": "WARNING",
        },
        "httpcore": {
            "handlers": ["stderr_handler"],
            "propagate": False,
            "level": "WARNING",
        },
    },
    "root": {
        "handlers": ["stderr_handler"],
        "level": "WARNING",
    },
}


def setup_logging(log_lvl_str: str = DEFAULT_LOG_LEVEL) -> str:
    """
    Set up the logging system.

    Args:
        log_lvl_str: One of ``error``, ``warn``, ``info``, ``debug``,
            ``trace``.  ``trace`` additionally enables the HTTP library
            loggers.

    Returns:
        The validated verbosity name.
    """
    lvl_name = log_lvl_str.lower()
    if lvl_name not in LOG_LEVELS:
        print(
            f"Warning: invalid log level '{log_lvl_str}'. Using '{DEFAULT_LOG_LEVEL}'.",
            file=sys.stderr,
        )
        lvl_name = DEFAULT_LOG_LEVEL
    std_level = LOG_LEVELS[lvl_name]

    log_cfg: dict = copy.deepcopy(BASE_LOG_CFG)
    log_cfg["loggers"]["pwpush_cli"]["level"] = std_level
    if lvl_name == "trace":
        log_cfg["loggers"]["httpx"]["level"] = "DEBUG"
        log_cfg["loggers"]["httpcore"]["level"] = "DEBUG"

    try:
        logging.config.dictConfig(log_cfg)
        # Attach secret redaction filter to all handlers
        for lgr in (logging.root, logging.getLogger("pwpush_cli")):
            for handler in lgr.handlers:
                if secret_redaction_filter not in handler.filters:
                    handler.addFilter(secret_redaction_filter)
    except (ValueError, TypeError, AttributeError, ImportError) as e_log_cfg:
        print(
            f"Error applying logging configuration: {e_log_cfg}\n"
            "Operation will continue normally, but logging output may not be available.",
            file=sys.stderr,
        )
        return lvl_name

    logging.getLogger(__name__).debug("Logging initialized at level '%s'", lvl_name)
    return lvl_name
