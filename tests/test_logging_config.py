"""Tests for logging setup and secret redaction."""

from __future__ import annotations

import logging

import pytest

from pwpush_cli.display.logging_config import (
    SecretRedactionFilter,
    secret_redaction_filter,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _reset_redaction():
    secret_redaction_filter.clear()
    yield
    secret_redaction_filter.clear()


def _record(msg, args=()):
    return logging.LogRecord("pwpush_cli.test", logging.INFO, __file__, 1, msg, args, None)


class TestSecretRedactionFilter:
    def test_redacts_message(self):
        f = SecretRedactionFilter()
        f.register("hunter22")
        rec = _record("password is hunter22")
        assert f.filter(rec) is True
        assert rec.getMessage() == "password is ***REDACTED***"

    def test_redacts_args(self):
        f = SecretRedactionFilter()
        f.register("hunter22")
        rec = _record("token=%s count=%d", ("hunter22", 3))
        f.filter(rec)
        assert rec.getMessage() == "token=***REDACTED*** count=3"

    def test_short_and_none_values_ignored(self):
        f = SecretRedactionFilter()
        f.register("abc")
        f.register(None)
        rec = _record("abc")
        f.filter(rec)
        assert rec.getMessage() == "abc"

    def test_longest_first(self):
        f = SecretRedactionFilter()
        f.register("secret")
        f.register("secret-token")
        rec = _record("secret-token")
        f.filter(rec)
        assert rec.getMessage() == "***REDACTED***"

    def test_secret_in_exception_repr(self):
        f = SecretRedactionFilter()
        f.register("tok-4242")
        rec = _record("send failed: %r", (ValueError("bad header tok-4242"),))
        f.filter(rec)
        assert "tok-4242" not in rec.getMessage()
        assert rec.args == ()

    def test_no_secrets_leaves_record_alone(self):
        f = SecretRedactionFilter()
        rec = _record("count=%d", (3,))
        f.filter(rec)
        assert rec.msg == "count=%d"
        assert rec.args == (3,)

    def test_clear(self):
        f = SecretRedactionFilter()
        f.register("hunter22")
        f.clear()
        rec = _record("hunter22")
        f.filter(rec)
        assert rec.getMessage() == "hunter22"


class TestSetupLogging:
    def test_default_level_is_warn(self):
        assert setup_logging() == "warn"
        assert logging.getLogger("pwpush_cli").level == logging.WARNING

    def test_debug(self):
        assert setup_logging("debug") == "debug"
        assert logging.getLogger("pwpush_cli").level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_trace_opens_http_loggers(self):
        assert setup_logging("trace") == "trace"
        assert logging.getLogger("httpx").level == logging.DEBUG
        assert logging.getLogger("httpcore").level == logging.DEBUG

    def test_invalid_level_falls_back(self, capsys):
        assert setup_logging("loud") == "warn"
        assert "invalid log level" in capsys.readouterr().err

    def test_logs_go_to_stderr_redacted(self, capsys):
        setup_logging("info")
        secret_redaction_filter.register("tok-12345")
        logging.getLogger("pwpush_cli.test").info("using tok-12345")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "using ***REDACTED***" in captured.err
        assert "tok-12345" not in captured.err
