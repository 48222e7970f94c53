"""Tests for outcome rendering and exit codes."""

from __future__ import annotations

import io
import json

from pwpush_cli.api.models import NotSupported, PushFailure, PushResult
from pwpush_cli.display.console import outcome_to_dict, render_outcome


def _render(outcome, json_output=False):
    out, err = io.StringIO(), io.StringIO()
    code = render_outcome(outcome, json_output=json_output, stdout=out, stderr=err)
    return code, out.getvalue(), err.getvalue()


class TestHumanOutput:
    def test_success_body_on_stdout(self):
        body = '{"url_token":"abc[1]","expired":false}'
        code, out, err = _render(PushResult(201, body))
        assert code == 0
        assert out == body + "\n"
        assert err == ""

    def test_error_status_on_stderr(self):
        code, out, err = _render(PushResult(422, "bad request"))
        assert code == 1
        assert out == ""
        assert "HTTP 422" in err
        assert "bad request" in err

    def test_failure(self):
        code, out, err = _render(PushFailure("connection refused"))
        assert code == 1
        assert out == ""
        assert err == "Error: connection refused\n"

    def test_not_supported(self):
        code, out, err = _render(NotSupported("push file"))
        assert code == 3
        assert out == ""
        assert "'push file' is not supported yet" in err


class TestJsonOutput:
    def test_success(self):
        code, out, err = _render(PushResult(201, "body"), json_output=True)
        assert code == 0
        assert json.loads(out) == {"status": 201, "body": "body"}
        assert err == ""

    def test_error_status(self):
        code, out, err = _render(PushResult(500, "oops"), json_output=True)
        assert code == 1
        assert out == ""
        assert json.loads(err) == {"status": 500, "body": "oops"}

    def test_failure(self):
        code, out, err = _render(PushFailure("dns"), json_output=True)
        assert code == 1
        assert json.loads(err) == {"error": "dns"}

    def test_outcome_to_dict_not_supported(self):
        assert outcome_to_dict(NotSupported("expire url")) == {
            "error": "'expire url' is not supported yet"
        }
