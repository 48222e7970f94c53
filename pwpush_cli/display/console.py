"""Console rendering of command outcomes.

Results go to stdout, errors to stderr.  The return value of
:func:`render_outcome` is the process exit code.
"""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional, TextIO

from rich.console import Console

from pwpush_cli.api.models import NotSupported, Outcome, PushFailure, PushResult
from pwpush_cli.constants import EXIT_FAILURE, EXIT_NOT_SUPPORTED, EXIT_OK


def _console(stream: TextIO) -> Console:
    # Bodies and messages are printed verbatim: no markup, no highlighting.
    return Console(file=stream, markup=False, highlight=False, soft_wrap=True, emoji=False)


def outcome_to_dict(outcome: Outcome) -> Dict[str, Any]:
    """JSON-serialisable form of *outcome*."""
    if isinstance(outcome, PushResult):
        return {"status": outcome.status_code, "body": outcome.body}
    return {"error": outcome.message}


def render_outcome(
    outcome: Outcome,
    *,
    json_output: bool = False,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """Print *outcome* and return the exit code for it.

    A :class:`PushResult` with a 2xx status is a success.  Any other status
    is reported on stderr together with the response body.
    """
    out = stdout or sys.stdout
    err = stderr or sys.stderr

    if json_output:
        payload = json.dumps(outcome_to_dict(outcome))
        is_ok = isinstance(outcome, PushResult) and outcome.ok
        print(payload, file=out if is_ok else err)
        return _exit_code(outcome)

    if isinstance(outcome, PushResult):
        if outcome.ok:
            _console(out).print(outcome.body)
        else:
            con = _console(err)
            con.print(f"Error: server responded with HTTP {outcome.status_code}")
            if outcome.body:
                con.print(outcome.body)
    else:
        _console(err).print(f"Error: {outcome.message}")
    return _exit_code(outcome)


def _exit_code(outcome: Outcome) -> int:
    if isinstance(outcome, PushResult):
        return EXIT_OK if outcome.ok else EXIT_FAILURE
    if isinstance(outcome, NotSupported):
        return EXIT_NOT_SUPPORTED
    if isinstance(outcome, PushFailure):
        return EXIT_FAILURE
    raise TypeError(f"Unknown outcome type: {type(outcome).__name__}")
