"""CLI argument parsing and main entry point.

Commands are ``<action> <object>``:

* ``pwpush push text [PAYLOAD]``: publish a text secret.
* ``pwpush push file|url``: not supported yet.
* ``pwpush expire text|file|url``: not supported yet.

Errors go to stderr, results to stdout.
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys
from typing import List, Optional, TextIO

from pwpush_cli.api.dispatch import PushAction, PushObject, execute
from pwpush_cli.api.models import PushTextIntent
from pwpush_cli.config.loader import (
    find_config_file,
    load_pwpush_config,
    resolve_instance_config,
)
from pwpush_cli.config.schema import InstanceConfig, PwPushConfig
from pwpush_cli.constants import (
    DEFAULT_INSTANCE_URL,
    DEFAULT_PROTOCOL,
    EXIT_FAILURE,
    EXIT_USAGE,
    PROTOCOLS,
    TOOL_NAME,
    TOOL_VERSION,
)
from pwpush_cli.display.console import render_outcome
from pwpush_cli.display.logging_config import (
    LOG_LEVELS,
    secret_redaction_filter,
    setup_logging,
)
from pwpush_cli.errors import PwPushError, UsageError

module_logger = logging.getLogger(__name__)


# ── Argument helpers ─────────────────────────────────────────────────────


def _non_negative_int(text: str) -> int:
    """argparse ``type=`` for counts such as days and views."""
    try:
        value = int(text, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{text}' is not an integer") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"'{text}' must not be negative")
    return value


def _add_tri_state(parser: argparse.ArgumentParser, name: str, help_on: str, help_off: str) -> None:
    """Add a ``--NAME`` / ``--no-NAME`` pair that resolves to True, False or None."""
    dest = name.replace("-", "_")
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        f"--{name}",
        dest=dest,
        action="store_const",
        const=True,
        default=None,
        help=help_on,
    )
    group.add_argument(
        f"--no-{name}",
        dest=dest,
        action="store_const",
        const=False,
        help=help_off,
    )


def _read_payload(value: Optional[str], stdin: Optional[TextIO] = None) -> str:
    """Return the payload given on the command line, or read it.

    ``None`` or ``-`` reads from stdin when it is piped (one trailing
    newline is dropped) and prompts without echo on a terminal.
    """
    if value is not None and value != "-":
        return value

    stream = stdin or sys.stdin
    try:
        if stream.isatty():
            return getpass.getpass("Secret: ")
        data = stream.read()
    except (OSError, EOFError, UnicodeDecodeError) as exc:
        raise UsageError(f"could not read the secret: {exc}") from exc

    if data.endswith("\r\n"):
        return data[:-2]
    if data.endswith("\n"):
        return data[:-1]
    return data


def _intent_from_args(args: argparse.Namespace) -> PushTextIntent:
    return PushTextIntent(
        payload=_read_payload(args.payload),
        passphrase=args.passphrase,
        note=args.note,
        expire_after_days=args.expire_after_days,
        expire_after_views=args.expire_after_views,
        deletable_by_viewer=args.deletable_by_viewer,
        retrieval_step=args.retrieval_step,
    )


def _load_file_config(args: argparse.Namespace) -> PwPushConfig:
    """Load the config file named by ``--config`` or found on disk, if any."""
    cfg_path = args.config or find_config_file()
    if cfg_path is None:
        return PwPushConfig()
    return load_pwpush_config(cfg_path)


# ── Command handlers ─────────────────────────────────────────────────────


def _cmd_run(args: argparse.Namespace, config: InstanceConfig, json_output: bool) -> int:
    """Entry-point for every ``<action> <object>`` combination."""
    action = PushAction(args.command)
    obj = PushObject(args.object)

    intent: Optional[PushTextIntent] = None
    if action is PushAction.PUSH and obj is PushObject.TEXT:
        intent = _intent_from_args(args)
        secret_redaction_filter.register(intent.payload)
        secret_redaction_filter.register(intent.passphrase)

    module_logger.info("Running '%s %s' against %s", action.value, obj.value, config.base_url)
    outcome = asyncio.run(execute(config, action, obj, intent))
    return render_outcome(outcome, json_output=json_output)


# ── CLI parser construction ──────────────────────────────────────────────


def _add_object_parsers(
    action_parser: argparse.ArgumentParser, action: PushAction
) -> None:
    objects = action_parser.add_subparsers(dest="object", metavar="{text,file,url}")

    sp_text = objects.add_parser("text", help=f"{action.value.capitalize()} a text secret")
    if action is PushAction.PUSH:
        sp_text.add_argument(
            "payload",
            nargs="?",
            default=None,
            help="The secret. Read from stdin (or prompted) if omitted or '-'.",
        )
        sp_text.add_argument(
            "--passphrase",
            type=str,
            default=None,
            help="Passphrase the viewer must enter before the secret is shown",
        )
        sp_text.add_argument(
            "--note",
            type=str,
            default=None,
            help="Reference note, only visible to the author",
        )
        sp_text.add_argument(
            "--expire-after-days",
            type=_non_negative_int,
            default=None,
            metavar="N",
            help="Expire the push after N days (server default if omitted)",
        )
        sp_text.add_argument(
            "--expire-after-views",
            type=_non_negative_int,
            default=None,
            metavar="N",
            help="Expire the push after N views (server default if omitted)",
        )
        _add_tri_state(
            sp_text,
            "deletable-by-viewer",
            "Allow viewers to delete the push",
            "Do not allow viewers to delete the push",
        )
        _add_tri_state(
            sp_text,
            "retrieval-step",
            "Require an extra click before the secret is revealed",
            "Reveal the secret without an extra click",
        )
    sp_text.set_defaults(func=_cmd_run)

    objects.add_parser("file", help=f"{action.value.capitalize()} a file push").set_defaults(
        func=_cmd_run
    )
    objects.add_parser("url", help=f"{action.value.capitalize()} a URL push").set_defaults(
        func=_cmd_run
    )
    action_parser.set_defaults(action_parser=action_parser)


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser with push/expire subcommands."""
    parser = argparse.ArgumentParser(
        prog="pwpush",
        description="Interact with Password Pusher from the command line.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"{TOOL_NAME} {TOOL_VERSION}",
    )
    parser.add_argument(
        "-u",
        "--url",
        type=str,
        default=None,
        help=f"Password Pusher instance URL (default: {DEFAULT_INSTANCE_URL})",
    )
    parser.add_argument(
        "-p",
        "--protocol",
        type=str,
        default=None,
        choices=list(PROTOCOLS),
        help=f"Instance protocol (default: {DEFAULT_PROTOCOL})",
    )
    parser.add_argument(
        "-e",
        "--email",
        type=str,
        default=None,
        help="Email for authenticated requests (sent as X-User-Email)",
    )
    parser.add_argument(
        "-t",
        "--token",
        type=str,
        default=None,
        help="API token for authenticated requests (sent as X-User-Token)",
    )
    parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        default=False,
        help="Print command output as JSON",
    )
    parser.add_argument(
        "-l",
        "--log",
        type=str,
        default=None,
        choices=list(LOG_LEVELS),
        help="Log verbosity; logs always go to stderr (default: warn)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        metavar="PATH",
        help=(
            "Path to configuration file (YAML). "
            "Default: $PWPUSH_CONFIG, ./pwpush.yaml or ~/.config/pwpush/config.yaml"
        ),
    )

    subparsers = parser.add_subparsers(dest="command")

    # ── push ────────────────────────────────────────────────────
    sp_push = subparsers.add_parser("push", help="Publish a new secret")
    _add_object_parsers(sp_push, PushAction.PUSH)

    # ── expire ──────────────────────────────────────────────────
    sp_expire = subparsers.add_parser("expire", help="Expire an existing secret")
    _add_object_parsers(sp_expire, PushAction.EXPIRE)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Program entry point: parse arguments and dispatch to the command."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help(sys.stderr)
        return EXIT_USAGE
    if getattr(args, "object", None) is None:
        args.action_parser.print_help(sys.stderr)
        return EXIT_USAGE

    try:
        file_cfg = _load_file_config(args)
        setup_logging(args.log or file_cfg.log_level)
        module_logger.info("starting application")

        config = resolve_instance_config(
            url=args.url,
            protocol=args.protocol,
            email=args.email,
            token=args.token,
            file_cfg=file_cfg,
        )
        if config.credentials is not None:
            secret_redaction_filter.register(config.credentials.token)

        json_output = args.json or file_cfg.output.json_output
        exit_code = args.func(args, config, json_output)
    except PwPushError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_USAGE
    except KeyboardInterrupt:
        module_logger.info("%s interrupted by KeyboardInterrupt.", TOOL_NAME)
        return EXIT_FAILURE

    if exit_code == 0:
        module_logger.info("application terminated normally")
    else:
        module_logger.info("application terminated with exit code %s", exit_code)
    return exit_code
