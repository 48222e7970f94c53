"""
pwpush-cli - Interact with Password Pusher from the command line.

Pushes secrets to a Password Pusher instance (https://pwpush.com by
default) and reports the retrievable, expiring link the server returns.
"""

from pwpush_cli.constants import TOOL_NAME, TOOL_VERSION

__version__ = TOOL_VERSION
__app_name__ = TOOL_NAME

__all__ = [
    "TOOL_NAME",
    "TOOL_VERSION",
    "__version__",
    "__app_name__",
]
