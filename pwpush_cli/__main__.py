"""
Main entry point for running pwpush_cli as a module.

Usage:
    python -m pwpush_cli <command> [options]
"""

import sys

from pwpush_cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
