"""Entry point for python -m envload.

Usage:
    # Show the resolved variables of .env
    python -m envload list

    # Look up, add, and use variables
    python -m envload get DATABASE_URL --file .env.local
    python -m envload append API_KEY secret
    python -m envload run -- ./manage.py migrate
"""

from __future__ import annotations

import argparse
import json
import logging
import subprocess
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from envload.config import load_settings
from envload.env import EMPTY_EXPORT_MESSAGE, Env
from envload.exceptions import EnvloadError
from envload.logging_config import log_exception, setup_logging

logger = logging.getLogger("envload.cli")


def _setup_logging(args: argparse.Namespace) -> None:
    """Configure logging based on command-line arguments."""
    if args.debug:
        setup_logging(
            level="DEBUG",
            log_to_console=True,
            log_to_file=not args.no_log_file,
        )
    else:
        setup_logging(
            level=args.log_level,
            log_to_console=True,
            console_level=logging.WARNING,
            log_to_file=not args.no_log_file,
        )


def _print_json(data: Any) -> None:
    """Print data as JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


def _error(message: str) -> int:
    print(f"Error: {message}", file=sys.stderr)
    return 1


def _load(args: argparse.Namespace, **options: Any) -> Env:
    """Create an Env from the configured settings and load --file into it."""
    settings = load_settings(Path.cwd())
    env: Env = Env(settings=settings)
    env.load(args.file, silent=False, **options)
    return env


# =============================================================================
# CLI Command Handlers
# =============================================================================


def cmd_list(args: argparse.Namespace) -> int:
    """Handle list command."""
    env = _load(args)
    pairs = env.to_dict(args.include_ambient)

    if args.json:
        _print_json(pairs)
        return 0

    if not pairs:
        print(EMPTY_EXPORT_MESSAGE)
        return 0

    table = Table(show_header=True, header_style="bold")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in pairs.items():
        table.add_row(key, value)
    Console().print(table)
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    """Handle get command."""
    env = _load(args)
    value = env.find(args.key)
    if value is None:
        return _error(f"{args.key} is not set in {env.filename}")
    print(value)
    return 0


def cmd_append(args: argparse.Namespace) -> int:
    """Handle append command."""
    filename = args.file or load_settings(Path.cwd()).filename
    env = Env()
    env.append_to_file(args.key, args.value, filename)
    print(f"Appended {args.key} to {filename}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Handle run command."""
    command = list(args.command)
    if command and command[0] == "--":
        command = command[1:]
    if not command:
        return _error("No command given")

    _load(args, set_in_process=True)
    logger.debug("Running %s", command)
    try:
        return subprocess.run(command, check=False).returncode
    except FileNotFoundError:
        _error(f"Command not found: {command[0]}")
        return 127


# =============================================================================
# Argument Parser Setup
# =============================================================================


def _add_file_arg(parser: argparse.ArgumentParser) -> None:
    """Add the --file argument to a parser."""
    parser.add_argument(
        "--file",
        "-f",
        default=None,
        help="Env file to use (default: .env or the configured filename)",
    )


def _create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="envload",
        description="Load KEY=VALUE pairs from .env files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  envload list --json
  envload get DATABASE_URL --file .env.local
  envload append API_KEY secret
  envload run -- ./manage.py migrate
""",
    )

    # Global arguments
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to console",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set log level (default: WARNING)",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Disable logging to file",
    )

    subparsers = parser.add_subparsers(dest="command_name", help="Available commands")

    # list
    list_parser = subparsers.add_parser("list", help="Show the resolved variables")
    _add_file_arg(list_parser)
    list_parser.add_argument(
        "--include-ambient",
        action="store_true",
        help="Also show variables from the current process environment",
    )
    list_parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    # get
    get_parser = subparsers.add_parser("get", help="Print the value of one variable")
    get_parser.add_argument("key", help="Variable name")
    _add_file_arg(get_parser)

    # append
    append_parser = subparsers.add_parser("append", help="Append KEY=VALUE to an env file")
    append_parser.add_argument("key", help="Variable name")
    append_parser.add_argument("value", help="Variable value")
    _add_file_arg(append_parser)

    # run
    run_parser = subparsers.add_parser(
        "run",
        help="Run a command with the env file applied to its environment",
    )
    _add_file_arg(run_parser)
    run_parser.add_argument("command", nargs=argparse.REMAINDER, help="Command to run")

    return parser


COMMANDS = {
    "list": cmd_list,
    "get": cmd_get,
    "append": cmd_append,
    "run": cmd_run,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the envload command line tool."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    _setup_logging(args)

    handler = COMMANDS.get(args.command_name)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except EnvloadError as e:
        log_exception(logger, e, f"{args.command_name} failed", include_traceback=args.debug)
        return _error(str(e))


if __name__ == "__main__":
    sys.exit(main())
