"""Module to manage session logs from the command line."""

import argparse
import sys

from loguru import logger
from rich.console import Console

from desktop_session_logger.cli.configuration import DEFAULT_THEME, load_settings
from desktop_session_logger.cli.runner import (
    run_archive,
    run_prune,
    set_logging,
    show_sessions,
)
from desktop_session_logger.core.engine import LogEngine
from desktop_session_logger.helpers.logging_helpers import configure_logger


def main() -> None:
    """Main entrypoint for the log management CLI."""
    parser = argparse.ArgumentParser(description="Manage desktop session logs")
    parser.add_argument("--config", type=str, default=None, help="YAML settings file.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Show info logs (-v) or debug (-vv) to console",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("sessions", help="List sessions and their age.")
    sub.add_parser("archive", help="Bundle recent sessions into a zip file.")
    prune = sub.add_parser("prune", help="Delete expired sessions.")
    prune.add_argument("--days", type=float, default=None)
    sub.add_parser("enable", help="Enable file logging.")
    sub.add_parser("disable", help="Disable file logging.")

    args = parser.parse_args()

    level = "ERROR"
    if args.verbose > 0:
        level = "DEBUG" if args.verbose > 1 else "INFO"
    configure_logger(level=level)

    console = Console()
    settings = load_settings(args.config)
    engine = LogEngine.from_settings(settings)

    try:
        if args.command == "sessions":
            engine.ensure_root()
            show_sessions(engine, console)
        elif args.command == "archive":
            engine.ensure_root()
            run_archive(engine, console)
        elif args.command == "prune":
            engine.ensure_root()
            run_prune(engine, console, days=args.days)
        else:
            set_logging(engine, console, enabled=args.command == "enable")
    except Exception as e:
        logger.exception(f"Command '{args.command}' failed: {e}")
        console.print(f"Error: {e}", style=DEFAULT_THEME["error"])
        sys.exit(1)


if __name__ == "__main__":
    main()
