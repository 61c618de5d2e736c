# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the TaskStore once, then dispatches the parsed
subcommand to its handler with the store passed in explicitly.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ..cli.bootstrap import create_task_store
from ..cli.commands import EXIT_FAILURE, EXIT_OK, registry
from ..config import get_settings
from ..errors import TaskTrackerError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="task-tracker",
        description="Track your tasks from the terminal.",
        epilog=registry.build_help(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--file",
        dest="tasks_path",
        type=Path,
        default=None,
        help="Task file to use (default: TASK_TRACKER_TASKS_PATH or <data_dir>/tasks.json).",
    )
    registry.add_subparsers(parser)
    return parser


def run(argv: Sequence[str] | None = None, *, settings=None, console: Console | None = None) -> int:
    """
    Parse argv, open the store and run one command. Returns the exit code.

    Argument errors exit through argparse (SystemExit, code 2).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    console = console or Console(highlight=False)

    if args.command is None:
        console.print("Welcome to the task tracker! Use --help for usage.")
        return EXIT_OK

    try:
        store = create_task_store(settings=settings, tasks_path=args.tasks_path)
        return registry.handle(store, args, console)
    except TaskTrackerError as exc:
        logger.debug("Command %s failed.", args.command, exc_info=True)
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        return EXIT_FAILURE


def main(argv: Sequence[str] | None = None) -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    log_dir = settings.data_dir if settings.log_to_file else None
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)
    sys.exit(run(argv, settings=settings))


if __name__ == "__main__":
    main()
