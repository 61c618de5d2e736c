# src/task_tracker/cli/commands.py

from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Iterable

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm
from rich.table import Table

from ..core.ports import TaskRepo
from ..errors import ValidationError
from ..tasks.task_models import ALL, Task, TaskStatus

CommandHandler = Callable[[TaskRepo, argparse.Namespace, Console], int]
ParserConfigurator = Callable[[argparse.ArgumentParser], None]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

STATUS_STYLES = {
    TaskStatus.TODO: "yellow",
    TaskStatus.IN_PROGRESS: "cyan",
    TaskStatus.DONE: "green",
}


class CommandRegistry:
    """Subcommand registry: builds the argparse subparsers and dispatches to handlers."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._configure: dict[str, ParserConfigurator | None] = {}
        self._aliases: dict[str, list[str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        configure: ParserConfigurator | None = None,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        self._configure[key] = configure
        self._aliases[key] = [a.lower() for a in aliases]
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def add_subparsers(self, parser: argparse.ArgumentParser) -> None:
        sub = parser.add_subparsers(dest="command", metavar="COMMAND")
        for name, help_text in self._help.items():
            p = sub.add_parser(name, help=help_text, description=help_text, aliases=self._aliases[name])
            configure = self._configure[name]
            if configure is not None:
                configure(p)

    def handle(self, store: TaskRepo, args: argparse.Namespace, console: Console) -> int:
        name = str(getattr(args, "command", "") or "").lower()
        handler = self._handlers.get(name)
        if not handler:
            console.print(f"[red]Unknown command: {escape(name)}.[/red] Use --help to list available commands.")
            return EXIT_USAGE
        logger.debug("Dispatching command %s", name)
        return handler(store, args, console)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument types ----

def _task_id(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"task id must be an integer, got {raw!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"task id must be positive, got {value}")
    return value


def _status(raw: str) -> TaskStatus:
    try:
        return TaskStatus.parse(raw)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _status_filter(raw: str) -> str:
    if raw.strip().upper() == ALL:
        return ALL
    return _status(raw).value


# ---- output helpers ----

def render_tasks(console: Console, tasks: Iterable[Task], *, title: str | None = None) -> None:
    """Render tasks as a table (ID, Name, Description, Status, Created, Updated)."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("ID", justify="right", style="bold")
    table.add_column("Name")
    table.add_column("Description")
    table.add_column("Status")
    table.add_column("Created", style="dim")
    table.add_column("Updated", style="dim")

    for t in tasks:
        style = STATUS_STYLES.get(t.status, "")
        table.add_row(
            str(t.id),
            escape(t.name),
            escape(t.description),
            f"[{style}]{t.status.value}[/{style}]" if style else t.status.value,
            escape(t.created_at),
            escape(t.updated_at),
        )

    console.print(table)


def confirm(console: Console, prompt: str) -> bool:
    """Yes/no prompt, default No. End of input counts as No."""
    try:
        return Confirm.ask(prompt, console=console, default=False)
    except (EOFError, KeyboardInterrupt):
        console.print()
        return False


def _not_found(console: Console, task_id: int) -> int:
    console.print(f"[red]Error:[/red] Task with ID {task_id} not found.")
    return EXIT_FAILURE


# ---- handlers ----

def cmd_add(store: TaskRepo, args: argparse.Namespace, console: Console) -> int:
    task_id = store.add_task(args.name, args.description)
    console.print(f"[green]Task added successfully![/green] ID: {task_id}")
    return EXIT_OK


def _configure_add(p: argparse.ArgumentParser) -> None:
    p.add_argument("name", help="Task name (must not be blank).")
    p.add_argument("description", nargs="?", default="", help="Optional free-text description.")


def cmd_update(store: TaskRepo, args: argparse.Namespace, console: Console) -> int:
    fields: dict[str, str] = {}
    if args.name is not None:
        fields["name"] = args.name
    if args.description is not None:
        fields["description"] = args.description
    if not fields:
        console.print("[red]Error:[/red] Nothing to update. Pass --name and/or --description.")
        return EXIT_USAGE

    if not store.update_task(args.task_id, fields):
        return _not_found(console, args.task_id)
    console.print(f"Task ID {args.task_id} updated successfully.")
    return EXIT_OK


def _configure_update(p: argparse.ArgumentParser) -> None:
    p.add_argument("task_id", type=_task_id, help="ID of the task to update.")
    p.add_argument("--name", "-n", default=None, help="New task name.")
    p.add_argument("--description", "-d", default=None, help="New task description.")


def cmd_delete(store: TaskRepo, args: argparse.Namespace, console: Console) -> int:
    if not store.delete_task(args.task_id):
        return _not_found(console, args.task_id)
    console.print(f"Task ID {args.task_id} deleted successfully.")
    return EXIT_OK


def _configure_delete(p: argparse.ArgumentParser) -> None:
    p.add_argument("task_id", type=_task_id, help="ID of the task to delete.")


def cmd_mark(store: TaskRepo, args: argparse.Namespace, console: Console) -> int:
    if not store.mark_as(args.task_id, args.status):
        return _not_found(console, args.task_id)
    console.print(f"Task ID {args.task_id} marked as {args.status.value} successfully.")
    return EXIT_OK


def _configure_mark(p: argparse.ArgumentParser) -> None:
    p.add_argument("task_id", type=_task_id, help="ID of the task to mark.")
    p.add_argument("status", type=_status, help="New status: todo, in_progress or done.")


def cmd_list(store: TaskRepo, args: argparse.Namespace, console: Console) -> int:
    status = args.status
    tasks = store.list_all() if status == ALL else store.list_by_status(status)
    render_tasks(console, tasks)
    console.print(f"Listing {status} tasks (Total: {len(tasks)}):")
    return EXIT_OK


def _configure_list(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "status",
        nargs="?",
        default=ALL,
        type=_status_filter,
        help="Filter: all (default), todo, in_progress or done.",
    )


def cmd_search(store: TaskRepo, args: argparse.Namespace, console: Console) -> int:
    tasks = store.search_tasks(args.query)
    if not tasks:
        console.print(f"No tasks found matching query '{escape(args.query)}'.")
        return EXIT_OK
    render_tasks(console, tasks, title=f"Search: {escape(args.query)}")
    return EXIT_OK


def _configure_search(p: argparse.ArgumentParser) -> None:
    p.add_argument("query", help="Case-insensitive text to look for in names and descriptions.")


def cmd_clean(store: TaskRepo, args: argparse.Namespace, console: Console) -> int:
    """
    clean        -> ask, then remove all DONE tasks
    clean --yes  -> remove without asking
    """
    if not store.list_by_status(TaskStatus.DONE):
        console.print("No DONE tasks to clean.")
        return EXIT_OK

    if not args.yes and not confirm(
        console, "Are you sure you want to delete all DONE tasks? This action is irreversible."
    ):
        console.print("Operation cancelled.")
        return EXIT_OK

    count = store.clean_done_tasks()
    logger.info("Cleaned %d DONE tasks", count)
    console.print(f"Successfully deleted {count} DONE tasks.")
    return EXIT_OK


def _configure_clean(p: argparse.ArgumentParser) -> None:
    p.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation.")


registry.register("add", cmd_add, help_text="Add a new task.", configure=_configure_add)
registry.register("update", cmd_update, help_text="Update a task's name and/or description.", configure=_configure_update)
registry.register("delete", cmd_delete, help_text="Delete a task.", configure=_configure_delete, aliases=["rm"])
registry.register("mark", cmd_mark, help_text="Set a task's status.", configure=_configure_mark)
registry.register("list", cmd_list, help_text="List tasks, optionally by status.", configure=_configure_list, aliases=["ls"])
registry.register("search", cmd_search, help_text="Search tasks by name or description.", configure=_configure_search)
registry.register("clean", cmd_clean, help_text="Delete all DONE tasks.", configure=_configure_clean)
