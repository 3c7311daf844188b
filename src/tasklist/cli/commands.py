# src/tasklist/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.session import TaskListSession
from ..tasks.task_errors import ReorderMismatchError
from ..tasks.task_models import Task

CommandHandler = Callable[[TaskListSession, list[str]], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /done, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        session: TaskListSession,
        line: str,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(session, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("Any other text adds a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def render_tasks(session: TaskListSession) -> str:
    visible = session.visible_tasks
    if not visible:
        return session.empty_message

    header = f'Tasks matching "{session.query}":' if session.query else "Tasks:"
    lines = [header]
    for pos, t in enumerate(visible, start=1):
        mark = "x" if t.is_done else " "
        lines.append(f"  {pos}. [{mark}] {t.title}")
    return "\n".join(lines)


def _task_at(session: TaskListSession, arg: str) -> Task | None:
    """Resolve a 1-based position in the visible list."""
    try:
        pos = int(arg)
    except ValueError:
        return None
    visible = session.visible_tasks
    if pos < 1 or pos > len(visible):
        return None
    return visible[pos - 1]


async def cmd_help(session: TaskListSession, args: list[str]) -> str:
    return registry.build_help()


async def cmd_list(session: TaskListSession, args: list[str]) -> str:
    return render_tasks(session)


async def cmd_done(session: TaskListSession, args: list[str]) -> str:
    """
    /done N  -> toggle the completion flag of visible task N
    """
    if not args:
        return "Usage: /done <n>"
    task = _task_at(session, args[0])
    if task is None:
        return f"No task at position {args[0]}."
    session.toggle_task(task.id)
    return render_tasks(session)


async def cmd_del(session: TaskListSession, args: list[str]) -> str:
    """
    /del N  -> ask for confirmation, then delete visible task N
    """
    if not args:
        return "Usage: /del <n>"
    task = _task_at(session, args[0])
    if task is None:
        return f"No task at position {args[0]}."
    if not await session.request_delete_task(task.id):
        return "Cancelled."
    return render_tasks(session)


async def cmd_move(session: TaskListSession, args: list[str]) -> str:
    """
    /move N M  -> move visible task N to visible position M
    """
    if len(args) < 2:
        return "Usage: /move <from> <to>"
    task = _task_at(session, args[0])
    if task is None:
        return f"No task at position {args[0]}."
    try:
        to_pos = int(args[1])
    except ValueError:
        return "Usage: /move <from> <to>"

    try:
        session.move_task(task.id, to_pos - 1)
    except ReorderMismatchError:
        logger.exception("Move rejected id=%s", task.id)
        return "Could not move the task."
    return render_tasks(session)


async def cmd_search(session: TaskListSession, args: list[str]) -> str:
    """
    /search text  -> filter the list by title (case-insensitive)
    /search       -> clear the filter
    """
    session.set_search_query(" ".join(args))
    return render_tasks(session)


async def cmd_clear(session: TaskListSession, args: list[str]) -> str:
    session.set_search_query("")
    return render_tasks(session)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the (filtered) task list.", aliases=["ls"])
registry.register("done", cmd_done, help_text="Toggle a task: /done <n>.", aliases=["toggle"])
registry.register("del", cmd_del, help_text="Delete a task after confirmation: /del <n>.", aliases=["rm"])
registry.register("move", cmd_move, help_text="Reorder: /move <from> <to>.", aliases=["mv"])
registry.register("search", cmd_search, help_text="Filter by title: /search <text>.", aliases=["s"])
registry.register("clear", cmd_clear, help_text="Clear the search filter.")
