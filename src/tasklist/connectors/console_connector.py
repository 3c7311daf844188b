# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_tasks
from ..core.state import AppState
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def _ainput(prompt: str) -> str:
    # input() blocks; run it off the loop so snapshot writes keep flowing.
    return await asyncio.to_thread(input, prompt)


class ConsoleDeleteConfirmer:
    """DeleteConfirmer that asks on the terminal. Anything but y/yes cancels."""

    async def confirm_delete(self, task: Task, prompt: str) -> bool:
        try:
            answer = await _ainput(f"{prompt} [y/N]: ")
        except (EOFError, KeyboardInterrupt):
            return False
        return answer.strip().lower() in ("y", "yes")


async def run_console_loop(state: AppState) -> None:
    session = state.session
    app_name = str(getattr(state.settings, "app_name", "tasklist"))

    logger.info("Console connector started (tasks=%s).", len(state.store.tasks))
    _print_ts(f"[{app_name}] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    print(render_tasks(session))

    while True:
        try:
            user_input = (await _ainput("+ ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            cmd_response = await command_registry.handle(session, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is not None:
            print(cmd_response)
            continue

        if session.submit_new_task(user_input) is None:
            continue
        print(render_tasks(session))

    logger.info("Console connector finished.")
