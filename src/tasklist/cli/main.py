# src/tasklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, hydrates the task list,
then runs the console connector until the user exits.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, shutdown_app, start_app
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)
    await start_app(state)

    try:
        if settings.console_enabled:
            await run_console_loop(state)
        else:
            logger.info("Console disabled; nothing to run. Loaded %s tasks.", len(state.store.tasks))
    finally:
        await shutdown_app(state)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")

    logger.info("Bye.")


if __name__ == "__main__":
    main()
