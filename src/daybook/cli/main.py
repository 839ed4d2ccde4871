# src/daybook/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the task store, runs the console
front-end, then disposes the store.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        store = getattr(state, "task_store", None)
        if store is not None:
            if not store.persisted:
                logger.warning("Exiting with unsaved tasks (storage unavailable).")
            store.dispose()
    except Exception:
        logger.debug("Task store dispose failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/daybook")
    setup_logging(log_dir=log_dir, file_level=file_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "daybook"))

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)
    state.task_store.load()

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.info("Console disabled; loaded %d tasks, nothing else to run.", len(state.task_store))
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
