# src/daybook/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "daybook.log"

# The task list is printed on stdout; the console handler only shows problems
# (degraded storage, skipped entries, failed writes) unless asked otherwise.
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"


class _AppOnlyFilter(logging.Filter):
    """Pass daybook records; other loggers (incl. py.warnings) only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "daybook" or record.name.startswith("daybook."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/daybook",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Send log records to stderr (filtered) and to <log_dir>/daybook.log.

    Replaces any handlers already on the root logger, so calling it again
    (e.g. from tests) does not duplicate output. Returns the log file path.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    root.setLevel(min(console_level, file_level))

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    console.addFilter(_AppOnlyFilter())
    root.addHandler(console)

    to_file = logging.FileHandler(str(log_file), encoding="utf-8")
    to_file.setLevel(file_level)
    to_file.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(to_file)

    logging.captureWarnings(True)
    return log_file
