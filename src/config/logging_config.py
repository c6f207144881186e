# src/config/logging_config.py

"""Per-run timestamped logging configuration for the storefront client.

Every launch writes a dedicated file inside ``logs/`` named after the
launch time (e.g. ``logs/run_20261019_153045.log``).  All
``storefront.*`` loggers route through it.

The console side depends on how the client runs: the headless CLI logs
warnings to stderr, while the TUI owns the terminal and instead forwards
records to Textual's devtools console via :class:`TextualHandler`.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from textual.logging import TextualHandler

from src.config.settings import Settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(tui: bool = False) -> Path:
    """Initialise the ``storefront`` logger for the current run.

    Args:
        tui: When ``True`` console output goes to Textual's devtools
            instead of stderr, so log lines never overwrite the screen.

    Returns:
        The :class:`~pathlib.Path` of this run's log file.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = logs_dir / f"run_{timestamp}.log"

    root_logger = logging.getLogger("storefront")
    root_logger.setLevel(logging.DEBUG)

    # Repeated calls (tests, CLI falling through to the TUI) keep one set
    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )
    root_logger.addHandler(file_handler)

    console_handler: logging.Handler
    if tui:
        console_handler = TextualHandler()
    else:
        console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )
    root_logger.addHandler(console_handler)

    root_logger.info(
        "Logging initialised (tui=%s), log file: %s", tui, log_file
    )
    return log_file
