# pickit/logging_setup.py
from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

APP_DIR_NAME = ".pickit_configurator"


def setup_logging(debug: bool = False, quiet: bool = False) -> Path:
    """
    Configure application-wide logging.

    - Logs to ~/.pickit_configurator/app.log (rotating, max ~1 MB, 3 backups)
    - Also logs to console (stderr); ``quiet`` limits the console to warnings

    Returns:
        Path of the log file.
    """
    log_dir = Path.home() / APP_DIR_NAME
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "app.log"

    level = logging.DEBUG if debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Re-running (tests, REPL) must not stack handlers
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=1_000_000,  # ~1 MB
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
    )
    file_handler.setLevel(level)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s - %(message)s"))
    console_handler.setLevel(logging.WARNING if quiet else level)
    root_logger.addHandler(console_handler)

    root_logger.debug("Logging initialized, log file: %s", log_file)
    return log_file
