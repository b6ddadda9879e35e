"""Logging configuration."""

import logging
import sys
from pathlib import Path
from typing import List, Optional

# Cycles and concurrent presentations log from worker threads
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(threadName)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """
    Send toaster logs to stderr and optionally to a file.

    Stdout is left to the console presenter's prompts.
    """
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        log_file = Path(log_file).expanduser()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, handlers=handlers, force=True)
