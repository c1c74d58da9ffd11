"""
Logging setup for the CLI and the golden harness.

Console output goes to stderr at the configured level so stdout stays
clean for `--json` and health payloads. The run log file always records
DEBUG, which includes per-rule dispatch from the engine.

Usage:
    from brand_compliance.utils.log import get_logger
    logger = get_logger(__name__)
    logger.info("Evaluating asset %s", category)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

NAMESPACE = "brand_compliance"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Handlers installed by setup_logging, so a second call replaces them.
_handlers: list[logging.Handler] = []


def setup_logging(level: str = "INFO", log_file: Path | None = None) -> Path | None:
    """
    (Re)configure the `brand_compliance` logger.

    Returns the log file actually in use, or None when it could not be opened.
    """
    root = logging.getLogger(NAMESPACE)
    for handler in _handlers:
        root.removeHandler(handler)
        handler.close()
    _handlers.clear()

    console_level = getattr(logging, str(level).upper(), logging.INFO)
    fmt = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    _handlers.append(console)

    file_error = None
    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(str(log_file), encoding="utf-8")
        except OSError as e:
            file_error, log_file = e, None
        else:
            fh.setLevel(logging.DEBUG)
            fh.setFormatter(fmt)
            _handlers.append(fh)

    for handler in _handlers:
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if log_file else console_level)

    if file_error is not None:
        root.warning("Cannot open log file, logging to console only: %s", file_error)
    return log_file


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module. Automatically namespaced under 'brand_compliance'."""
    if not name.startswith(NAMESPACE):
        name = f"{NAMESPACE}.{name}"
    return logging.getLogger(name)
