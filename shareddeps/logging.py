"""Logging setup for the shareddeps CLI.

Diagnostics are the tool's output and go to stdout; log records describe
the run itself (cache activity, applied fixes, files that failed) and go to
stderr so they never mix with diagnostics piped to other tools.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_ROOT = "shareddeps"


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the logger for one component, e.g. ``shareddeps.manifest``."""
    return logging.getLogger(f"{_ROOT}.{component}" if component else _ROOT)


def _level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route shareddeps log records to stderr and, optionally, a debug log file.

    ``verbose`` wins over ``quiet``. The file sink always records DEBUG so a
    failed run can be inspected without re-running with ``--verbose``.
    """
    console_level = _level(verbose, quiet)
    logger = logging.getLogger(_ROOT)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter("shareddeps: %(levelname)s: %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
        logger.addHandler(sink)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(console_level)

    return logger


__all__ = ["configure_logging", "get_logger"]
