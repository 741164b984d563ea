"""Logging for tfvc-bridge, built on the standard logging module.

Everything logs below the ``tfvcbridge`` logger. Two levels are added to the
standard ones, TRACE (5) and VERBOSE (15), so ``--verbose`` can go from
errors only (0) to everything (4).

Each tool run is also reported on ``tfvcbridge.output``: the redacted
command line, then the exit code and duration. A host that wants the TF
transcript in its own pane calls attach_output_handler(); secrets never
reach that logger.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tfvcbridge.config.schema import LoggingConfig

TRACE = 5
VERBOSE = 15

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(VERBOSE, "VERBOSE")

logger = logging.getLogger("tfvcbridge")

OUTPUT_LOGGER = "output"

_initialized = False

_LEVEL_NAMES = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "VERBOSE": VERBOSE,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_VERBOSITY_LEVELS = (logging.ERROR, logging.WARNING, logging.INFO, VERBOSE, TRACE)

_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
_DATE_FORMAT = "%H:%M:%S"


class _LowercaseLevelFormatter(logging.Formatter):
    """Renders "debug:" rather than "DEBUG:"."""

    def format(self, record: logging.LogRecord) -> str:
        record.levelname = record.levelname.lower()
        return super().format(record)


def resolve_level(config: LoggingConfig | None) -> int:
    """Log level for ``config``; ``verbose`` beats ``level``, default INFO."""
    if config is None:
        return logging.INFO
    if config.verbose is not None:
        index = min(max(config.verbose, 0), len(_VERBOSITY_LEVELS) - 1)
        return _VERBOSITY_LEVELS[index]
    if config.level:
        return _LEVEL_NAMES.get(config.level.upper(), logging.INFO)
    return logging.INFO


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure the ``tfvcbridge`` logger once; later calls do nothing.

    The log file comes from ``config.file`` or TFVC_LOG. Without one, or when
    it can't be opened, records go to stderr, but only if stderr is a
    terminal: a host reading our stderr through a pipe must not see them.
    """
    global _initialized
    if _initialized:
        return
    _initialized = True

    level = resolve_level(config)
    logger.setLevel(level)
    formatter = _LowercaseLevelFormatter(_FORMAT, datefmt=_DATE_FORMAT)

    handler: logging.Handler | None = None
    log_path = (config.file if config else None) or os.environ.get("TFVC_LOG")
    if log_path:
        try:
            handler = logging.FileHandler(os.path.expanduser(log_path), mode="a", encoding="utf-8")
        except OSError as e:
            if sys.stderr.isatty():
                print(f"[tfvcbridge] Failed to open log file: {e}", file=sys.stderr)
    if handler is None and sys.stderr.isatty():
        handler = logging.StreamHandler(sys.stderr)

    if handler is not None:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)


def attach_output_handler(handler: logging.Handler) -> logging.Handler:
    """Send the TF transcript (``tfvcbridge.output``) to ``handler``.

    Returns the handler so the caller can remove it again with
    ``get_logger(OUTPUT_LOGGER).removeHandler(handler)``.
    """
    output = get_logger(OUTPUT_LOGGER)
    if output.level == logging.NOTSET or output.level > logging.INFO:
        output.setLevel(logging.INFO)
    output.addHandler(handler)
    return handler


def get_logger(name: str | None = None) -> logging.Logger:
    """The ``tfvcbridge`` logger, or its child ``name`` (e.g. "process")."""
    if name:
        return logger.getChild(name)
    return logger
