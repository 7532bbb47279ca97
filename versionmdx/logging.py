"""Logging helpers shared by the versionmdx pipeline and CLI."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "versionmdx"
_CONSOLE_FORMAT = "[versionmdx] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger below the ``versionmdx`` namespace."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def _resolve_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Attach console (stderr) and optional file handlers to the package logger.

    ``quiet`` keeps stdout-oriented commands such as ``commit-message`` free of
    progress chatter; ``verbose`` wins when both are set.
    """
    level = _resolve_level(verbose, quiet)
    logger = logging.getLogger(_LOGGER_NAME)
    # The file sink records debug output even when the console is quieter.
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)

    return logger


__all__ = ["configure_logging", "get_logger"]
