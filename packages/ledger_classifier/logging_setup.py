"""Logging setup for ``ledger_classifier``.

Library modules only ever call ``get_logger("ledger_classifier.<module>")``;
they never attach handlers. Output is switched on by an entrypoint (the CLI
root callback) through ``configure_logging``, which installs one named
console handler on the ``"ledger_classifier"`` logger. The level comes from
the argument, then ``LEDGER_CLASSIFIER_LOG_LEVEL``, then INFO.

Classification decisions (keyword hits, rejected suggestions, skipped date
rules) are logged at DEBUG; completed classifications and stored legacy
transactions at INFO.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "ledger_classifier"
LEVEL_ENV_VAR = "LEDGER_CLASSIFIER_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_HANDLER_NAME = "ledger_classifier.console"


def level_from_name(value: int | str | None) -> int | None:
    """Map ``"debug"``, ``"20"`` or ``logging.DEBUG`` to a numeric level.

    Returns ``None`` for ``None``, blank or unknown names.
    """

    if isinstance(value, int):
        return value
    if value is None or not value.strip():
        return None
    name = value.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelNamesMapping().get(name)
    return numeric if isinstance(numeric, int) else None


def _resolve_level(level: int | str | None) -> int:
    for candidate in (level, os.getenv(LEVEL_ENV_VAR)):
        resolved = level_from_name(candidate)
        if resolved is not None:
            return resolved
    return logging.INFO


def _console_handler(logger: logging.Logger) -> logging.Handler | None:
    return next((h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None)


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    """Install the package console handler; later calls are no-ops.

    Parameters
    ----------
    level:
        ``int`` or level name. Unknown names and ``None`` fall back to
        ``LEDGER_CLASSIFIER_LOG_LEVEL`` and then INFO.
    fmt:
        Format string, ``DEFAULT_FORMAT`` when omitted.
    stream:
        Destination of the console handler.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _console_handler(logger) is not None:
        return

    for h in [h for h in logger.handlers if isinstance(h, logging.NullHandler)]:
        logger.removeHandler(h)

    resolved = _resolve_level(level)
    handler = logging.StreamHandler(stream)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(resolved)
    logger.addHandler(handler)
    logger.propagate = False


def reset_logging() -> None:
    """Remove the console handler installed by ``configure_logging``.

    The package logger goes back to propagating to the root logger, so
    ``configure_logging`` may be called again with different settings.
    """

    logger = logging.getLogger(PACKAGE_LOGGER)
    handler = _console_handler(logger)
    if handler is not None:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)``; silent until logging is configured."""

    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = [
    "PACKAGE_LOGGER",
    "LEVEL_ENV_VAR",
    "DEFAULT_FORMAT",
    "level_from_name",
    "configure_logging",
    "reset_logging",
    "get_logger",
]
