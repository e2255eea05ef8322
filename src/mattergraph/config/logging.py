"""Root logger setup for the command line."""

from __future__ import annotations

import logging
import sys

from .errors import ConfigurationError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelNamesMapping().get(level.strip().upper())
    if resolved is None:
        raise ConfigurationError(f"Unknown log level {level!r}")
    return resolved


def configure_logging(*, level: int | str = logging.INFO, force: bool = False) -> None:
    """Send log records to stderr so stdout stays free for the rendered graph.

    ``level`` takes a number or a name such as ``"DEBUG"``; unknown names raise
    ``ConfigurationError``. Pass ``force=True`` to replace handlers installed
    earlier (tests, repeated CLI invocations in one process).
    """

    logging.basicConfig(
        level=resolve_level(level),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=force,
    )
