"""Logging setup.

Library modules only call `logging.getLogger(__name__)`; the CLI calls
`configure_logging` once at startup.
"""

from __future__ import annotations

import logging
import sys

from pydantic import ValidationError
from rich.logging import RichHandler

from core.config import AppSettings

_HANDLER_ATTR = "_userdata_handler"


def _settings_level() -> str:
    try:
        return AppSettings().log_level
    except ValidationError:
        # Commands report invalid settings themselves; logging still comes up.
        return "WARNING"


def _resolve_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    name = level if level is not None else _settings_level()
    resolved = logging.getLevelName(name.strip().upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def configure_logging(level: int | str | None = None) -> logging.Handler:
    """Configure Rich-backed console logging on the root logger.

    - TTY stderr: `RichHandler` with rich tracebacks.
    - Redirected stderr (CI, pipes): plain `StreamHandler` so output stays greppable.
    - Calling it again replaces the handler installed previously.
    """

    resolved = _resolve_level(level)

    if sys.stderr.isatty():
        handler: logging.Handler = RichHandler(rich_tracebacks=True, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    setattr(handler, _HANDLER_ATTR, True)
    handler.setLevel(resolved)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, _HANDLER_ATTR, False):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(resolved)
    return handler
