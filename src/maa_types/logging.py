"""Logging setup shared by processes embedding the decoder."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        msg = f"Unknown log level: {level!r}"
        raise ValueError(msg)
    return resolved


def configure_logging(level: str | int = "INFO", *, log_file: str | None = None) -> None:
    """Configure the root logger with a console handler and an optional file handler.

    Calling it again replaces the handlers it installed previously.
    """
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    formatter = logging.Formatter(_FORMAT)

    for handler in list(root.handlers):
        if getattr(handler, "_maa_types", False):
            root.removeHandler(handler)
            handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._maa_types = True  # type: ignore[attr-defined]  # noqa: SLF001
        root.addHandler(handler)
