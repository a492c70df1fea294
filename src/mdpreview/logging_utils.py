#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/logging_utils.py
"""Logging setup for applications embedding the preview engine.

Library modules only create ``logging.getLogger(__name__)`` loggers. Hosts
call ``configure_logging`` once to route the ``mdpreview`` hierarchy to
stderr and, optionally, a log file. The host's root logger is left alone
unless ``root=True`` is passed.

"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER_NAME = "mdpreview"

_HANDLER_TAG = "_mdpreview_handler"


def resolve_log_level(log_level: int | str) -> int:
    """Return the numeric level for ``log_level``, falling back to INFO for unknown names."""
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    root: bool = False,
) -> logging.Logger:
    """Attach console (and optional file) handlers for preview logging.

    Calling this again replaces the handlers added by the previous call;
    handlers installed by the host are kept.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "DEBUG").
    log_file : str, optional
        Path of a log file to append to in addition to stderr.
    trace_mode : bool, default False
        When true, include timestamps, thread names and logger names. Useful
        when renders are offloaded to a worker thread.
    root : bool, default False
        Configure the root logger instead of the ``mdpreview`` logger.

    Returns
    -------
    logging.Logger
        The configured logger.

    """
    resolved_level = resolve_log_level(log_level)

    target = logging.getLogger() if root else logging.getLogger(PACKAGE_LOGGER_NAME)
    target.setLevel(resolved_level)
    for handler in [h for h in target.handlers if getattr(h, _HANDLER_TAG, False)]:
        target.removeHandler(handler)
        handler.close()

    format_str = (
        "[%(asctime)s] [%(levelname)s] [%(threadName)s] [%(name)s] %(message)s"
        if trace_mode
        else "%(levelname)s: %(message)s"
    )
    date_format = "%Y-%m-%d %H:%M:%S" if trace_mode else None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as exc:
            target.warning("Could not create log file %s: %s", log_file, exc)

    for handler in handlers:
        handler.setLevel(resolved_level)
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_TAG, True)
        target.addHandler(handler)

    if log_file and len(handlers) > 1:
        target.info("Logging to file: %s", log_file)

    return target


__all__ = ["PACKAGE_LOGGER_NAME", "configure_logging", "resolve_log_level"]
