"""Logging utilities for robustgeom.

All robustgeom loggers live under the ``robustgeom`` namespace.  The
package installs a ``NullHandler`` on import, so nothing is printed
until an application calls ``configure_logging()``.  The process root
logger is never modified.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Union

ROOT_NAME = 'robustgeom'

_FORMAT = logging.Formatter('%(levelname)s %(name)s: %(message)s')


def _to_level(level: Union[str, int, None], default: int = logging.INFO) -> int:
    if level is None:
        return default
    if isinstance(level, int):
        return level
    lvl = logging.getLevelName(str(level).upper())
    if isinstance(lvl, int):
        return lvl
    return default


def _stream_handlers(log: logging.Logger):
    return [h for h in log.handlers if not isinstance(h, logging.NullHandler)]


def configure_logging(level: Union[str, int] = 'INFO', stream=None) -> logging.Logger:
    """Attach a single stream handler (stdout by default) to the
    ``robustgeom`` logger and set its level.  Calling this again only
    changes the level."""
    root = logging.getLogger(ROOT_NAME)
    if not _stream_handlers(root):
        handler = logging.StreamHandler(stream=stream if stream is not None else sys.stdout)
        handler.setFormatter(_FORMAT)
        root.addHandler(handler)
    root.propagate = False
    root.setLevel(_to_level(level))
    return root


def get_logger(name: str, level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Return a logger under the ``robustgeom`` namespace.

    Module names inside the package (``robustgeom.intersect``) are used
    as they are; any other name is made a child of ``robustgeom``.
    """
    if name != ROOT_NAME and not name.startswith(ROOT_NAME + '.'):
        name = '{}.{}'.format(ROOT_NAME, name)
    log = logging.getLogger(name)
    if level is not None:
        log.setLevel(_to_level(level))
    return log


__all__ = ['get_logger', 'configure_logging']
