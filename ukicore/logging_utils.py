"""Logging utilities to centralize logging configuration.

Helpers take a ``log_func`` (any ``Callable[[str], None]``) rather than a
logger object so callers can pass ``print``, a collector, or ``null_logger``.
"""
from __future__ import annotations
import logging, os, pathlib, sys
from typing import Callable, List, Optional

LogFunc = Callable[[str], None]

LOG_FILE_NAME = 'ukicore.log'

def configure_logging(level: int = logging.INFO, log_dir: Optional[str] = None) -> None:
    if logging.getLogger().handlers:
        return
    fmt = '%(asctime)s %(levelname)-7s %(name)s: %(message)s'
    datefmt = '%Y-%m-%dT%H:%M:%S'
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    log_dir = log_dir or os.environ.get('UKI_LOG_DIR')
    if log_dir:
        path = pathlib.Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path / LOG_FILE_NAME, encoding='utf-8'))
    logging.basicConfig(level=level, format=fmt, datefmt=datefmt, handlers=handlers)

def null_logger(msg: str) -> None:
    pass

def logger_for(name: str, level: int = logging.INFO) -> LogFunc:
    """Return a LogFunc that forwards messages to ``logging.getLogger(name)``."""
    log = logging.getLogger(name)
    def _log(msg: str) -> None:
        log.log(level, msg)
    return _log
