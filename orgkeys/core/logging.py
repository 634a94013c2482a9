"""
Logger factory for orgkeys

Key material must never reach these loggers. Derivation code logs rendered paths, depths, counts and fingerprints.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

__all__ = ["get_logger"]

DEFAULT_FORMAT = '%(asctime)s [%(name)s] [%(levelname)s]: %(message)s'


def _attach(logger: logging.Logger, handler: logging.Handler, formatter: logging.Formatter):
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def get_logger(name: str, log_level: str = "INFO", log_file: Optional[Path] = None,
               format_string: Optional[str] = None) -> logging.Logger:
    """
    Return the named logger, configuring it on first use with a stdout handler and an optional file handler.
    Later calls for the same name return the logger unchanged.

    Args:
        name: Logger name, usually the calling module's __name__
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_file: Optional file to append log records to
        format_string: Optional format replacing DEFAULT_FORMAT
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    logger.setLevel(level)

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)
    _attach(logger, logging.StreamHandler(stream=sys.stdout), formatter)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _attach(logger, logging.FileHandler(log_file), formatter)

    return logger
