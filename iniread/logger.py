import logging
import sys
from enum import IntEnum

logger = logging.getLogger("iniread")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class LogLevel(IntEnum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


def coerce_log_level(level: LogLevel | str | int) -> LogLevel:
    """Accept a level name ("debug"), a numeric string ("10") or a number."""
    if isinstance(level, str):
        name = level.strip().upper()
        if not name.isdigit():
            if name not in LogLevel.__members__:
                raise ValueError(f"Unsupported log level: {level}")
            return LogLevel[name]
        level = int(name)
    if isinstance(level, bool) or not isinstance(level, int):
        raise TypeError(f"Cannot coerce {level!r} to LogLevel")
    try:
        return LogLevel(level)
    except ValueError as exc:
        raise ValueError(f"Unsupported log level value: {level}") from exc


def _stream_handler() -> logging.StreamHandler:
    # only a plain StreamHandler is ours; subclasses belong to whoever attached them
    for handler in logger.handlers:
        if type(handler) is logging.StreamHandler:
            return handler
    handler = logging.StreamHandler(sys.stderr)
    logger.addHandler(handler)
    return handler


def configure_logger(level: LogLevel | str | int = LogLevel.WARNING) -> None:
    lvl_value = int(coerce_log_level(level))

    logger.setLevel(lvl_value)
    logger.propagate = False

    handler = _stream_handler()
    handler.setLevel(lvl_value)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
