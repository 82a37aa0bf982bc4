"""
Logging for the file data store. The store and serializer log under the
"file_data" logger; setup_logger attaches a stdout handler and, when a path
is given, a UTF-8 file handler. Settings come from the `system` section of
the store config (log_level, log_file).
"""
import logging
import sys
from pathlib import Path

LOGGER_NAME = "file_data"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    name: str = LOGGER_NAME,
) -> logging.Logger:
    """Return the store logger at `level`. Handlers are attached on the first call only."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(name)
    logger.setLevel(log_level)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def setup_logger_from_config(config: dict) -> logging.Logger:
    system = config.get("system") or {}
    return setup_logger(level=system.get("log_level", "INFO"), log_file=system.get("log_file"))
