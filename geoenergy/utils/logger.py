"""Logging configuration for the geo-energy estimator."""

import logging
from pathlib import Path

import colorlog

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def setup_logger(
    name: str,
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """Set up a logger with a colored console handler and optional file output.

    Args:
        name: Logger name (typically __name__ from calling module).
        log_file: Optional path to log file. If None, only logs to console.
        console_level: Logging level for console output (default: INFO).
        file_level: Logging level for file output (default: DEBUG).

    Returns:
        Configured logger instance.

    Example:
        >>> logger = setup_logger(__name__)
        >>> logger.info("Fetching new data for 43.65, -79.38")
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers if logger already configured
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)

    console_handler = colorlog.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(
        colorlog.ColoredFormatter(
            "%(log_color)s" + LOG_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors=LOG_COLORS,
        )
    )
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

        logger.debug(f"File logging enabled: {log_file}")

    return logger


def set_console_level(logger: logging.Logger, level: int) -> None:
    """Change the console handler level of an already configured logger.

    Used by the CLI so ``--log-level`` applies to module loggers that were
    created at import time.
    """
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(
            handler, logging.FileHandler
        ):
            handler.setLevel(level)
