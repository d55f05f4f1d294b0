"""
Logging utility module for the UI engine.
"""

import logging
import os
import sys
import time
from typing import Dict, Optional

# Define logging levels dictionary for easy reference
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}

ROOT_LOGGER_NAME = "ui_engine"


class LogFormatter(logging.Formatter):
    """Log formatter that colors the level name on terminals."""

    # ANSI color codes
    COLORS = {
        'RESET': '\033[0m',
        'RED': '\033[31m',
        'GREEN': '\033[32m',
        'YELLOW': '\033[33m',
        'BLUE': '\033[34m',
        'BOLD': '\033[1m'
    }

    LEVEL_COLORS = {
        'DEBUG': COLORS['BLUE'],
        'INFO': COLORS['GREEN'],
        'WARNING': COLORS['YELLOW'],
        'ERROR': COLORS['RED'],
        'CRITICAL': COLORS['RED'] + COLORS['BOLD']
    }

    def __init__(self, colored: bool = True, *args, **kwargs):
        """
        Initialize formatter.

        Args:
            colored: Whether to use colored output
            *args: Additional formatter args
            **kwargs: Additional formatter kwargs
        """
        self.colored = colored and sys.platform != 'win32'  # No ANSI on Windows consoles
        super().__init__(*args, **kwargs)

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record.

        Args:
            record: Log record to format

        Returns:
            str: Formatted log message
        """
        formatted_msg = super().format(record)

        if self.colored:
            level_name = record.levelname
            if level_name in self.LEVEL_COLORS:
                colored_level = f"{self.LEVEL_COLORS[level_name]}{level_name}{self.COLORS['RESET']}"
                formatted_msg = formatted_msg.replace(f"[{level_name}]", f"[{colored_level}]", 1)

        return formatted_msg


def setup_logging(log_file: Optional[str] = None,
                  console_level: str = "INFO",
                  file_level: str = "DEBUG",
                  component: Optional[str] = None) -> logging.Logger:
    """
    Set up logging for the UI engine.

    Args:
        log_file: Path to log file (None for no file logging)
        console_level: Console logging level
        file_level: File logging level
        component: Optional component name for the logger

    Returns:
        logging.Logger: Configured logger
    """
    logger_name = ROOT_LOGGER_NAME
    if component:
        logger_name = f"{logger_name}.{component}"

    logger = logging.getLogger(logger_name)

    # If handlers already exist, assume logger is already configured
    if logger.handlers:
        return logger

    # Logger level is the lowest of the two so both handlers receive their records
    logger.setLevel(min(LOG_LEVELS.get(console_level, logging.INFO),
                        LOG_LEVELS.get(file_level, logging.DEBUG)))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(LOG_LEVELS.get(console_level, logging.INFO))
    console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    console_handler.setFormatter(LogFormatter(colored=True, fmt=console_format, datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)

    if log_file:
        add_file_handler(logger, log_file, file_level)

    return logger


def add_file_handler(logger: logging.Logger, log_file: str,
                     level: str = "DEBUG") -> logging.FileHandler:
    """
    Attach a detailed file handler to a logger.

    Args:
        logger: Logger to extend
        log_file: Path to log file
        level: File logging level

    Returns:
        logging.FileHandler: The attached handler
    """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(LOG_LEVELS.get(level, logging.DEBUG))

    # File output is more detailed than the console
    file_format = ("%(asctime)s [%(levelname)s] %(name)s "
                   "(%(filename)s:%(lineno)d): %(message)s")
    file_handler.setFormatter(logging.Formatter(file_format, datefmt='%Y-%m-%d %H:%M:%S'))
    logger.addHandler(file_handler)

    if file_handler.level < logger.level:
        logger.setLevel(file_handler.level)

    return file_handler


def set_console_level(logger: logging.Logger, level: str) -> None:
    """
    Change the level of the console handlers attached to a logger.

    Args:
        logger: Logger returned by setup_logging
        level: New console level name
    """
    numeric = LOG_LEVELS.get(str(level).upper(), logging.INFO)
    for handler in logger.handlers:
        if type(handler) is logging.StreamHandler:
            handler.setLevel(numeric)
    if numeric < logger.level:
        logger.setLevel(numeric)


def log_exception(logger: logging.Logger, exception: Exception,
                  message: str = "An exception occurred") -> None:
    """
    Log an exception.

    Args:
        logger: Logger to use
        exception: Exception to log
        message: Message to log with the exception
    """
    exc_info = (type(exception), exception, exception.__traceback__)
    logger.error(f"{message}: {exception}", exc_info=exc_info)


class PerformanceLogger:
    """Utility class for logging performance metrics."""

    def __init__(self, logger: logging.Logger, component: str):
        """
        Initialize performance logger.

        Args:
            logger: Logger to use
            component: Component name
        """
        self.logger = logger
        self.component = component
        self.start_times: Dict[str, float] = {}

    def start(self, name: str) -> None:
        """
        Start timing an operation.

        Args:
            name: Operation name
        """
        self.start_times[name] = time.perf_counter()

    def end(self, name: str, level: str = "DEBUG") -> float:
        """
        End timing an operation and log the duration.

        Args:
            name: Operation name
            level: Log level

        Returns:
            float: Duration in seconds
        """
        if name not in self.start_times:
            self.logger.warning(f"No start time found for {name}")
            return 0.0

        duration = time.perf_counter() - self.start_times.pop(name)
        self.log(name, duration, level)
        return duration

    def log(self, name: str, duration: float, level: str = "DEBUG") -> None:
        """
        Log a duration.

        Args:
            name: Operation name
            duration: Duration in seconds
            level: Log level
        """
        log_func = getattr(self.logger, level.lower())
        log_func(f"{self.component} {name} took {duration:.4f} seconds")

    def clear(self) -> None:
        """Clear all start times."""
        self.start_times.clear()
