"""
Logging configuration for playbrowser.
"""
import logging
import sys
from pathlib import Path
from typing import Optional


class ColoredFormatter(logging.Formatter):
    """Colored log formatter for terminal output."""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        color = self.COLORS.get(record.levelname, '')
        reset = self.COLORS['RESET']
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{reset}"
        return super().format(record)


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """Setup logging configuration for playbrowser.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            an unknown level falls back to INFO
        log_file: Optional log file path
    """
    logger = logging.getLogger('playbrowser')
    numeric_level = getattr(logging, str(level).upper(), None)
    unknown_level = not isinstance(numeric_level, int)
    if unknown_level:
        numeric_level = logging.INFO
    logger.setLevel(numeric_level)

    # Clear existing handlers
    logger.handlers.clear()

    # Console handler with colors
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_formatter = ColoredFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    # File handler (optional)
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    if unknown_level:
        logger.warning(f"Unknown log level {level!r}, using INFO")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific module.

    Args:
        name: Module name

    Returns:
        Logger instance
    """
    return logging.getLogger(f'playbrowser.{name}')


# Custom exceptions for better error handling
class PlayBrowserError(Exception):
    """Base exception for playbrowser."""
    pass


class FilesystemError(PlayBrowserError):
    """Open, list or stat failure on a real or archive-mounted path."""

    def __init__(self, path: str, errno: Optional[int] = None,
                 strerror: Optional[str] = None):
        self.path = path
        self.errno = errno
        self.strerror = strerror
        super().__init__(self.reason)

    @property
    def reason(self) -> str:
        """Human readable reason, suitable for a status line."""
        if self.strerror:
            return f"can't read '{self.path}': {self.strerror}"
        return f"can't read '{self.path}'"

    @classmethod
    def from_os_error(cls, path: str, error: OSError) -> "FilesystemError":
        return cls(path, error.errno, error.strerror or str(error))


class StateError(PlayBrowserError):
    """Navigation request that is illegal in the current browse state."""
    pass


class PlayerError(PlayBrowserError):
    """External player related errors."""
    pass


class ConfigurationError(PlayBrowserError):
    """Configuration related errors."""
    pass
