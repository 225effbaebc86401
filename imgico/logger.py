"""
Logging utilities for imgico.

Provides centralized logging to both console and file.
"""
import logging
import sys
from datetime import datetime

from imgico.config import LOG_DIRECTORY


class ImgIcoLogger:
    """Centralized logger for imgico."""

    _instance = None
    _log_file = None
    _logger = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ImgIcoLogger, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize logger with file and console handlers."""
        self._logger = logging.getLogger('imgico')
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False

        # Prevent duplicate handlers
        if self._logger.handlers:
            self._logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_formatter = logging.Formatter('[%(levelname)s] %(message)s')
        console_handler.setFormatter(console_formatter)
        self._logger.addHandler(console_handler)

        try:
            LOG_DIRECTORY.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._logger.warning(f"Log directory unavailable, file logging disabled: {e}")
            return

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        self._log_file = LOG_DIRECTORY / f'imgico_log_{timestamp}.txt'

        file_handler = logging.FileHandler(self._log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        file_handler.setFormatter(file_formatter)
        self._logger.addHandler(file_handler)

        self._logger.debug(f"imgico logging initialized: {self._log_file}")

    def get_logger(self):
        """Get the logger instance."""
        return self._logger

    def get_log_file(self):
        """Get the current log file path, or None when file logging is off."""
        return self._log_file

    def get_recent_logs(self, n_lines=500):
        """Get the most recent n lines from the log file."""
        if not self._log_file or not self._log_file.exists():
            return "No log file available."

        for handler in self._logger.handlers:
            handler.flush()

        with open(self._log_file, 'r', encoding='utf-8') as f:
            lines = f.readlines()
        return ''.join(lines[-n_lines:])

    @classmethod
    def get_log_directory(cls):
        """Get the logs directory path."""
        return LOG_DIRECTORY


# Global logger instance
_imgico_logger = ImgIcoLogger()


def get_logger():
    """Get the imgico logger instance."""
    return _imgico_logger.get_logger()


def get_log_file():
    """Get the current log file path."""
    return _imgico_logger.get_log_file()


def get_recent_logs(n_lines=500):
    """Get recent log entries."""
    return _imgico_logger.get_recent_logs(n_lines)


def get_log_directory():
    """Get the logs directory."""
    return _imgico_logger.get_log_directory()
