"""
Logger - Central logging system for Flock Sim

Usage:
    from flocksim.utils.logger import logger

    logger.debug("Detailed debug info")
    logger.info("Normal operation")
    logger.warning("Something unexpected")
    logger.error("Something failed")

    # With context
    logger.info("Simulation initialized", component="SIM")
    logger.warning("Settings file unreadable", component="CONFIG", details=str(e))

The logger emits Qt signals so a GUI console can follow simulation events.
"""

import logging
import sys
from datetime import datetime
from enum import IntEnum
from typing import Optional
from PyQt5.QtCore import QObject, pyqtSignal


class LogLevel(IntEnum):
    """Log levels matching Python logging."""
    DEBUG = logging.DEBUG      # 10
    INFO = logging.INFO        # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR      # 40


class LogSignalEmitter(QObject):
    """Qt signal emitter for thread-safe log updates."""
    log_message = pyqtSignal(str, int, str)  # message, level, timestamp


class QtSignalHandler(logging.Handler):
    """
    Logging handler that emits Qt signals.
    Thread-safe: can be called from any thread, signal delivered to main thread.
    """

    def __init__(self, emitter: LogSignalEmitter):
        super().__init__()
        self.emitter = emitter

    def emit(self, record: logging.LogRecord):
        try:
            msg = self.format(record)
            timestamp = datetime.now().strftime("%H:%M:%S")
            self.emitter.log_message.emit(msg, record.levelno, timestamp)
        except Exception:
            self.handleError(record)


class FlockLogger:
    """
    Central logger for Flock Sim.

    Features:
    - Qt signal emission for GUI console
    - Component tagging for filtering
    - Console (terminal) output
    - Optional file output
    """

    def __init__(self):
        self._logger = logging.getLogger("flocksim")
        self._logger.setLevel(logging.DEBUG)  # Capture all, filter on handlers
        self._logger.propagate = False

        self.signal_emitter = LogSignalEmitter()

        self._console_handler = logging.StreamHandler(sys.stdout)
        self._console_handler.setLevel(logging.INFO)
        self._console_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%H:%M:%S"
        ))
        self._logger.addHandler(self._console_handler)

        self._qt_handler = QtSignalHandler(self.signal_emitter)
        self._qt_handler.setLevel(logging.DEBUG)  # GUI shows all levels
        self._qt_handler.setFormatter(logging.Formatter("%(message)s"))
        self._logger.addHandler(self._qt_handler)

        self._file_handler: Optional[logging.FileHandler] = None

    def set_level(self, level: LogLevel):
        """Set minimum log level for console output."""
        self._console_handler.setLevel(level)

    def set_gui_level(self, level: LogLevel):
        """Set minimum log level for GUI console."""
        self._qt_handler.setLevel(level)

    def enable_file_logging(self, filepath: str):
        """Enable logging to file."""
        if self._file_handler:
            self._logger.removeHandler(self._file_handler)

        self._file_handler = logging.FileHandler(filepath)
        self._file_handler.setLevel(logging.DEBUG)
        self._file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s"
        ))
        self._logger.addHandler(self._file_handler)

    def disable_file_logging(self):
        """Disable file logging."""
        if self._file_handler:
            self._logger.removeHandler(self._file_handler)
            self._file_handler.close()
            self._file_handler = None

    def _format_message(self, msg: str, component: Optional[str] = None,
                        details: Optional[str] = None) -> str:
        """Format message with optional component tag and details."""
        parts = []
        if component:
            parts.append(f"[{component}]")
        parts.append(msg)
        if details:
            parts.append(f"- {details}")
        return " ".join(parts)

    def debug(self, msg: str, component: Optional[str] = None,
              details: Optional[str] = None):
        """Log debug message (detailed info for troubleshooting)."""
        self._logger.debug(self._format_message(msg, component, details))

    def info(self, msg: str, component: Optional[str] = None,
             details: Optional[str] = None):
        """Log info message (normal operation)."""
        self._logger.info(self._format_message(msg, component, details))

    def warning(self, msg: str, component: Optional[str] = None,
                details: Optional[str] = None):
        """Log warning message (unexpected but recoverable)."""
        self._logger.warning(self._format_message(msg, component, details))

    def error(self, msg: str, component: Optional[str] = None,
              details: Optional[str] = None):
        """Log error message (something failed)."""
        self._logger.error(self._format_message(msg, component, details))

    def sim(self, msg: str, details: Optional[str] = None):
        """Convenience: log simulation-loop message."""
        self.debug(msg, component="SIM", details=details)

    def boid(self, index: int, msg: str, details: Optional[str] = None):
        """Convenience: log a message about one boid."""
        self.debug(f"Boid {index}: {msg}", component="BOID", details=details)


# Global logger instance
logger = FlockLogger()


def set_log_level(level: LogLevel):
    """Set the console log level."""
    logger.set_level(level)
