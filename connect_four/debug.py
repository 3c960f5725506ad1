"""
debug.py - Diagnostic logging for the Connect Four engine

This module wraps the standard logging package with a small manager that adds
named verbosity levels, per-component filtering, optional file output and
simple wall-clock timers. The engine itself never calls it directly; the
observers in connect_four.observers forward board and search events here.
"""

import logging
import sys
import time
from enum import Enum
from typing import Dict, Iterable, Optional, Set


class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


# Python logging has no TRACE; it sits just below DEBUG
TRACE = logging.DEBUG - 5
logging.addLevelName(TRACE, "TRACE")

LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 10,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: TRACE,
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugManager:
    """Routes engine diagnostics to the 'connect_four' logger."""

    def __init__(self, logger_name: str = "connect_four"):
        self._level = DebugLevel.WARNING
        self._enabled = True
        self._log_file: Optional[str] = None
        self._components: Set[str] = set()  # empty means every component
        self._timers: Dict[str, float] = {}
        self._logger = logging.getLogger(logger_name)
        self._logger.setLevel(LEVEL_MAP[self._level])
        if not self._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
            self._logger.addHandler(handler)

    @property
    def level(self) -> DebugLevel:
        return self._level

    def configure(self, level: Optional[DebugLevel] = None,
                  enabled: Optional[bool] = None,
                  log_file: Optional[str] = None,
                  components: Optional[Iterable[str]] = None) -> None:
        """
        Change the manager settings. Arguments left as None are untouched.

        Args:
            level: Most verbose level that is still emitted
            enabled: Master switch for all output
            log_file: Path of an extra log file; an empty string removes it
            components: Components to emit for (empty for all)
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if enabled is not None:
            self._enabled = enabled

        if log_file is not None:
            for handler in self._logger.handlers[:]:
                if isinstance(handler, logging.FileHandler):
                    self._logger.removeHandler(handler)
                    handler.close()
            self._log_file = log_file or None
            if self._log_file:
                file_handler = logging.FileHandler(self._log_file)
                file_handler.setFormatter(
                    logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
                self._logger.addHandler(file_handler)

        if components is not None:
            self._components = set(components)

    def is_enabled_for(self, level: DebugLevel, component: Optional[str] = None) -> bool:
        """Whether a message at this level and component would be emitted."""
        if not self._enabled or level == DebugLevel.NONE:
            return False
        if level.value > self._level.value:
            return False
        if component and self._components and component not in self._components:
            return False
        return True

    def log(self, level: DebugLevel, message: str, component: Optional[str] = None) -> None:
        if not self.is_enabled_for(level, component):
            return
        if component:
            message = f"[{component}] {message}"
        self._logger.log(LEVEL_MAP[level], message)

    def error(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.TRACE, message, component)

    def start_timer(self, marker: str) -> None:
        self._timers[marker] = time.perf_counter()

    def end_timer(self, marker: str, component: Optional[str] = None) -> Optional[float]:
        """
        Stop a timer started with start_timer and log the elapsed time.

        Returns:
            Elapsed seconds, or None if the marker was never started
        """
        started = self._timers.pop(marker, None)
        if started is None:
            self.warning(f"Timer '{marker}' not started", "debug")
            return None
        elapsed = time.perf_counter() - started
        self.debug(f"Performance [{marker}]: {elapsed:.6f} seconds", component)
        return elapsed

    def set_from_string(self, level_str: str) -> None:
        """Set the level from a command-line name such as 'info' or 'trace'."""
        try:
            level = DebugLevel[level_str.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown debug level: {level_str}") from None
        self.configure(level=level)


debug = DebugManager()
