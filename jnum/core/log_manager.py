"""
Logging setup for the jnum logger tree and timing of numerical operations.

Modules log through ``logging.getLogger(__name__)``, so everything the
package emits lands under the ``jnum`` logger. ``LogManager`` attaches
handlers there according to ``NumericsConfig.log_level`` and
``NumericsConfig.log_file``.
"""

import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, List, Optional

from .config.settings import NumericsConfig, get_config

PACKAGE_LOGGER = "jnum"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class PerformanceLogger:
    """Logs the wall-clock duration of named operations."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger
        self._timers: Dict[str, float] = {}

    def start_timer(self, name: str) -> None:
        self._timers[name] = time.perf_counter()

    def end_timer(self, name: str, log_level: int = logging.INFO) -> float:
        """Stop the named timer, log and return the elapsed seconds."""
        if name not in self._timers:
            self.logger.warning(f"Timer '{name}' was never started")
            return 0.0

        elapsed = time.perf_counter() - self._timers.pop(name)
        self.logger.log(log_level, f"{name} took {elapsed:.3f}s")
        return elapsed

    @contextmanager
    def time_operation(self, name: str, log_level: int = logging.INFO):
        self.start_timer(name)
        try:
            yield
        finally:
            self.end_timer(name, log_level)


class LogManager:
    """Attach console and file handlers to the ``jnum`` logger.

    Parameters
    ----------
    config : NumericsConfig, optional
        Source of the level and log file; the global configuration is used
        when omitted
    enable_console : bool
        Also log to standard error
    """

    def __init__(self, config: Optional[NumericsConfig] = None, enable_console: bool = True):
        config = config or get_config()
        self.level = config.get_log_level()
        self.file_path: Optional[Path] = config.log_file
        self.logger = logging.getLogger(PACKAGE_LOGGER)
        self._previous_level = self.logger.level
        self._handlers: List[logging.Handler] = []

        self.logger.setLevel(self.level)
        if enable_console:
            self._install(logging.StreamHandler())
        if self.file_path is not None:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self._install(logging.FileHandler(self.file_path))

        self.logger.debug(f"Logging at {logging.getLevelName(self.level)}"
                          + (f" to {self.file_path}" if self.file_path else ""))

    def _install(self, handler: logging.Handler) -> None:
        handler.setLevel(self.level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        self.logger.addHandler(handler)
        self._handlers.append(handler)

    @property
    def handlers(self) -> List[logging.Handler]:
        return list(self._handlers)

    def set_level(self, level: str) -> None:
        """Change the level of the ``jnum`` logger and of the installed handlers."""
        self.level = getattr(logging, level.upper())
        self.logger.setLevel(self.level)
        for handler in self._handlers:
            handler.setLevel(self.level)

    def close(self) -> None:
        """Detach and close the handlers this manager installed."""
        for handler in self._handlers:
            self.logger.removeHandler(handler)
            handler.close()
        self._handlers.clear()
        self.logger.setLevel(self._previous_level)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
