# utils/logger.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Console logging for the simulator: one shared logger, clean result lines

import logging
import sys
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Verbosity levels understood by the simulator logger."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class SimLogger:
    """Process-wide simulator logger writing to stdout.

    Results are printed at INFO as bare lines. Progress events (network
    built, cycle found, rising edges) go to DEBUG, or to INFO once
    ``verbose`` is set. Per-trigger counts are DEBUG only.
    """

    def __init__(self, name: str = "pulsar", level: LogLevel = LogLevel.INFO):
        self.logger = logging.getLogger(name)
        self.verbose = False
        self.logger.handlers.clear()
        self.logger.propagate = False

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(SimFormatter())
        self.logger.addHandler(handler)

        self.set_level(level)

    def set_level(self, level: LogLevel):
        """Apply ``level`` to the logger and its stdout handler."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    def set_verbose(self, verbose: bool):
        self.verbose = verbose

    def is_debug(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)

    def debug(self, message: str, **kwargs):
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(message, **kwargs)

    def progress(self, message: str):
        """Log a simulation step, at INFO when verbose and DEBUG otherwise."""
        if self.verbose:
            self.info(message)
        else:
            self.debug(message)

    # Simulation events

    def network_built(self, modules: int, latches: int, detectors: int):
        self.progress(
            f"🔧 Network built: {modules} modules "
            f"({latches} latches, {detectors} detectors)"
        )

    def trigger_drained(self, trigger: int, counts: str):
        self.debug(f"    Trigger {trigger}: {counts}")

    def cycle_found(self, offset: int, period: int):
        self.progress(f"🔁 Found cycle: offset = {offset}, period = {period}")

    def rising_edge(self, node: str, trigger: int):
        self.progress(f"    🟢 '{node}' emitted high at trigger {trigger}")

    def extrapolation_result(self, description: str, result: str):
        """Report a final extrapolated value."""
        self.info(f"{description}: {result}")

    def validation_result(self, success: bool, message: str = ""):
        """Report whether a network description was accepted."""
        if success:
            self.info(f"✅ {message or 'Network is valid'}")
        else:
            self.error(f"❌ {message or 'Network is invalid'}")


class SimFormatter(logging.Formatter):
    """Bare messages for results and errors, tagged lines for debug output."""

    def format(self, record):
        message = record.getMessage()
        if record.levelno < logging.INFO:
            return f"[DEBUG] {message}"
        return message


_global_logger: Optional[SimLogger] = None


def get_logger(name: str = "pulsar") -> SimLogger:
    """Return the shared simulator logger, creating it on first use.

    Args:
        name: Name of the underlying ``logging`` logger on first creation

    Returns:
        SimLogger instance
    """
    global _global_logger
    if _global_logger is None:
        _global_logger = SimLogger(name)
    return _global_logger


def set_log_level(level: LogLevel):
    get_logger().set_level(level)
