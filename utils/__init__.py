# utils/__init__.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Utility module exports

from .network_reader import read_network_file, NetworkFileError
from .logger import LogLevel, get_logger, set_log_level

__all__ = [
    "read_network_file",
    "NetworkFileError",
    "LogLevel",
    "get_logger",
    "set_log_level",
]
