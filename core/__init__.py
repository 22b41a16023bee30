# core/__init__.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Core module public API for pulse network simulation

"""Core components for pulse network simulation.

This package holds the discrete-event simulator of a small digital pulse
network and the extrapolation strategies built on top of it. A network is a
fixed directed graph of Relays, Latches and Detectors exchanging binary
pulses; each trigger injects one Low pulse at the entry module and drains
the resulting pulses breadth-first until the network is quiet again.

Primary Components:
    Level, Signal: Pulse levels and the immutable pulse record
    Relay, Latch, Detector: The three module behaviours
    Network: Module ownership, event loop, snapshots
    PulseCounts, Snapshot: Counters and cycle-detection keys
    extrapolate_pulse_counts: Whole-system cycle detection
    first_low_trigger: Rising-edge detection combined by LCM

Example:
    >>> from core import build_network, extrapolate_pulse_product
    >>> network = build_network("broadcaster -> a\\n%a -> rx")
    >>> extrapolate_pulse_product(network, 1000)
"""

from .signal import ENTRY_MODULE, TRIGGER_SOURCE, Level, Signal
from .modules import Detector, Latch, Module, Relay, process
from .snapshot import PulseCounts, Snapshot
from .network import Network, build_network
from .extrapolator import (
    CycleInfo,
    extrapolate_pulse_counts,
    extrapolate_pulse_product,
    find_cycle,
    find_rising_edges,
    first_low_trigger,
    triggers_until_low,
    watch_candidates,
)
from .exceptions import ExtrapolationError, NetworkError, PeriodicityError

__all__ = [
    "ENTRY_MODULE",
    "TRIGGER_SOURCE",
    "Level",
    "Signal",
    "Relay",
    "Latch",
    "Detector",
    "Module",
    "process",
    "PulseCounts",
    "Snapshot",
    "Network",
    "build_network",
    "CycleInfo",
    "find_cycle",
    "extrapolate_pulse_counts",
    "extrapolate_pulse_product",
    "find_rising_edges",
    "first_low_trigger",
    "triggers_until_low",
    "watch_candidates",
    "NetworkError",
    "ExtrapolationError",
    "PeriodicityError",
]

__version__ = "1.0.0"
__description__ = "Core components for pulse network simulation"
