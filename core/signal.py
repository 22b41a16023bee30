# core/signal.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Pulse levels and the immutable signal record exchanged between modules

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from parser.ast_nodes import ENTRY_MODULE

# Synthetic source name carried by the trigger pulse
TRIGGER_SOURCE = "button"


class Level(Enum):
    """Binary level carried by a pulse."""

    LOW = "low"
    HIGH = "high"

    def __str__(self) -> str:
        return self.name

    def is_high(self) -> bool:
        return self is Level.HIGH


@dataclass(frozen=True, slots=True)
class Signal:
    """A single directed pulse travelling through the network.

    Signals are produced only by module processing or by the trigger
    injector, and are delivered in the order they were produced.

    Attributes:
        source: Name of the emitting module (or the trigger source)
        destination: Name of the receiving module or external sink
        level: Pulse level
    """

    source: str
    destination: str
    level: Level

    @classmethod
    def trigger(cls) -> Signal:
        """Create the Low pulse injected at the entry module by a trigger."""
        return cls(TRIGGER_SOURCE, ENTRY_MODULE, Level.LOW)

    def __str__(self) -> str:
        return f"{self.source} -{self.level.value}-> {self.destination}"
