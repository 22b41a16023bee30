# core/snapshot.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Pulse counters and whole-network state snapshots used for cycle detection

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Tuple

# ((module name, module state), ...) sorted by module name
StateKey = Tuple[Tuple[str, Tuple], ...]


@dataclass(frozen=True, slots=True)
class PulseCounts:
    """Number of Low and High pulses delivered over some span of triggers."""

    low: int = 0
    high: int = 0

    @property
    def product(self) -> int:
        return self.low * self.high

    @property
    def total(self) -> int:
        return self.low + self.high

    def __add__(self, other: PulseCounts) -> PulseCounts:
        if not isinstance(other, PulseCounts):
            return NotImplemented
        return PulseCounts(self.low + other.low, self.high + other.high)

    def __mul__(self, factor: int) -> PulseCounts:
        if not isinstance(factor, int):
            return NotImplemented
        return PulseCounts(self.low * factor, self.high * factor)

    __rmul__ = __mul__

    @staticmethod
    def sum(counts: Iterable[PulseCounts]) -> PulseCounts:
        """Add up a sequence of counts; an empty sequence sums to zero."""
        total = PulseCounts()
        for c in counts:
            total = total + c
        return total

    def __str__(self) -> str:
        return f"low={self.low}, high={self.high}"


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Network state after a trigger, paired with that trigger's counts.

    Only ``state`` takes part in equality and hashing: two snapshots taken
    at different times compare equal exactly when every Latch and Detector
    holds the same state, whatever pulse traffic led there.

    Attributes:
        state: Per-module state key
        counts: Pulses delivered during the most recent trigger
    """

    state: StateKey
    counts: PulseCounts = field(default_factory=PulseCounts, compare=False)
