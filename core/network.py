# core/network.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Pulse network ownership, breadth-first event loop and state snapshots

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, Iterable, List, Optional

from parser import parse
from parser.ast_nodes import ModuleDecl
from utils.logger import get_logger
from .exceptions import NetworkError
from .modules import (
    Detector,
    Latch,
    Module,
    Relay,
    create_module,
    module_state,
    process,
    reset_module,
)
from .signal import ENTRY_MODULE, Level, Signal
from .snapshot import PulseCounts, Snapshot, StateKey

SignalObserver = Callable[[Signal], None]


@dataclass
class Network:
    """A fixed graph of modules driven one trigger at a time.

    The network owns every module and the pending signal queue. Its structure
    never changes after construction; triggers only change the internal state
    of Latches and Detectors. Destinations that do not name a module are
    external sinks: pulses sent there are counted and their level remembered
    in ``sink_levels``, and nothing else happens.

    Attributes:
        modules: Modules keyed by name, in declaration order
        queue: Pending pulses, drained front to back
        sink_levels: Last level received by each external sink
        trigger_count: Number of completed triggers since construction or reset
    """

    modules: Dict[str, Module] = field(default_factory=dict)
    queue: Deque[Signal] = field(default_factory=deque)
    sink_levels: Dict[str, Level] = field(default_factory=dict)
    trigger_count: int = 0
    _low: int = field(default=0, init=False, repr=False)
    _high: int = field(default=0, init=False, repr=False)

    @classmethod
    def from_declarations(cls, declarations: Iterable[ModuleDecl]) -> Network:
        """Build a network from parsed declarations.

        Every module is registered as an input of each Detector among its
        destinations, so Detector input mappings start out complete with all
        levels Low.

        Args:
            declarations: Module declarations in description order

        Returns:
            Network in its initial state

        Raises:
            NetworkError: Two declarations share a module name, or the entry
                module is declared as a Latch or Detector
        """
        logger = get_logger()
        network = cls()

        for decl in declarations:
            if decl.name in network.modules:
                raise NetworkError(
                    f"Duplicate module '{decl.name}' (line {decl.lineno})"
                )
            network.modules[decl.name] = create_module(
                decl.kind, decl.name, decl.outputs
            )

        for module in network.modules.values():
            for destination in module.outputs:
                target = network.modules.get(destination)
                if isinstance(target, Detector):
                    target.register_input(module.name)

        entry = network.modules.get(ENTRY_MODULE)
        if entry is not None and not isinstance(entry, Relay):
            raise NetworkError(
                f"Entry module '{ENTRY_MODULE}' must be a relay, not a {entry.kind}"
            )
        if entry is None:
            logger.warning(
                f"⚠️  No '{ENTRY_MODULE}' module: trigger pulses will go to a sink"
            )

        logger.network_built(
            len(network.modules), len(network.latches), len(network.detectors)
        )
        return network

    # Structure queries

    def get_module(self, name: str) -> Optional[Module]:
        return self.modules.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.modules

    @property
    def latches(self) -> List[Latch]:
        return [m for m in self.modules.values() if isinstance(m, Latch)]

    @property
    def detectors(self) -> List[Detector]:
        return [m for m in self.modules.values() if isinstance(m, Detector)]

    def inputs_of(self, name: str) -> List[str]:
        """Names of all modules listing ``name`` among their outputs."""
        return [m.name for m in self.modules.values() if name in m.outputs]

    def sinks(self) -> List[str]:
        """Destination names with no module behind them, in first-seen order."""
        seen: Dict[str, None] = {}
        for module in self.modules.values():
            for destination in module.outputs:
                if destination not in self.modules:
                    seen.setdefault(destination)
        return list(seen)

    # Event loop

    @property
    def counts(self) -> PulseCounts:
        """Pulses delivered since the last snapshot."""
        return PulseCounts(self._low, self._high)

    def trigger(self, observer: Optional[SignalObserver] = None) -> PulseCounts:
        """Inject one trigger pulse and drain the queue to a fixed point.

        Pulses are delivered strictly first-in first-out, so a Detector sees
        every same-generation update before any later-generation pulse.

        Args:
            observer: Called with every pulse as it is taken off the queue

        Returns:
            Pulses delivered during this trigger
        """
        low, high = self._low, self._high

        self.queue.append(Signal.trigger())
        self._drain(observer)
        self.trigger_count += 1

        counts = PulseCounts(self._low - low, self._high - high)
        logger = get_logger()
        if logger.is_debug():
            logger.trigger_drained(self.trigger_count, str(counts))
        return counts

    def _drain(self, observer: Optional[SignalObserver]) -> None:
        while self.queue:
            signal = self.queue.popleft()

            if signal.level is Level.LOW:
                self._low += 1
            else:
                self._high += 1

            if observer is not None:
                observer(signal)

            target = self.modules.get(signal.destination)
            if target is None:
                self.sink_levels[signal.destination] = signal.level
                continue

            self.queue.extend(process(target, signal))

    # State

    def state_key(self) -> StateKey:
        """Hashable state of every Latch and Detector, sorted by name."""
        return tuple(
            (name, module_state(module))
            for name, module in sorted(self.modules.items())
            if not isinstance(module, Relay)
        )

    def snapshot(self) -> Snapshot:
        """Capture the current state and consume the pulse counters.

        Returns:
            Snapshot whose counts cover everything since the previous snapshot
        """
        snapshot = Snapshot(self.state_key(), self.counts)
        self._low = 0
        self._high = 0
        return snapshot

    def reset(self) -> None:
        """Restore every module and counter to the construction-time state."""
        for module in self.modules.values():
            reset_module(module)

        self.queue.clear()
        self.sink_levels.clear()
        self.trigger_count = 0
        self._low = 0
        self._high = 0

        get_logger().debug(f"Network reset ({len(self.modules)} modules)")


def build_network(source: str) -> Network:
    """Parse a module description and build its network.

    Args:
        source: Description text, one ``label -> outputs`` line per module

    Returns:
        Network in its initial state

    Raises:
        ParseError: The description is malformed
        NetworkError: The description declares a module twice
    """
    return Network.from_declarations(parse(source))
