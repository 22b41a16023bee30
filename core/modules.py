# core/modules.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# The three module behaviours and the single dispatcher that drives them

"""Module variants of a pulse network.

The module vocabulary is closed: a network is made of Relays, Latches and
Detectors only. Each variant is a plain dataclass holding its name, its
ordered outputs and whatever state it needs; the behaviour lives in
``process``, which dispatches over the variants in one place so that adding
a behaviour means touching exactly one function.

Modules never reference each other. A Detector knows its inputs by name
only, and every interaction happens through ``Signal`` values routed by the
owning network.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Tuple, Union

from parser.ast_nodes import ModuleKind
from utils.logger import get_logger
from .exceptions import NetworkError
from .signal import Level, Signal


@dataclass
class Relay:
    """Stateless passthrough: re-emits every pulse unchanged to all outputs."""

    kind: ClassVar[ModuleKind] = ModuleKind.RELAY

    name: str
    outputs: Tuple[str, ...]


@dataclass
class Latch:
    """Toggle latch, initially off.

    High pulses are absorbed. A Low pulse flips the latch and emits High when
    it turned on, Low when it turned off.
    """

    kind: ClassVar[ModuleKind] = ModuleKind.LATCH

    name: str
    outputs: Tuple[str, ...]
    on: bool = False


@dataclass
class Detector:
    """All-inputs-high detector.

    Remembers the last level received from each registered input (Low until
    heard from). After every pulse it emits Low if all remembered levels are
    High, otherwise High.

    Attributes:
        name: Module name
        outputs: Destination names
        inputs: Last level received per registered input module
    """

    kind: ClassVar[ModuleKind] = ModuleKind.DETECTOR

    name: str
    outputs: Tuple[str, ...]
    inputs: Dict[str, Level] = field(default_factory=dict)

    def register_input(self, source: str) -> None:
        self.inputs[source] = Level.LOW

    def all_high(self) -> bool:
        return all(level is Level.HIGH for level in self.inputs.values())


Module = Union[Relay, Latch, Detector]

_MODULE_TYPES = {
    ModuleKind.RELAY: Relay,
    ModuleKind.LATCH: Latch,
    ModuleKind.DETECTOR: Detector,
}


def create_module(kind: ModuleKind, name: str, outputs) -> Module:
    """Instantiate the module variant for a declaration kind.

    Args:
        kind: Module behaviour
        name: Module name
        outputs: Iterable of destination names, order preserved

    Returns:
        A freshly initialised module
    """
    return _MODULE_TYPES[kind](name, tuple(outputs))


def _emit(module: Module, level: Level) -> List[Signal]:
    return [Signal(module.name, destination, level) for destination in module.outputs]


def process(module: Module, signal: Signal) -> List[Signal]:
    """Deliver a pulse to a module and return the pulses it emits.

    This is the only place where module state changes.

    Args:
        module: Receiving module
        signal: Incoming pulse addressed to ``module``

    Returns:
        Emitted pulses, one per output, or an empty list

    Raises:
        NetworkError: A Detector received a pulse from an unregistered input
        TypeError: ``module`` is not one of the three variants
    """
    if isinstance(module, Relay):
        return _emit(module, signal.level)

    elif isinstance(module, Latch):
        if signal.level is Level.HIGH:
            return []
        module.on = not module.on
        return _emit(module, Level.HIGH if module.on else Level.LOW)

    elif isinstance(module, Detector):
        if signal.source not in module.inputs:
            raise NetworkError(
                f"Detector '{module.name}' received a pulse from "
                f"unregistered input '{signal.source}'"
            )
        module.inputs[signal.source] = signal.level
        return _emit(module, Level.LOW if module.all_high() else Level.HIGH)

    else:
        raise TypeError(f"Unknown module type: {type(module)}")


def module_state(module: Module) -> Tuple:
    """Return the hashable internal state of a module.

    Relays are stateless and contribute an empty tuple. Detector inputs are
    sorted by name so that equal mappings give equal states.
    """
    if isinstance(module, Relay):
        return ()
    elif isinstance(module, Latch):
        return (module.on,)
    elif isinstance(module, Detector):
        return tuple(sorted(module.inputs.items()))
    else:
        raise TypeError(f"Unknown module type: {type(module)}")


def reset_module(module: Module) -> None:
    """Return a module to its construction-time state."""
    logger = get_logger()

    if isinstance(module, Latch):
        module.on = False
    elif isinstance(module, Detector):
        for source in module.inputs:
            module.inputs[source] = Level.LOW
    elif not isinstance(module, Relay):
        raise TypeError(f"Unknown module type: {type(module)}")

    logger.debug(f"Reset {module.kind} '{module.name}'")
