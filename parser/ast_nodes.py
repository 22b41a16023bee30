# parser/ast_nodes.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Declaration records produced by parsing a module description

"""Parsed representation of a module description.

A description is a sequence of declarations, one per line::

    broadcaster -> a, b, c
    %a -> b
    &inv -> a

Each declaration becomes an immutable ``ModuleDecl`` naming the module kind,
the module name and its ordered output destinations. Declarations carry no
wiring information beyond outputs; Detector inputs are derived when the
network is built.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

# The only Relay label; it names the module receiving every trigger pulse
ENTRY_MODULE = "broadcaster"


class ModuleKind(Enum):
    """The closed set of module behaviours, keyed by their label prefix."""

    RELAY = ""
    LATCH = "%"
    DETECTOR = "&"

    @property
    def prefix(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class ModuleDecl:
    """A single ``label -> outputs`` declaration.

    Attributes:
        kind: Behaviour selected by the label prefix
        name: Module name without its prefix
        outputs: Destination names in declaration order
        lineno: Source line of the declaration (0 when built by hand)
    """

    kind: ModuleKind
    name: str
    outputs: Tuple[str, ...]
    lineno: int = 0

    def __str__(self) -> str:
        return f"{self.kind.prefix}{self.name} -> {', '.join(self.outputs)}"
