# utils/network_visualizer.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Graphviz rendering of a pulse network and its current module state

import os
from typing import TYPE_CHECKING, Iterable, Optional

from graphviz import Digraph

from core.modules import Detector, Latch
from utils.logger import get_logger

if TYPE_CHECKING:
    from core.network import Network

logger = get_logger()

VISUALIZATION_OUTPUT_FOLDER = "network_visualizations"

_SHAPES = {"relay": "box", "latch": "ellipse", "detector": "invhouse"}


def _module_label(module) -> str:
    """Display label: prefixed name plus the module's current state."""
    label = f"{module.kind.prefix}{module.name}"

    if isinstance(module, Latch):
        label += f"\\n({'on' if module.on else 'off'})"
    elif isinstance(module, Detector):
        high = sum(1 for level in module.inputs.values() if level.is_high())
        label += f"\\n({high}/{len(module.inputs)} high)"

    return label


def build_network_graph(
    network: "Network", highlight: Iterable[str] = (), fmt: str = "png"
) -> Digraph:
    """Build a Graphviz graph of the network.

    Relays are boxes, Latches ellipses (filled when on), Detectors inverted
    houses annotated with how many inputs are currently high, and external
    sinks double circles. Highlighted nodes get a bold red outline.

    Args:
        network: Network to draw
        highlight: Module names to emphasise, typically watched nodes
        fmt: Output format used when the graph is rendered

    Returns:
        Graph ready to render
    """
    highlighted = set(highlight)

    dot = Digraph(comment="Pulse network", format=fmt)
    dot.attr(rankdir="LR", nodesep="0.4", ranksep="0.6")

    for name, module in network.modules.items():
        attrs = {"shape": _SHAPES[str(module.kind)], "style": "filled"}
        attrs["fillcolor"] = "palegreen" if isinstance(module, Latch) and module.on else "white"
        if name in highlighted:
            attrs.update(color="red", penwidth="2.5")
        dot.node(name, _module_label(module), **attrs)

    for sink in network.sinks():
        level = network.sink_levels.get(sink)
        label = sink if level is None else f"{sink}\\n(last {level})"
        dot.node(sink, label, shape="doublecircle", style="filled", fillcolor="lightgrey")

    for module in network.modules.values():
        for destination in module.outputs:
            dot.edge(module.name, destination)

    return dot


def render_network(
    network: "Network",
    base_filename: str,
    highlight: Iterable[str] = (),
    fmt: str = "png",
    output_folder: Optional[str] = None,
) -> str:
    """Render the network to an image file.

    Requires the Graphviz ``dot`` executable on the PATH.

    Args:
        network: Network to draw
        base_filename: Output file name without extension
        highlight: Module names to emphasise
        fmt: Output format (e.g. "png", "svg")
        output_folder: Target directory, defaults to VISUALIZATION_OUTPUT_FOLDER

    Returns:
        Path of the rendered file
    """
    folder = output_folder or VISUALIZATION_OUTPUT_FOLDER
    if not os.path.exists(folder):
        os.makedirs(folder)
        logger.info(f"Created directory for network visualizations: {folder}")

    dot = build_network_graph(network, highlight, fmt)
    output_path = dot.render(os.path.join(folder, base_filename), cleanup=True)

    logger.info(f"Network visualization saved to {output_path}")
    return output_path
