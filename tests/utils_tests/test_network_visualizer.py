# tests/utils_tests/test_network_visualizer.py
# This file is part of Pulsar - A Pulse Network Simulator
#
# Tests for the Graphviz description of a network, with rendering stubbed out

import os

from graphviz import Digraph
from core.network import build_network
from utils.network_visualizer import build_network_graph, render_network


class TestNetworkGraph:
    """Generated DOT source reflects structure and state."""

    def test_edges_follow_outputs(self, toggle_network_text):
        source = build_network_graph(build_network(toggle_network_text)).source

        for edge in ["broadcaster -> a", "a -> inv", "a -> con", "inv -> b", "b -> con", "con -> output"]:
            assert edge in source

    def test_module_shapes(self, toggle_network_text):
        source = build_network_graph(build_network(toggle_network_text)).source

        assert "shape=box" in source
        assert "shape=ellipse" in source
        assert "shape=invhouse" in source
        assert "shape=doublecircle" in source

    def test_latch_state_is_shown(self, toggle_network_text):
        network = build_network(toggle_network_text)
        assert "palegreen" not in build_network_graph(network).source

        network.trigger()
        source = build_network_graph(network).source

        assert "palegreen" in source
        assert "(on)" in source

    def test_sink_shows_last_level(self, toggle_network_text):
        network = build_network(toggle_network_text)
        network.trigger()

        assert "last" in build_network_graph(network).source

    def test_highlighted_nodes(self, counter_network_text):
        network = build_network(counter_network_text)

        plain = build_network_graph(network).source
        marked = build_network_graph(network, highlight=["inv"]).source

        assert "color=red" not in plain
        assert "color=red" in marked

    def test_format_is_carried(self, counter_network_text):
        dot = build_network_graph(build_network(counter_network_text), fmt="svg")

        assert dot.format == "svg"


class TestRenderNetwork:
    """render_network hands the graph to Graphviz and reports the file."""

    def test_render_network(self, tmp_path, monkeypatch, counter_network_text):
        calls = []

        def fake_render(self, filename=None, **kwargs):
            calls.append((filename, kwargs))
            return f"{filename}.{self.format}"

        monkeypatch.setattr(Digraph, "render", fake_render)
        folder = tmp_path / "renders"

        output = render_network(
            build_network(counter_network_text), "counter", fmt="svg", output_folder=str(folder)
        )

        assert folder.is_dir()
        assert output == os.path.join(str(folder), "counter") + ".svg"
        assert calls == [(os.path.join(str(folder), "counter"), {"cleanup": True})]
