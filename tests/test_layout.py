"""Tests for the three-column layout."""

import pytest

from geomap.graph.layout import assign_positions, group_by_layer
from geomap.models import Layer, Node


def _nodes(layer: Layer, count: int) -> list[Node]:
    return [Node(id=f"{layer.value}{i}", name=f"n{i}", layer=layer) for i in range(count)]


class TestGroupByLayer:
    def test_keeps_input_order(self, demo_graph):
        groups = group_by_layer(demo_graph.nodes)
        assert [n.id for n in groups[Layer.PROMPT]] == ["p1", "p2", "p3", "p4", "p5", "p6"]
        assert len(groups[Layer.CONTENT]) == 7
        assert len(groups[Layer.CITATION]) == 6

    def test_empty_layers_present(self):
        groups = group_by_layer([])
        assert groups == {Layer.PROMPT: [], Layer.CONTENT: [], Layer.CITATION: []}


class TestAssignPositions:
    def test_column_x_per_layer(self):
        groups = {
            Layer.PROMPT: _nodes(Layer.PROMPT, 2),
            Layer.CONTENT: _nodes(Layer.CONTENT, 3),
            Layer.CITATION: _nodes(Layer.CITATION, 1),
        }
        positions = assign_positions(groups, 1000, 600)
        assert {positions[n.id].x for n in groups[Layer.PROMPT]} == {150}
        assert {positions[n.id].x for n in groups[Layer.CONTENT]} == {500}
        assert {positions[n.id].x for n in groups[Layer.CITATION]} == {850}

    def test_even_vertical_spacing(self):
        groups = {Layer.CONTENT: _nodes(Layer.CONTENT, 3)}
        positions = assign_positions(groups, 1000, 600)
        assert [positions[f"content{i}"].y for i in range(3)] == [150, 300, 450]

    def test_single_node_centered(self):
        positions = assign_positions({Layer.PROMPT: _nodes(Layer.PROMPT, 1)}, 800, 400)
        assert positions["prompt0"].y == 200
        assert positions["prompt0"].x == pytest.approx(120)

    def test_every_node_placed_inside_canvas(self, demo_graph):
        positions = assign_positions(group_by_layer(demo_graph.nodes), 1000, 600)
        assert set(positions) == {n.id for n in demo_graph.nodes}
        for pos in positions.values():
            assert 0 < pos.x < 1000
            assert 0 < pos.y < 600

    def test_empty_layer_yields_nothing(self):
        assert assign_positions({Layer.PROMPT: []}, 1000, 600) == {}

    def test_custom_columns(self):
        groups = {Layer.CITATION: _nodes(Layer.CITATION, 1)}
        positions = assign_positions(groups, 1000, 600, columns=(0.1, 0.5, 0.9))
        assert positions["citation0"].x == pytest.approx(900)

    def test_same_input_same_output(self, demo_graph):
        groups = group_by_layer(demo_graph.nodes)
        assert assign_positions(groups, 1000, 600) == assign_positions(groups, 1000, 600)

    def test_y_increases_in_input_order(self, demo_graph):
        groups = group_by_layer(demo_graph.nodes)
        positions = assign_positions(groups, 1000, 600)
        for layer_nodes in groups.values():
            ys = [positions[n.id].y for n in layer_nodes]
            assert all(a < b for a, b in zip(ys, ys[1:]))
