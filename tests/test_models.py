"""Tests for graph validation and insert model constraints."""

import pytest
from pydantic import ValidationError

from geomap.models import (
    Edge,
    EdgeKind,
    Graph,
    Layer,
    Node,
    RoadmapInsert,
)


def _prompt(node_id: str = "p") -> Node:
    return Node(id=node_id, name="prompt", layer=Layer.PROMPT)


def _content(node_id: str = "c") -> Node:
    return Node(id=node_id, name="content", layer=Layer.CONTENT)


class TestGraphValidation:
    def test_valid_graph(self, small_graph):
        assert len(small_graph.nodes) == 6
        assert small_graph.get_node("C1").name == "Cooling guide"
        assert small_graph.get_node("missing") is None

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate node id"):
            Graph(nodes=(_prompt("x"), _content("x")))

    def test_wrong_layer_edge_rejected(self):
        with pytest.raises(ValueError, match="must start at a prompt node"):
            Graph(
                nodes=(_content("c1"), _content("c2")),
                edges=(Edge(source="c1", target="c2", kind=EdgeKind.PROMPT_CONTENT),),
            )

    def test_dangling_edge_tolerated(self):
        graph = Graph(
            nodes=(_prompt(),),
            edges=(Edge(source="p", target="gone", kind=EdgeKind.PROMPT_CONTENT),),
        )
        assert len(graph.edges) == 1

    def test_nodes_in_layer(self, demo_graph):
        assert len(demo_graph.nodes_in_layer(Layer.CITATION)) == 6

    def test_graph_is_frozen(self, small_graph):
        with pytest.raises(ValidationError):
            small_graph.nodes = ()


class TestRoadmapInsert:
    def test_month_format(self):
        with pytest.raises(ValidationError):
            RoadmapInsert(month="Jan 2025", prompt="x", p_level="P0")

    def test_quick_win_bounds(self):
        with pytest.raises(ValidationError):
            RoadmapInsert(month="2025-01", prompt="x", p_level="P0", quick_win_index=120)

    def test_defaults(self):
        item = RoadmapInsert(month="2025-01", prompt="x", p_level="P2")
        assert item.enhanced_geo_score == 0.0
        assert item.category is None
