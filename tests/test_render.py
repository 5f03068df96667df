"""Tests for the render adapter: shapes, colours, labels, segments, hit testing."""

from geomap.config import RenderConfig
from geomap.graph.layout import assign_positions, group_by_layer
from geomap.graph.render import (
    DEFAULT_COLORS,
    P_LEVEL_COLORS,
    PLATFORM_COLORS,
    edge_segments,
    hit_test,
    to_shape,
    truncate_label,
)
from geomap.models import Edge, EdgeKind, Layer, Node, PLevel, Position, ShapeKind


class TestToShape:
    def test_shape_by_layer(self, small_graph):
        kinds = {n.layer: to_shape(n).shape_kind for n in small_graph.nodes}
        assert kinds == {
            Layer.PROMPT: ShapeKind.CIRCLE,
            Layer.CONTENT: ShapeKind.RECT,
            Layer.CITATION: ShapeKind.TRIANGLE,
        }

    def test_prompt_size_from_score(self):
        node = Node(id="p", name="x", layer=Layer.PROMPT, p_level=PLevel.P1, score=150)
        assert to_shape(node).size_px == 30

    def test_fixed_sizes(self):
        content = Node(id="c", name="x", layer=Layer.CONTENT)
        citation = Node(id="t", name="x", layer=Layer.CITATION)
        assert to_shape(content).size_px == 15
        assert to_shape(citation).size_px == 12

    def test_sizes_from_config(self):
        render = RenderConfig(content_size=20, prompt_size_divisor=10)
        prompt = Node(id="p", name="x", layer=Layer.PROMPT, score=150)
        content = Node(id="c", name="x", layer=Layer.CONTENT)
        assert to_shape(prompt, render).size_px == 15
        assert to_shape(content, render).size_px == 20

    def test_p_level_colors(self):
        for level, color in P_LEVEL_COLORS.items():
            node = Node(id="p", name="x", layer=Layer.PROMPT, p_level=level, score=50)
            assert to_shape(node).fill_color == color

    def test_platform_color(self):
        node = Node(id="t", name="YouTube", layer=Layer.CITATION, platform="YouTube")
        assert to_shape(node).fill_color == PLATFORM_COLORS["YouTube"]

    def test_unknown_platform_uses_node_color(self):
        node = Node(id="t", name="Blog", layer=Layer.CITATION, platform="Blog", color="#123456")
        assert to_shape(node).fill_color == "#123456"

    def test_fallback_color(self):
        node = Node(id="c", name="x", layer=Layer.CONTENT, content_type="Podcast")
        assert to_shape(node).fill_color == DEFAULT_COLORS[Layer.CONTENT]

    def test_long_label_truncated_tooltip_full(self):
        name = "Blog #1: Technical White Paper"
        shape = to_shape(Node(id="c", name=name, layer=Layer.CONTENT))
        assert shape.label == "Blog #1: Technical W..."
        assert shape.tooltip == name


class TestTruncateLabel:
    def test_exactly_twenty_kept(self):
        assert truncate_label("a" * 20) == "a" * 20

    def test_twenty_one_cut(self):
        assert truncate_label("a" * 21) == "a" * 20 + "..."

    def test_custom_limit(self):
        assert truncate_label("abcdef", max_chars=3) == "abc..."


class TestEdgeSegments:
    def test_segment_endpoints(self, small_graph):
        positions = assign_positions(group_by_layer(small_graph.nodes), 1000, 600)
        segments = edge_segments(small_graph.edges[:1], positions)
        assert len(segments) == 1
        seg = segments[0]
        assert (seg.x1, seg.y1) == (positions["P1"].x, positions["P1"].y)
        assert (seg.x2, seg.y2) == (positions["C1"].x, positions["C1"].y)
        assert seg.kind == EdgeKind.PROMPT_CONTENT

    def test_unplaced_endpoint_skipped(self):
        positions = {"P": Position(x=0, y=0)}
        edges = [Edge(source="P", target="missing", kind=EdgeKind.PROMPT_CONTENT)]
        assert edge_segments(edges, positions) == []


class TestHitTest:
    def test_hit_within_padding(self):
        node = Node(id="c", name="x", layer=Layer.CONTENT)
        positions = {"c": Position(x=100, y=100)}
        # size 15 + padding 5
        assert hit_test([to_shape(node)], positions, 120, 100) == "c"
        assert hit_test([to_shape(node)], positions, 121, 100) is None

    def test_first_match_wins(self):
        a = to_shape(Node(id="a", name="a", layer=Layer.CITATION))
        b = to_shape(Node(id="b", name="b", layer=Layer.CITATION))
        positions = {"a": Position(x=10, y=10), "b": Position(x=12, y=10)}
        assert hit_test([a, b], positions, 11, 10) == "a"

    def test_miss(self):
        shape = to_shape(Node(id="a", name="a", layer=Layer.CITATION))
        assert hit_test([shape], {"a": Position(x=0, y=0)}, 500, 500) is None
