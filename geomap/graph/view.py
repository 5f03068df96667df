"""Graph view state and the derived view model.

GraphViewState holds what the user has picked (focus node, show-all toggle,
prompt filters). The update functions return a new state and never mutate.
build_view recomputes every derived view from (graph, state) on each call.
"""

import logging

from pydantic import BaseModel, Field

from geomap.config import LayoutConfig, RenderConfig
from geomap.graph.layout import assign_positions, group_by_layer
from geomap.graph.render import edge_segments, to_shape
from geomap.graph.visibility import compute_stats, visible_edges
from geomap.models import (
    Edge,
    Graph,
    Layer,
    LineSegment,
    Node,
    NodeShape,
    PLevel,
    Position,
    SelectionStats,
)

logger = logging.getLogger(__name__)

COVERAGE_FILTERS = ("covered", "uncovered")


class PromptFilters(BaseModel):
    p_level: PLevel | None = None
    category: str | None = None
    covered: str | None = None  # "covered" | "uncovered" | None

    def matches(self, node: Node) -> bool:
        if node.layer != Layer.PROMPT:
            return True
        if self.p_level is not None and node.p_level != self.p_level:
            return False
        if self.category is not None and node.category != self.category:
            return False
        if self.covered == "covered" and not node.covered:
            return False
        if self.covered == "uncovered" and node.covered:
            return False
        return True


class GraphViewState(BaseModel):
    focus: str | None = None
    show_all: bool = False
    filters: PromptFilters = Field(default_factory=PromptFilters)


# --- Actions ---


def select_node(state: GraphViewState, node_id: str | None) -> GraphViewState:
    return state.model_copy(update={"focus": node_id})


def clear_selection(state: GraphViewState) -> GraphViewState:
    return state.model_copy(update={"focus": None})


def toggle_show_all(state: GraphViewState) -> GraphViewState:
    return state.model_copy(update={"show_all": not state.show_all})


def set_filters(state: GraphViewState, **changes: object) -> GraphViewState:
    """Merge filter changes into the current filters.

    Raises:
        ValueError: on an unknown filter name or coverage value.
    """
    unknown = set(changes) - set(PromptFilters.model_fields)
    if unknown:
        raise ValueError(f"Unknown filter(s): {', '.join(sorted(unknown))}")
    covered = changes.get("covered")
    if covered is not None and covered not in COVERAGE_FILTERS:
        raise ValueError(f"covered must be one of {COVERAGE_FILTERS}, got {covered!r}")

    merged = {**state.filters.model_dump(), **changes}
    return state.model_copy(update={"filters": PromptFilters(**merged)})


def reset_filters(state: GraphViewState) -> GraphViewState:
    return state.model_copy(update={"filters": PromptFilters()})


# --- Derived view ---


class GraphViewModel(BaseModel):
    width: float
    height: float
    column_fractions: tuple[float, float, float] = (0.15, 0.5, 0.85)
    nodes: list[Node]
    positions: dict[str, Position]
    shapes: list[NodeShape]
    edges: list[Edge]
    segments: list[LineSegment]
    stats: SelectionStats
    focus: Node | None = None
    show_all: bool = False


def build_view(
    graph: Graph,
    state: GraphViewState,
    layout: LayoutConfig | None = None,
    render: RenderConfig | None = None,
) -> GraphViewModel:
    """Compute positions, shapes, visible edges and stats for the current state."""
    layout = layout or LayoutConfig()
    render = render or RenderConfig()

    nodes = [n for n in graph.nodes if state.filters.matches(n)]
    positions = assign_positions(
        group_by_layer(nodes),
        layout.canvas_width,
        layout.canvas_height,
        layout.column_fractions,
    )
    shown = visible_edges(graph.edges, state.focus, state.show_all)
    segments = edge_segments(shown, positions)

    logger.debug(
        "View: %d/%d nodes, %d visible edges, %d drawn (focus=%s, show_all=%s)",
        len(nodes), len(graph.nodes), len(shown), len(segments),
        state.focus, state.show_all,
    )

    return GraphViewModel(
        width=layout.canvas_width,
        height=layout.canvas_height,
        column_fractions=layout.column_fractions,
        nodes=nodes,
        positions=positions,
        shapes=[to_shape(n, render) for n in nodes],
        edges=shown,
        segments=segments,
        stats=compute_stats(graph.edges, state.focus),
        focus=graph.get_node(state.focus) if state.focus else None,
        show_all=state.show_all,
    )
