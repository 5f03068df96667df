"""Render adapter: maps positioned nodes and edges to drawing primitives.

Shape is fixed by layer (prompt circle, content rect, citation triangle).
Fill comes from typed lookup tables; the drawing surface (SVG, PNG) only
consumes NodeShape / LineSegment and never looks at Node attributes.
"""

import logging
import math
from collections.abc import Iterable, Mapping

from geomap.config import RenderConfig
from geomap.models import (
    Edge,
    EdgeKind,
    Layer,
    LineSegment,
    Node,
    NodeShape,
    Position,
    PLevel,
    PublishStatus,
    ShapeKind,
)

logger = logging.getLogger(__name__)

LAYER_SHAPES: dict[Layer, ShapeKind] = {
    Layer.PROMPT: ShapeKind.CIRCLE,
    Layer.CONTENT: ShapeKind.RECT,
    Layer.CITATION: ShapeKind.TRIANGLE,
}

P_LEVEL_COLORS: dict[PLevel, str] = {
    PLevel.P0: "#EF4444",  # red - core
    PLevel.P1: "#F97316",  # orange - important
    PLevel.P2: "#EAB308",  # yellow - opportunity
    PLevel.P3: "#3B82F6",  # blue - reserve
}

CONTENT_TYPE_COLORS: dict[str, str] = {
    "Deep Blog": "#3B82F6",
    "Practical Blog": "#06B6D4",
    "FAQ": "#8B5CF6",
    "Product": "#EC4899",
    "Video": "#F59E0B",
    "Guide": "#10B981",
    "Review": "#6366F1",
}

STATUS_COLORS: dict[PublishStatus, str] = {
    PublishStatus.PUBLISHED: "#10B981",
    PublishStatus.SCHEDULED: "#06B6D4",
    PublishStatus.DRAFT: "#F59E0B",
    PublishStatus.PLANNED: "#94A3B8",
    PublishStatus.ARCHIVED: "#64748B",
}

PLATFORM_COLORS: dict[str, str] = {
    "YouTube": "#FF0000",
    "Reddit": "#FF4500",
    "Medium": "#00AB6C",
    "Quora": "#B92B27",
    "ChatGPT": "#10A37F",
    "Claude": "#8B5CF6",
    "Perplexity": "#20808D",
    "Gemini": "#4285F4",
    "Copilot": "#0078D4",
    "Amazon": "#FF9900",
    "LinkedIn": "#0A66C2",
}

DEFAULT_COLORS: dict[Layer, str] = {
    Layer.PROMPT: "#94A3B8",
    Layer.CONTENT: "#F97316",
    Layer.CITATION: "#10B981",
}

EDGE_COLORS: dict[EdgeKind, str] = {
    EdgeKind.PROMPT_CONTENT: "#94A3B8",
    EdgeKind.CONTENT_CITATION: "#D1D5DB",
}

EDGE_WIDTHS: dict[EdgeKind, float] = {
    EdgeKind.PROMPT_CONTENT: 2.0,
    EdgeKind.CONTENT_CITATION: 1.0,
}


def truncate_label(name: str, max_chars: int = 20) -> str:
    if len(name) > max_chars:
        return name[:max_chars] + "..."
    return name


def fill_color(node: Node) -> str:
    """Pick the fill colour for a node from the lookup tables."""
    if node.layer == Layer.PROMPT:
        if node.p_level is not None:
            return P_LEVEL_COLORS[node.p_level]
    elif node.layer == Layer.CONTENT:
        if node.content_type in CONTENT_TYPE_COLORS:
            return CONTENT_TYPE_COLORS[node.content_type]
        if node.status is not None:
            return STATUS_COLORS[node.status]
    elif node.layer == Layer.CITATION:
        if node.platform in PLATFORM_COLORS:
            return PLATFORM_COLORS[node.platform]
        if node.color:
            return node.color
    return DEFAULT_COLORS[node.layer]


def node_size(node: Node, render: RenderConfig) -> float:
    if node.layer == Layer.PROMPT:
        return node.score / render.prompt_size_divisor
    if node.layer == Layer.CONTENT:
        return render.content_size
    return render.citation_size


def to_shape(node: Node, render: RenderConfig | None = None) -> NodeShape:
    """Describe how to draw a node."""
    render = render or RenderConfig()
    return NodeShape(
        node_id=node.id,
        shape_kind=LAYER_SHAPES[node.layer],
        fill_color=fill_color(node),
        size_px=node_size(node, render),
        label=truncate_label(node.name, render.label_max_chars),
        tooltip=node.name,
    )


def edge_segments(
    edges: Iterable[Edge],
    positions: Mapping[str, Position],
) -> list[LineSegment]:
    """Map edges to line segments, skipping edges with an unplaced endpoint."""
    segments: list[LineSegment] = []
    skipped = 0
    for edge in edges:
        src = positions.get(edge.source)
        dst = positions.get(edge.target)
        if src is None or dst is None:
            skipped += 1
            continue
        segments.append(LineSegment(
            source=edge.source, target=edge.target, kind=edge.kind,
            x1=src.x, y1=src.y, x2=dst.x, y2=dst.y,
        ))
    if skipped:
        logger.debug("Skipped %d edges with unplaced endpoints", skipped)
    return segments


def hit_test(
    shapes: Iterable[NodeShape],
    positions: Mapping[str, Position],
    x: float,
    y: float,
    padding: float = 5.0,
) -> str | None:
    """Return the id of the first node within size + padding of (x, y)."""
    for shape in shapes:
        pos = positions.get(shape.node_id)
        if pos is None:
            continue
        if math.hypot(x - pos.x, y - pos.y) <= shape.size_px + padding:
            return shape.node_id
    return None
