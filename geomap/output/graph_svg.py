"""SVG rendering of the three-layer network view."""

import logging
from pathlib import Path

from geomap.graph.render import EDGE_COLORS, EDGE_WIDTHS
from geomap.graph.view import GraphViewModel
from geomap.models import NodeShape, Position, ShapeKind

logger = logging.getLogger(__name__)

LAYER_HEADINGS = [
    ("Prompts", "#EF4444"),
    ("Contents", "#F97316"),
    ("Citations", "#10B981"),
]

BG = "#0F172A"
TEXT = "#E2E8F0"
TEXT_DIM = "#94A3B8"
FOCUS_STROKE = "#FACC15"


def _esc(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _shape_svg(shape: NodeShape, pos: Position, focused: bool) -> str:
    s = shape.size_px
    stroke = FOCUS_STROKE if focused else "#FFFFFF"
    width = 3 if focused else 1.5
    common = f'fill="{shape.fill_color}" stroke="{stroke}" stroke-width="{width}"'

    if shape.shape_kind == ShapeKind.CIRCLE:
        body = f'<circle cx="{pos.x:.1f}" cy="{pos.y:.1f}" r="{s:.1f}" {common}/>'
    elif shape.shape_kind == ShapeKind.RECT:
        w, h = s * 2, s * 1.5
        body = (
            f'<rect x="{pos.x - w / 2:.1f}" y="{pos.y - h / 2:.1f}" '
            f'width="{w:.1f}" height="{h:.1f}" rx="3" {common}/>'
        )
    else:
        points = (
            f"{pos.x:.1f},{pos.y - s:.1f} "
            f"{pos.x + s:.1f},{pos.y + s:.1f} "
            f"{pos.x - s:.1f},{pos.y + s:.1f}"
        )
        body = f'<polygon points="{points}" {common}/>'

    label = (
        f'<text x="{pos.x + s + 8:.1f}" y="{pos.y:.1f}" fill="{TEXT}" '
        f'font-family="Arial" font-size="12" dominant-baseline="middle">'
        f"{_esc(shape.label)}</text>"
    )
    return (
        f'<g class="node" data-id="{_esc(shape.node_id)}">'
        f"<title>{_esc(shape.tooltip)}</title>{body}{label}</g>"
    )


def render_graph_svg(view: GraphViewModel, background: str = BG) -> str:
    """Render a view model as a standalone SVG document."""
    w, h = view.width, view.height
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{w:g}" height="{h:g}" '
        f'viewBox="0 0 {w:g} {h:g}">',
        f'<rect width="100%" height="100%" fill="{background}"/>',
    ]

    for (title, color), fraction in zip(LAYER_HEADINGS, view.column_fractions):
        parts.append(
            f'<text x="{w * fraction:.1f}" y="20" fill="{color}" font-family="Arial" '
            f'font-size="14" font-weight="bold" text-anchor="middle">{title}</text>'
        )

    # edges under nodes
    parts.append('<g class="edges" stroke-opacity="0.6">')
    for seg in view.segments:
        parts.append(
            f'<line x1="{seg.x1:.1f}" y1="{seg.y1:.1f}" x2="{seg.x2:.1f}" y2="{seg.y2:.1f}" '
            f'stroke="{EDGE_COLORS[seg.kind]}" stroke-width="{EDGE_WIDTHS[seg.kind]:g}"/>'
        )
    parts.append("</g>")

    focus_id = view.focus.id if view.focus else None
    parts.append('<g class="nodes">')
    for shape in view.shapes:
        pos = view.positions.get(shape.node_id)
        if pos is None:
            continue
        parts.append(_shape_svg(shape, pos, shape.node_id == focus_id))
    parts.append("</g>")

    if view.focus:
        parts.append(
            f'<text x="10" y="{h - 12:g}" fill="{TEXT_DIM}" font-family="Arial" font-size="12">'
            f"{_esc(view.focus.name)}: {view.stats.content_count} contents, "
            f"{view.stats.citation_count} citation platforms</text>"
        )

    parts.append("</svg>")
    return "\n".join(parts)


def write_graph_svg(view: GraphViewModel, output_path: Path, background: str = BG) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_graph_svg(view, background), encoding="utf-8")
    logger.info("Wrote SVG graph to %s", output_path)
    return output_path
