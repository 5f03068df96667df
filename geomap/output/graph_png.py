"""PNG rendering of the three-layer network view."""

import logging
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from geomap.graph.render import EDGE_COLORS, EDGE_WIDTHS
from geomap.graph.view import GraphViewModel
from geomap.models import ShapeKind

logger = logging.getLogger(__name__)

# --- Fonts ---

_FONT_BOLD = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"
_FONT_REGULAR = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"


def _font(size: int, bold: bool = False) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    path = _FONT_BOLD if bold else _FONT_REGULAR
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        # DejaVu missing (e.g. macOS); Pillow's bundled font still renders
        return ImageFont.load_default()


# --- Colors ---

BG = (15, 23, 42)
TEXT = (226, 232, 240)
TEXT_DIM = (148, 163, 184)
FOCUS = (250, 204, 21)

LAYER_HEADINGS = [
    ("PROMPTS", (239, 68, 68)),
    ("CONTENTS", (249, 115, 22)),
    ("CITATIONS", (16, 185, 129)),
]


def render_graph_png(
    view: GraphViewModel,
    output_path: Path,
    scale: int = 1,
    background: str | tuple[int, int, int] = BG,
) -> Path:
    """Draw the view to a PNG file and return its path."""
    W, H = int(view.width * scale), int(view.height * scale)
    img = Image.new("RGB", (W, H), background)
    draw = ImageDraw.Draw(img)

    heading_font = _font(13 * scale, bold=True)
    for (title, color), fraction in zip(LAYER_HEADINGS, view.column_fractions):
        x = W * fraction
        bbox = draw.textbbox((0, 0), title, font=heading_font)
        draw.text((x - (bbox[2] - bbox[0]) / 2, 8 * scale), title, font=heading_font, fill=color)

    for seg in view.segments:
        draw.line(
            [(seg.x1 * scale, seg.y1 * scale), (seg.x2 * scale, seg.y2 * scale)],
            fill=EDGE_COLORS[seg.kind],
            width=max(1, int(EDGE_WIDTHS[seg.kind] * scale)),
        )

    label_font = _font(11 * scale)
    focus_id = view.focus.id if view.focus else None
    for shape in view.shapes:
        pos = view.positions.get(shape.node_id)
        if pos is None:
            continue
        x, y, s = pos.x * scale, pos.y * scale, shape.size_px * scale
        outline = FOCUS if shape.node_id == focus_id else TEXT
        width = 3 if shape.node_id == focus_id else 1

        if shape.shape_kind == ShapeKind.CIRCLE:
            draw.ellipse((x - s, y - s, x + s, y + s), fill=shape.fill_color, outline=outline, width=width)
        elif shape.shape_kind == ShapeKind.RECT:
            w, h = s * 2, s * 1.5
            draw.rectangle(
                (x - w / 2, y - h / 2, x + w / 2, y + h / 2),
                fill=shape.fill_color, outline=outline, width=width,
            )
        else:
            draw.polygon(
                [(x, y - s), (x + s, y + s), (x - s, y + s)],
                fill=shape.fill_color, outline=outline,
            )

        draw.text((x + s + 8 * scale, y - 6 * scale), shape.label, font=label_font, fill=TEXT)

    if view.focus:
        summary = (
            f"{view.focus.name}: {view.stats.content_count} contents, "
            f"{view.stats.citation_count} citation platforms"
        )
        draw.text((10 * scale, H - 22 * scale), summary, font=_font(12 * scale), fill=TEXT_DIM)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(str(output_path), "PNG")
    logger.info("Wrote PNG graph to %s (%dx%d)", output_path, W, H)
    return output_path
