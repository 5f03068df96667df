"""Three-column layout: one fixed x per layer, evenly spaced rows within it."""

from collections.abc import Iterable, Mapping

from geomap.models import LAYER_ORDER, Layer, Node, Position

DEFAULT_COLUMNS: tuple[float, float, float] = (0.15, 0.5, 0.85)


def group_by_layer(nodes: Iterable[Node]) -> dict[Layer, list[Node]]:
    """Partition nodes by layer, keeping input order within each layer."""
    groups: dict[Layer, list[Node]] = {layer: [] for layer in LAYER_ORDER}
    for node in nodes:
        groups[node.layer].append(node)
    return groups


def assign_positions(
    nodes_by_layer: Mapping[Layer, list[Node]],
    canvas_width: float,
    canvas_height: float,
    columns: tuple[float, float, float] = DEFAULT_COLUMNS,
) -> dict[str, Position]:
    """Compute one (x, y) per node.

    x is the layer's column (fraction of canvas width). Within a layer the
    i-th node gets y = height / (count + 1) * (i + 1); order is the input
    order, no sorting.
    """
    column_x = {
        layer: canvas_width * fraction
        for layer, fraction in zip(LAYER_ORDER, columns)
    }

    positions: dict[str, Position] = {}
    for layer in LAYER_ORDER:
        layer_nodes = nodes_by_layer.get(layer, [])
        if not layer_nodes:
            continue
        spacing = canvas_height / (len(layer_nodes) + 1)
        for i, node in enumerate(layer_nodes):
            positions[node.id] = Position(x=column_x[layer], y=spacing * (i + 1))
    return positions
