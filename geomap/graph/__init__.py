"""Three-layer graph core: layout, edge visibility, selection stats, render adapter."""

from geomap.graph.layout import assign_positions, group_by_layer
from geomap.graph.render import edge_segments, hit_test, to_shape
from geomap.graph.visibility import compute_stats, visible_edges

__all__ = [
    "assign_positions",
    "compute_stats",
    "edge_segments",
    "group_by_layer",
    "hit_test",
    "to_shape",
    "visible_edges",
]
