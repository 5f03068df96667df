"""Edge visibility and selection statistics for a focused node.

Both use the same fixed two-hop rule: edges leaving the focus node, plus
edges leaving anything the focus node points at. With prompts as the focus
this shows prompt -> content -> citation chains. A content or citation focus
gets only its own outgoing edges under rule 1; that asymmetry is kept as is.
"""

from collections.abc import Sequence

from geomap.models import Edge, SelectionStats


def _first_hop_targets(edges: Sequence[Edge], focus: str) -> set[str]:
    return {e.target for e in edges if e.source == focus}


def visible_edges(
    edges: Sequence[Edge],
    focus: str | None,
    show_all: bool,
) -> list[Edge]:
    """Return the edges to draw, in input order."""
    if show_all:
        return list(edges)
    if focus is None:
        return []

    reached = _first_hop_targets(edges, focus)
    return [e for e in edges if e.source == focus or e.source in reached]


def compute_stats(edges: Sequence[Edge], focus: str | None) -> SelectionStats:
    """Count first-hop edges and distinct second-hop targets of the focus.

    content_count counts edges, not distinct targets, so duplicate edges in
    the input are counted twice.
    """
    if focus is None:
        return SelectionStats()

    first_hop = [e for e in edges if e.source == focus]
    reached = {e.target for e in first_hop}
    citations = {e.target for e in edges if e.source in reached}
    return SelectionStats(content_count=len(first_hop), citation_count=len(citations))
