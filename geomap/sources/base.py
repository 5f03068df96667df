"""Base graph data source interface."""

import abc
import logging

from geomap.models import Edge, Graph, Node

logger = logging.getLogger(__name__)


class GraphDataSource(abc.ABC):
    """Supplies the node and edge sets of one graph snapshot."""

    @abc.abstractmethod
    def fetch_prompts(self) -> list[Node]:
        """Prompt-layer nodes, in display order."""
        ...

    @abc.abstractmethod
    def fetch_contents(self) -> list[Node]:
        """Content-layer nodes, in display order."""
        ...

    @abc.abstractmethod
    def fetch_citations(self) -> list[Node]:
        """Citation-layer nodes, in display order."""
        ...

    @abc.abstractmethod
    def fetch_edges(self) -> list[Edge]:
        """Prompt->content and content->citation edges."""
        ...

    @property
    def name(self) -> str:
        return type(self).__name__


def load_graph(source: GraphDataSource) -> Graph:
    """Fetch a complete snapshot from a source and build a validated Graph.

    Raises:
        ValueError: if node ids collide or an edge connects the wrong layers.
    """
    prompts = source.fetch_prompts()
    contents = source.fetch_contents()
    citations = source.fetch_citations()
    edges = source.fetch_edges()

    logger.info(
        "Loaded graph from %s: %d prompts, %d contents, %d citations, %d edges",
        source.name, len(prompts), len(contents), len(citations), len(edges),
    )
    return Graph(nodes=(*prompts, *contents, *citations), edges=tuple(edges))
