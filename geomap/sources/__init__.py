"""Graph data sources: where the prompt, content and citation node sets come from."""

from geomap.sources.base import GraphDataSource, load_graph
from geomap.sources.database import DatabaseSource
from geomap.sources.fixture import FixtureSource

__all__ = ["DatabaseSource", "FixtureSource", "GraphDataSource", "load_graph"]
