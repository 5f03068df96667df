#!/usr/bin/env python3
"""GEO mapping MCP server: query the prompt/content/citation network."""

import json
import logging
import sys
from typing import Optional

from mcp.server.fastmcp import FastMCP

from geomap.config import Config, load_config
from geomap.db import GeoDB
from geomap.graph.view import GraphViewState, build_view, set_filters
from geomap.output import analytics
from geomap.output import query_engine as qe
from geomap.sources import DatabaseSource, FixtureSource, load_graph
from geomap.sources.base import GraphDataSource

mcp = FastMCP("geomap")
logger = logging.getLogger(__name__)

# Redirect all logging to stderr so stdout stays clean for MCP stdio transport
logging.basicConfig(
    stream=sys.stderr,
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

_db: GeoDB | None = None
_config: Config | None = None


def _get_config() -> Config:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def _get_db() -> GeoDB:
    global _db
    if _db is None:
        _db = GeoDB(_get_config())
        _db.init_db()
    return _db


def _source(name: str) -> GraphDataSource:
    if name == "fixture":
        return FixtureSource()
    if name == "db":
        return DatabaseSource(_get_db())
    raise ValueError(f"Unknown source {name!r}, expected 'fixture' or 'db'")


@mcp.tool()
def get_graph_view(
    source: str = "fixture",
    focus: Optional[str] = None,
    show_all: bool = False,
    p_level: Optional[str] = None,
    category: Optional[str] = None,
    covered: Optional[str] = None,
) -> str:
    """Positioned nodes, visible edges and selection stats of the three-layer graph.

    source is 'fixture' (demo data) or 'db'. focus is a node id; covered is
    'covered' or 'uncovered'.
    """
    try:
        config = _get_config()
        graph = load_graph(_source(source))
        if focus is not None and graph.get_node(focus) is None:
            raise ValueError(f"Node not found: {focus}")
        state = GraphViewState(focus=focus, show_all=show_all)
        state = set_filters(state, p_level=p_level, category=category, covered=covered)
        view = build_view(graph, state, config.layout, config.render)
        return json.dumps(view.model_dump(mode="json"))
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def list_roadmap(
    month: Optional[str] = None,
    p_level: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: str = "enhanced_geo_score",
    sort_order: str = "desc",
    page: int = 1,
    limit: int = 20,
) -> str:
    """List roadmap prompts, filtered by month (YYYY-MM), P-level or a search term."""
    try:
        result = qe.list_roadmap(
            _get_db(), month=month, p_level=p_level, search=search,
            sort_by=sort_by, sort_order=sort_order, page=page, limit=limit,
        )
        return json.dumps(result, default=str)
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def get_roadmap_item(roadmap_id: int) -> str:
    """One roadmap prompt with its latest contents and citations."""
    try:
        return json.dumps(qe.get_roadmap_item(_get_db(), roadmap_id), default=str)
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def roadmap_stats() -> str:
    """Roadmap totals by P-level and month, with average scores."""
    return json.dumps(qe.roadmap_stats(_get_db()), default=str)


@mcp.tool()
def list_content(
    channel: Optional[str] = None,
    publish_status: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> str:
    """List content pieces, optionally by channel or publish status."""
    try:
        result = qe.list_content(
            _get_db(), channel=channel, publish_status=publish_status, page=page, limit=limit,
        )
        return json.dumps(result, default=str)
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def list_citations(
    platform: Optional[str] = None,
    citation_strength: Optional[int] = None,
    ai_indexed: Optional[bool] = None,
    page: int = 1,
    limit: int = 20,
) -> str:
    """List detected citations, optionally by platform, strength (1-3) or AI indexing."""
    try:
        result = qe.list_citations(
            _get_db(), platform=platform, citation_strength=citation_strength,
            ai_indexed=ai_indexed, page=page, limit=limit,
        )
        return json.dumps(result, default=str)
    except ValueError as e:
        return json.dumps({"error": str(e)})


@mcp.tool()
def get_dashboard() -> str:
    """Overview metrics across roadmap, content and citations."""
    return json.dumps(analytics.get_dashboard(_get_db()), default=str)


@mcp.tool()
def get_content_coverage() -> str:
    """Share of roadmap prompts that have content, plus the top uncovered prompts."""
    return json.dumps(analytics.get_content_coverage(_get_db()), default=str)


@mcp.tool()
def get_performance_report() -> str:
    """Top content by views and by citation count."""
    return json.dumps(analytics.get_performance_report(_get_db()), default=str)


if __name__ == "__main__":
    mcp.run()
