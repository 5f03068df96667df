"""Query engine: roadmap, content and citation operations over GeoDB.

Functions return plain JSON-ready dicts. A missing record raises ValueError
so callers (CLI, MCP tools) can report it uniformly.
"""

import logging
from typing import Any

from pydantic import BaseModel

from geomap.db import GeoDB
from geomap.models import (
    CitationInsert,
    ContentInsert,
    Page,
    PLevel,
    RoadmapInsert,
)

logger = logging.getLogger(__name__)

PRIORITY_GEO_WEIGHT = 0.7
PRIORITY_QUICK_WIN_WEIGHT = 0.3

# (minimum total score, level), checked top down
P_LEVEL_THRESHOLDS: list[tuple[float, PLevel]] = [
    (100, PLevel.P0),
    (75, PLevel.P1),
    (50, PLevel.P2),
]


def _validated_changes(
    insert_cls: type[BaseModel],
    current: BaseModel,
    changes: dict[str, Any],
) -> dict[str, Any]:
    """Validate a partial update against the full insert model."""
    unknown = set(changes) - set(insert_cls.model_fields)
    if unknown:
        raise ValueError(f"Unknown field(s): {', '.join(sorted(unknown))}")
    merged = {name: getattr(current, name) for name in insert_cls.model_fields}
    merged.update(changes)
    validated = insert_cls(**merged).model_dump(mode="json")
    return {k: validated[k] for k in changes}


# --- Priority scoring ---


def calculate_priority_score(geo_score: float, quick_win_index: float) -> float:
    return geo_score * PRIORITY_GEO_WEIGHT + quick_win_index * PRIORITY_QUICK_WIN_WEIGHT


def auto_assign_p_level(total_score: float) -> PLevel:
    for threshold, level in P_LEVEL_THRESHOLDS:
        if total_score >= threshold:
            return level
    return PLevel.P3


# --- Roadmap ---


def create_roadmap_item(db: GeoDB, data: dict[str, Any]) -> dict[str, object]:
    roadmap_id = db.insert_roadmap(RoadmapInsert(**data))
    logger.info("Created roadmap item %d", roadmap_id)
    return get_roadmap_item(db, roadmap_id)


def get_roadmap_item(db: GeoDB, roadmap_id: int) -> dict[str, object]:
    """A roadmap item with its 10 latest contents and citations."""
    item = db.get_roadmap(roadmap_id)
    if not item:
        raise ValueError(f"Roadmap item not found: {roadmap_id}")

    contents, _ = db.list_content(roadmap_id=roadmap_id, limit=10)
    citations = db.conn.execute(
        "SELECT * FROM citations WHERE roadmap_id = ? ORDER BY detected_at DESC LIMIT 10",
        (roadmap_id,),
    ).fetchall()
    return {
        **item.model_dump(mode="json"),
        "contents": [c.model_dump(mode="json") for c in contents],
        "citations": [dict(r) for r in citations],
        "counts": db.count_roadmap_children(roadmap_id),
    }


def list_roadmap(
    db: GeoDB,
    month: str | None = None,
    p_level: str | None = None,
    search: str | None = None,
    sort_by: str = "enhanced_geo_score",
    sort_order: str = "desc",
    page: int = 1,
    limit: int = 20,
) -> dict[str, object]:
    if p_level is not None:
        p_level = PLevel(p_level).value
    if limit > 100:
        raise ValueError("limit must be <= 100")
    rows, pagination = db.list_roadmap(
        month=month, p_level=p_level, search=search,
        sort_by=sort_by, sort_order=sort_order, page=page, limit=limit,
    )
    items: list[dict[str, object]] = []
    for r in rows:
        items.append({**r.model_dump(mode="json"), "counts": db.count_roadmap_children(r.id)})
    return Page(items=items, pagination=pagination).model_dump()


def update_roadmap_item(db: GeoDB, roadmap_id: int, changes: dict[str, Any]) -> dict[str, object]:
    current = db.get_roadmap(roadmap_id)
    if not current:
        raise ValueError(f"Roadmap item not found: {roadmap_id}")
    db.update_roadmap(roadmap_id, _validated_changes(RoadmapInsert, current, changes))
    return get_roadmap_item(db, roadmap_id)


def delete_roadmap_item(db: GeoDB, roadmap_id: int) -> dict[str, object]:
    current = db.get_roadmap(roadmap_id)
    if not current:
        raise ValueError(f"Roadmap item not found: {roadmap_id}")
    db.delete_roadmap(roadmap_id)
    logger.info("Deleted roadmap item %d", roadmap_id)
    return current.model_dump(mode="json")


def roadmap_stats(db: GeoDB) -> dict[str, object]:
    by_month_rows = db.conn.execute(
        "SELECT month, COUNT(*) as cnt FROM roadmap GROUP BY month ORDER BY month DESC LIMIT 6"
    ).fetchall()
    averages = db.averages("roadmap", ["enhanced_geo_score", "quick_win_index"])
    return {
        "total": db.count_rows("roadmap"),
        "by_p_level": db.count_by("roadmap", "p_level"),
        "by_month": {r["month"]: r["cnt"] for r in by_month_rows},
        "averages": {
            "geo_score": averages["enhanced_geo_score"],
            "quick_win_index": averages["quick_win_index"],
        },
    }


# --- Content ---


def create_content(db: GeoDB, data: dict[str, Any]) -> dict[str, object]:
    item = ContentInsert(**data)
    if item.roadmap_id is not None and not db.get_roadmap(item.roadmap_id):
        raise ValueError(f"Roadmap item not found: {item.roadmap_id}")
    content_id = db.insert_content(item)
    logger.info("Created content %d", content_id)
    return get_content(db, content_id)


def get_content(db: GeoDB, content_id: int) -> dict[str, object]:
    content = db.get_content(content_id)
    if not content:
        raise ValueError(f"Content not found: {content_id}")
    roadmap = db.get_roadmap(content.roadmap_id) if content.roadmap_id else None
    citations, _ = db.list_citations(content_id=content_id, limit=100)
    return {
        **content.model_dump(mode="json"),
        "roadmap": roadmap.model_dump(mode="json") if roadmap else None,
        "citations": [c.model_dump(mode="json") for c in citations],
    }


def list_content(
    db: GeoDB,
    channel: str | None = None,
    publish_status: str | None = None,
    page: int = 1,
    limit: int = 20,
) -> dict[str, object]:
    rows, pagination = db.list_content(
        channel=channel, publish_status=publish_status, page=page, limit=limit,
    )
    items: list[dict[str, object]] = []
    for r in rows:
        roadmap = db.get_roadmap(r.roadmap_id) if r.roadmap_id else None
        items.append({
            **r.model_dump(mode="json"),
            "roadmap": {"prompt": roadmap.prompt, "p_level": roadmap.p_level.value} if roadmap else None,
            "citation_count": db.count_rows("citations", "content_id = ?", (r.id,)),
        })
    return Page(items=items, pagination=pagination).model_dump()


def update_content(db: GeoDB, content_id: int, changes: dict[str, Any]) -> dict[str, object]:
    current = db.get_content(content_id)
    if not current:
        raise ValueError(f"Content not found: {content_id}")
    db.update_content(content_id, _validated_changes(ContentInsert, current, changes))
    return get_content(db, content_id)


def delete_content(db: GeoDB, content_id: int) -> dict[str, object]:
    current = db.get_content(content_id)
    if not current:
        raise ValueError(f"Content not found: {content_id}")
    db.delete_content(content_id)
    logger.info("Deleted content %d", content_id)
    return current.model_dump(mode="json")


def content_stats(db: GeoDB) -> dict[str, object]:
    return {
        "total": db.count_rows("content"),
        "by_channel": db.count_by("content", "channel"),
        "by_status": db.count_by("content", "publish_status"),
        "averages": db.averages(
            "content",
            ["kpi_ctr", "kpi_views", "kpi_gmv", "kpi_engagement", "kpi_conversion"],
        ),
    }


# --- Citations ---


def create_citation(db: GeoDB, data: dict[str, Any]) -> dict[str, object]:
    item = CitationInsert(**data)
    if item.content_id is not None and not db.get_content(item.content_id):
        raise ValueError(f"Content not found: {item.content_id}")
    citation_id = db.insert_citation(item)
    logger.info("Created citation %d on %s", citation_id, item.platform)
    return get_citation(db, citation_id)


def get_citation(db: GeoDB, citation_id: int) -> dict[str, object]:
    citation = db.get_citation(citation_id)
    if not citation:
        raise ValueError(f"Citation not found: {citation_id}")
    content = db.get_content(citation.content_id) if citation.content_id else None
    return {
        **citation.model_dump(mode="json"),
        "content": {"title": content.title, "channel": content.channel} if content else None,
    }


def list_citations(
    db: GeoDB,
    platform: str | None = None,
    citation_strength: int | None = None,
    ai_indexed: bool | None = None,
    page: int = 1,
    limit: int = 20,
) -> dict[str, object]:
    rows, pagination = db.list_citations(
        platform=platform, citation_strength=citation_strength,
        ai_indexed=ai_indexed, page=page, limit=limit,
    )
    return Page(
        items=[r.model_dump(mode="json") for r in rows],
        pagination=pagination,
    ).model_dump()


def update_citation(db: GeoDB, citation_id: int, changes: dict[str, Any]) -> dict[str, object]:
    current = db.get_citation(citation_id)
    if not current:
        raise ValueError(f"Citation not found: {citation_id}")
    db.update_citation(citation_id, _validated_changes(CitationInsert, current, changes))
    return get_citation(db, citation_id)


def delete_citation(db: GeoDB, citation_id: int) -> dict[str, object]:
    current = db.get_citation(citation_id)
    if not current:
        raise ValueError(f"Citation not found: {citation_id}")
    db.delete_citation(citation_id)
    return current.model_dump(mode="json")


def citation_stats(db: GeoDB) -> dict[str, object]:
    total = db.count_rows("citations")
    ai_indexed = db.count_rows("citations", "ai_indexed = 1")
    return {
        "total": total,
        "active": db.count_rows("citations", "is_active = 1"),
        "ai_indexed": ai_indexed,
        "by_platform": db.count_by("citations", "platform"),
        "by_strength": db.count_by("citations", "citation_strength"),
        "index_rate": round(ai_indexed / total * 100, 2) if total else 0,
    }
