"""Dashboard analytics: cross-collection metrics, trends, coverage, top content."""

import logging
from datetime import datetime, timezone

from geomap.db import GeoDB
from geomap.output.query_engine import citation_stats

logger = logging.getLogger(__name__)

UNCOVERED_LIMIT = 20
TOP_CONTENT_LIMIT = 10


def _roadmap_metrics(db: GeoDB) -> dict[str, object]:
    rows = db.conn.execute(
        """SELECT p_level, COUNT(*) as cnt,
                  AVG(enhanced_geo_score) as avg_geo, AVG(quick_win_index) as avg_qwi
           FROM roadmap GROUP BY p_level ORDER BY p_level"""
    ).fetchall()
    return {
        "total": db.count_rows("roadmap"),
        "by_p_level": [
            {
                "p_level": r["p_level"],
                "count": r["cnt"],
                "avg_geo_score": r["avg_geo"] or 0.0,
                "avg_quick_win_index": r["avg_qwi"] or 0.0,
            }
            for r in rows
        ],
    }


def _content_metrics(db: GeoDB) -> dict[str, object]:
    rows = db.conn.execute(
        """SELECT channel, COUNT(*) as cnt, AVG(kpi_ctr) as avg_ctr, AVG(kpi_views) as avg_views
           FROM content GROUP BY channel ORDER BY channel"""
    ).fetchall()
    by_status = db.count_by("content", "publish_status")
    return {
        "total": db.count_rows("content"),
        "published": by_status.get("published", 0),
        "by_channel": [
            {
                "channel": r["channel"],
                "count": r["cnt"],
                "avg_ctr": r["avg_ctr"] or 0.0,
                "avg_views": r["avg_views"] or 0.0,
            }
            for r in rows
        ],
        "by_status": by_status,
    }


def get_dashboard(db: GeoDB) -> dict[str, object]:
    """Overview metrics for the three collections."""
    return {
        "roadmap": _roadmap_metrics(db),
        "content": _content_metrics(db),
        "citations": citation_stats(db),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def _check_range(start_date: str, end_date: str) -> None:
    try:
        start = datetime.fromisoformat(start_date)
        end = datetime.fromisoformat(end_date)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Dates must be ISO formatted (YYYY-MM-DD): {e}") from e
    if start > end:
        raise ValueError(f"start_date {start_date} is after end_date {end_date}")


def get_kpi_trends(db: GeoDB, start_date: str, end_date: str) -> list[dict[str, object]]:
    """Content KPIs by publish date within [start_date, end_date]."""
    _check_range(start_date, end_date)
    rows = db.conn.execute(
        """SELECT publish_date, kpi_ctr, kpi_views, kpi_gmv, kpi_engagement
           FROM content
           WHERE publish_date IS NOT NULL AND DATE(publish_date) BETWEEN DATE(?) AND DATE(?)
           ORDER BY publish_date""",
        (start_date, end_date),
    ).fetchall()
    return [dict(r) for r in rows]


def get_citation_trends(db: GeoDB, start_date: str, end_date: str) -> list[dict[str, object]]:
    """Citations detected within [start_date, end_date], oldest first."""
    _check_range(start_date, end_date)
    rows = db.conn.execute(
        """SELECT detected_at, platform, citation_strength, ai_indexed
           FROM citations
           WHERE DATE(detected_at) BETWEEN DATE(?) AND DATE(?)
           ORDER BY detected_at""",
        (start_date, end_date),
    ).fetchall()
    return [{**dict(r), "ai_indexed": bool(r["ai_indexed"])} for r in rows]


def get_content_coverage(db: GeoDB) -> dict[str, object]:
    """Which roadmap prompts have at least one piece of content."""
    rows = db.conn.execute(
        """SELECT r.id, r.prompt, r.p_level, r.enhanced_geo_score,
                  COUNT(c.id) as content_count
           FROM roadmap r LEFT JOIN content c ON c.roadmap_id = r.id
           GROUP BY r.id
           ORDER BY r.p_level, r.enhanced_geo_score DESC"""
    ).fetchall()
    covered = [r for r in rows if r["content_count"] > 0]
    uncovered = [r for r in rows if r["content_count"] == 0]
    total = len(rows)
    return {
        "total": total,
        "covered": len(covered),
        "uncovered": len(uncovered),
        "coverage_rate": round(len(covered) / total * 100, 2) if total else 0,
        "uncovered_items": [
            {
                "id": r["id"],
                "prompt": r["prompt"],
                "p_level": r["p_level"],
                "geo_score": r["enhanced_geo_score"],
            }
            for r in uncovered[:UNCOVERED_LIMIT]
        ],
    }


def get_performance_report(db: GeoDB) -> dict[str, object]:
    """Top content by views and by citation count."""
    base = """SELECT c.id, c.title, c.channel, c.kpi_views, c.kpi_ctr,
                     r.prompt, r.p_level,
                     (SELECT COUNT(*) FROM citations ct WHERE ct.content_id = c.id) as citation_count
              FROM content c LEFT JOIN roadmap r ON c.roadmap_id = r.id"""
    top_views = db.conn.execute(
        f"{base} ORDER BY c.kpi_views DESC, c.id LIMIT ?", (TOP_CONTENT_LIMIT,)
    ).fetchall()
    top_cited = db.conn.execute(
        f"{base} ORDER BY citation_count DESC, c.id LIMIT ?", (TOP_CONTENT_LIMIT,)
    ).fetchall()
    return {
        "top_performing": [dict(r) for r in top_views],
        "top_cited": [dict(r) for r in top_cited],
    }
