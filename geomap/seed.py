"""Load the demo dataset into the database."""

import logging
from datetime import date, timedelta

from geomap.db import GeoDB
from geomap.models import (
    CitationInsert,
    CitationStrength,
    ContentInsert,
    RoadmapInsert,
)
from geomap.sources.fixture import (
    DEMO_CITATIONS,
    DEMO_CONTENT_CITATION,
    DEMO_CONTENTS,
    DEMO_PROMPT_CONTENT,
    DEMO_PROMPTS,
)

logger = logging.getLogger(__name__)

CHANNEL_BY_TYPE: dict[str, str] = {
    "Deep Blog": "Blog",
    "Practical Blog": "Medium",
    "FAQ": "Quora",
    "Product": "Amazon",
    "Video": "YouTube",
    "Guide": "Blog",
    "Review": "Reddit",
}

AI_PLATFORMS = {"ChatGPT", "Claude", "Perplexity", "Gemini", "Copilot"}

_BASE_DATE = date(2025, 1, 6)


class SeedResult:
    """Summary of a seed run."""

    def __init__(self) -> None:
        self.roadmap_items = 0
        self.contents = 0
        self.citations = 0
        self.skipped = False

    def __repr__(self) -> str:
        if self.skipped:
            return "SeedResult(skipped: database already has roadmap items)"
        return (
            f"SeedResult(roadmap={self.roadmap_items}, contents={self.contents}, "
            f"citations={self.citations})"
        )


def seed_demo(db: GeoDB, force: bool = False) -> SeedResult:
    """Insert the demo prompts, contents and citations.

    Each content row is attached to the first prompt that links to it, since
    a content row has a single roadmap_id. Does nothing if the roadmap table
    already has rows, unless force=True, which first clears all three
    tables so the demo data replaces what is there.
    """
    result = SeedResult()
    if force:
        db.clear_all()
    elif db.count_rows("roadmap") > 0:
        logger.info("Roadmap already populated, skipping seed")
        result.skipped = True
        return result

    roadmap_ids: dict[str, int] = {}
    for i, p in enumerate(DEMO_PROMPTS):
        roadmap_ids[p["id"]] = db.insert_roadmap(RoadmapInsert(
            month="2025-01" if i < 3 else "2025-02",
            prompt=p["name"],
            p_level=p["p_level"],
            enhanced_geo_score=p["score"],
            quick_win_index=round(min(p["score"] / 2, 100), 1),
            category=p.get("category"),
        ))
        result.roadmap_items += 1

    owner: dict[str, str] = {}
    for prompt_id, content_id in DEMO_PROMPT_CONTENT:
        owner.setdefault(content_id, prompt_id)

    content_ids: dict[str, int] = {}
    for i, c in enumerate(DEMO_CONTENTS):
        published = c["status"] == "published"
        content_ids[c["id"]] = db.insert_content(ContentInsert(
            roadmap_id=roadmap_ids.get(owner.get(c["id"], "")),
            title=c["name"],
            channel=CHANNEL_BY_TYPE.get(c["content_type"], "Blog"),
            content_type=c["content_type"],
            publish_status=c["status"],
            publish_date=(_BASE_DATE + timedelta(days=7 * i)).isoformat() if published else None,
            kpi_views=(len(DEMO_CONTENTS) - i) * 1200 if published else 0,
            kpi_ctr=round(0.02 + 0.005 * i, 3) if published else 0.0,
        ))
        result.contents += 1

    platform_by_id = {ct["id"]: ct["platform"] for ct in DEMO_CITATIONS}
    for i, (content_id, citation_id) in enumerate(DEMO_CONTENT_CITATION):
        platform = platform_by_id[citation_id]
        db.insert_citation(CitationInsert(
            roadmap_id=roadmap_ids.get(owner.get(content_id, "")),
            content_id=content_ids[content_id],
            platform=platform,
            citation_strength=CitationStrength((i % 3) + 1),
            ai_indexed=platform in AI_PLATFORMS,
            detected_at=(_BASE_DATE + timedelta(days=3 * i)).isoformat(),
        ))
        result.citations += 1

    logger.info("Seeded demo data: %s", result)
    return result
