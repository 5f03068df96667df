"""Graph source backed by the SQLite store.

Prompts come from roadmap items, contents from content rows, and one
citation node per distinct platform. Edges follow the foreign keys:
content.roadmap_id gives prompt->content, citations.content_id gives
content->platform (deduplicated).
"""

import logging

from geomap.db import GeoDB
from geomap.models import Edge, EdgeKind, Layer, Node
from geomap.sources.base import GraphDataSource

logger = logging.getLogger(__name__)


def prompt_node_id(roadmap_id: int) -> str:
    return f"prompt:{roadmap_id}"


def content_node_id(content_id: int) -> str:
    return f"content:{content_id}"


def platform_node_id(platform: str) -> str:
    return f"platform:{platform}"


class DatabaseSource(GraphDataSource):
    def __init__(self, db: GeoDB, active_only: bool = True) -> None:
        self.db = db
        self.active_only = active_only

    def _citations(self):
        rows = self.db.all_citations()
        if self.active_only:
            rows = [r for r in rows if r.is_active]
        return rows

    def fetch_prompts(self) -> list[Node]:
        covered = {c.roadmap_id for c in self.db.all_content() if c.roadmap_id is not None}
        rows = sorted(
            self.db.all_roadmap(),
            key=lambda r: (r.p_level.value, -r.enhanced_geo_score, r.id),
        )
        return [
            Node(
                id=prompt_node_id(r.id),
                name=r.prompt,
                layer=Layer.PROMPT,
                p_level=r.p_level,
                score=r.enhanced_geo_score,
                covered=r.id in covered,
                category=r.category,
            )
            for r in rows
        ]

    def fetch_contents(self) -> list[Node]:
        return [
            Node(
                id=content_node_id(c.id),
                name=c.title,
                layer=Layer.CONTENT,
                content_type=c.content_type or c.channel,
                status=c.publish_status,
            )
            for c in self.db.all_content()
        ]

    def fetch_citations(self) -> list[Node]:
        platforms: list[str] = []
        for c in self._citations():
            if c.platform not in platforms:
                platforms.append(c.platform)
        return [
            Node(
                id=platform_node_id(p),
                name=p,
                layer=Layer.CITATION,
                platform=p,
            )
            for p in platforms
        ]

    def fetch_edges(self) -> list[Edge]:
        edges: list[Edge] = []
        for c in self.db.all_content():
            if c.roadmap_id is not None:
                edges.append(Edge(
                    source=prompt_node_id(c.roadmap_id),
                    target=content_node_id(c.id),
                    kind=EdgeKind.PROMPT_CONTENT,
                ))

        seen: set[tuple[int, str]] = set()
        for cit in self._citations():
            if cit.content_id is None:
                continue
            key = (cit.content_id, cit.platform)
            if key in seen:
                continue
            seen.add(key)
            edges.append(Edge(
                source=content_node_id(cit.content_id),
                target=platform_node_id(cit.platform),
                kind=EdgeKind.CONTENT_CITATION,
            ))
        logger.debug("Derived %d edges from foreign keys", len(edges))
        return edges
