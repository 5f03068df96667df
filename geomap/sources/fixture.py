"""Demo dataset: a mattress brand's prompts, content and AI citation platforms."""

import logging

from geomap.models import Edge, EdgeKind, Layer, Node, PLevel, PublishStatus
from geomap.sources.base import GraphDataSource

logger = logging.getLogger(__name__)

DEMO_PROMPTS: list[dict] = [
    {"id": "p1", "name": "best cooling mattress", "p_level": "P0", "score": 155, "category": "Comparison"},
    {"id": "p2", "name": "memory foam vs spring mattress", "p_level": "P0", "score": 143, "category": "Comparison"},
    {"id": "p3", "name": "mattress for back pain", "p_level": "P1", "score": 112, "category": "Health"},
    {"id": "p4", "name": "organic mattress guide", "p_level": "P1", "score": 98, "category": "Tutorial"},
    {"id": "p5", "name": "mattress size comparison", "p_level": "P2", "score": 76, "category": "Specifications"},
    {"id": "p6", "name": "mattress warranty guide", "p_level": "P3", "score": 54, "category": "Tutorial"},
]

DEMO_CONTENTS: list[dict] = [
    {"id": "c1", "name": "Blog #1: Technical White Paper", "content_type": "Deep Blog", "status": "published"},
    {"id": "c2", "name": "Blog #2: User Experience Guide", "content_type": "Practical Blog", "status": "published"},
    {"id": "c3", "name": "FAQ #1: Common Questions Collection", "content_type": "FAQ", "status": "published"},
    {"id": "c4", "name": "Product #1: SweetNight Mattress", "content_type": "Product", "status": "published"},
    {"id": "c5", "name": "Video #1: Unboxing Experience", "content_type": "Video", "status": "planned"},
    {"id": "c6", "name": "Guide #1: Buying Guide", "content_type": "Guide", "status": "planned"},
    {"id": "c7", "name": "Review #1: Expert Review", "content_type": "Review", "status": "draft"},
]

DEMO_CITATIONS: list[dict] = [
    {"id": "ct1", "name": "YouTube", "platform": "YouTube", "color": "#ff0000"},
    {"id": "ct2", "name": "Reddit", "platform": "Reddit", "color": "#ff4500"},
    {"id": "ct3", "name": "Medium", "platform": "Medium", "color": "#00ab6c"},
    {"id": "ct4", "name": "Quora", "platform": "Quora", "color": "#b92b27"},
    {"id": "ct5", "name": "ChatGPT", "platform": "ChatGPT", "color": "#10a37f"},
    {"id": "ct6", "name": "Claude", "platform": "Claude", "color": "#8b5cf6"},
]

DEMO_PROMPT_CONTENT: list[tuple[str, str]] = [
    ("p1", "c1"), ("p1", "c4"),
    ("p2", "c1"), ("p2", "c3"),
    ("p3", "c2"), ("p3", "c4"),
    ("p4", "c2"), ("p4", "c6"),
    ("p5", "c3"),
    ("p6", "c7"),
]

DEMO_CONTENT_CITATION: list[tuple[str, str]] = [
    ("c1", "ct1"), ("c1", "ct5"), ("c1", "ct6"),
    ("c2", "ct2"), ("c2", "ct3"),
    ("c3", "ct4"), ("c3", "ct5"),
    ("c4", "ct1"), ("c4", "ct2"), ("c4", "ct5"),
]


class FixtureSource(GraphDataSource):
    """In-memory source backed by the demo dataset (or any given lists)."""

    def __init__(
        self,
        prompts: list[dict] | None = None,
        contents: list[dict] | None = None,
        citations: list[dict] | None = None,
        prompt_content: list[tuple[str, str]] | None = None,
        content_citation: list[tuple[str, str]] | None = None,
    ) -> None:
        self.prompts = DEMO_PROMPTS if prompts is None else prompts
        self.contents = DEMO_CONTENTS if contents is None else contents
        self.citations = DEMO_CITATIONS if citations is None else citations
        self.prompt_content = DEMO_PROMPT_CONTENT if prompt_content is None else prompt_content
        self.content_citation = (
            DEMO_CONTENT_CITATION if content_citation is None else content_citation
        )

    def fetch_prompts(self) -> list[Node]:
        linked = {source for source, _ in self.prompt_content}
        return [
            Node(
                id=p["id"],
                name=p["name"],
                layer=Layer.PROMPT,
                p_level=PLevel(p["p_level"]),
                score=p.get("score", 0),
                covered=p.get("covered", p["id"] in linked),
                category=p.get("category"),
            )
            for p in self.prompts
        ]

    def fetch_contents(self) -> list[Node]:
        return [
            Node(
                id=c["id"],
                name=c["name"],
                layer=Layer.CONTENT,
                content_type=c.get("content_type"),
                status=PublishStatus(c["status"]) if c.get("status") else None,
            )
            for c in self.contents
        ]

    def fetch_citations(self) -> list[Node]:
        return [
            Node(
                id=ct["id"],
                name=ct["name"],
                layer=Layer.CITATION,
                platform=ct.get("platform"),
                color=ct.get("color"),
            )
            for ct in self.citations
        ]

    def fetch_edges(self) -> list[Edge]:
        edges = [
            Edge(source=s, target=t, kind=EdgeKind.PROMPT_CONTENT)
            for s, t in self.prompt_content
        ]
        edges.extend(
            Edge(source=s, target=t, kind=EdgeKind.CONTENT_CITATION)
            for s, t in self.content_citation
        )
        return edges
