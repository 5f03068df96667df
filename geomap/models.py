"""Pydantic models for the GEO mapping tool."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Layer(str, Enum):
    PROMPT = "prompt"
    CONTENT = "content"
    CITATION = "citation"


LAYER_ORDER: tuple[Layer, ...] = (Layer.PROMPT, Layer.CONTENT, Layer.CITATION)


class PLevel(str, Enum):
    P0 = "P0"
    P1 = "P1"
    P2 = "P2"
    P3 = "P3"


class PublishStatus(str, Enum):
    PUBLISHED = "published"
    DRAFT = "draft"
    PLANNED = "planned"
    SCHEDULED = "scheduled"
    ARCHIVED = "archived"


class CitationStrength(int, Enum):
    MENTIONED = 1
    REFERENCED = 2
    DIRECT = 3


class EdgeKind(str, Enum):
    PROMPT_CONTENT = "prompt_content"
    CONTENT_CITATION = "content_citation"


# (source layer, target layer) each edge kind is allowed to connect
EDGE_KIND_LAYERS: dict[EdgeKind, tuple[Layer, Layer]] = {
    EdgeKind.PROMPT_CONTENT: (Layer.PROMPT, Layer.CONTENT),
    EdgeKind.CONTENT_CITATION: (Layer.CONTENT, Layer.CITATION),
}


class ShapeKind(str, Enum):
    CIRCLE = "circle"
    RECT = "rect"
    TRIANGLE = "triangle"


# --- Graph models ---


class Node(BaseModel):
    """A node in the three-layer network. Only the fields of its layer are set."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    layer: Layer
    # prompt
    p_level: PLevel | None = None
    score: float = 0.0
    covered: bool | None = None
    category: str | None = None
    # content
    content_type: str | None = None
    status: PublishStatus | None = None
    # citation
    platform: str | None = None
    color: str | None = None


class Edge(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    kind: EdgeKind


class Graph(BaseModel):
    """Immutable node and edge snapshot for one session."""
    model_config = ConfigDict(frozen=True)

    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()

    @model_validator(mode="after")
    def _check_edges(self) -> "Graph":
        layers: dict[str, Layer] = {}
        for node in self.nodes:
            if node.id in layers:
                raise ValueError(f"Duplicate node id: {node.id}")
            layers[node.id] = node.layer

        for edge in self.edges:
            want_source, want_target = EDGE_KIND_LAYERS[edge.kind]
            got_source = layers.get(edge.source)
            got_target = layers.get(edge.target)
            # dangling ids are tolerated, the renderer skips them
            if got_source is not None and got_source != want_source:
                raise ValueError(
                    f"{edge.kind.value} edge {edge.source}->{edge.target} "
                    f"must start at a {want_source.value} node, got {got_source.value}"
                )
            if got_target is not None and got_target != want_target:
                raise ValueError(
                    f"{edge.kind.value} edge {edge.source}->{edge.target} "
                    f"must end at a {want_target.value} node, got {got_target.value}"
                )
        return self

    def get_node(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def nodes_in_layer(self, layer: Layer) -> list[Node]:
        return [n for n in self.nodes if n.layer == layer]


# --- Derived view models ---


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class SelectionStats(BaseModel):
    content_count: int = 0
    citation_count: int = 0


class NodeShape(BaseModel):
    """Drawing description of one node."""
    node_id: str
    shape_kind: ShapeKind
    fill_color: str
    size_px: float
    label: str
    tooltip: str


class LineSegment(BaseModel):
    source: str
    target: str
    kind: EdgeKind
    x1: float
    y1: float
    x2: float
    y2: float


# --- Row models (what comes out of the DB) ---


class RoadmapRow(BaseModel):
    id: int
    month: str
    prompt: str
    p_level: PLevel
    enhanced_geo_score: float = 0.0
    quick_win_index: float = 0.0
    search_volume: int | None = None
    competition: float | None = None
    trending_status: str | None = None
    estimated_traffic: int | None = None
    difficulty: float | None = None
    geo_intent_type: str | None = None
    category: str | None = None
    content_hours_est: float | None = None
    created_at: str
    updated_at: str


class ContentRow(BaseModel):
    id: int
    roadmap_id: int | None = None
    title: str
    channel: str
    content_type: str | None = None
    publish_status: PublishStatus = PublishStatus.DRAFT
    publish_date: str | None = None
    kpi_ctr: float = 0.0
    kpi_views: int = 0
    kpi_gmv: float = 0.0
    kpi_engagement: float = 0.0
    kpi_conversion: float = 0.0
    created_at: str
    updated_at: str


class CitationRow(BaseModel):
    id: int
    roadmap_id: int | None = None
    content_id: int | None = None
    platform: str
    citation_url: str | None = None
    citation_strength: CitationStrength = CitationStrength.MENTIONED
    ai_indexed: bool = False
    is_active: bool = True
    query: str | None = None
    detected_at: str
    created_at: str


# --- Insert models (what goes into the DB) ---


class RoadmapInsert(BaseModel):
    month: str = Field(pattern=r"^\d{4}-\d{2}$")
    prompt: str
    p_level: PLevel
    enhanced_geo_score: float = Field(default=0.0, ge=0)
    quick_win_index: float = Field(default=0.0, ge=0, le=100)
    search_volume: int | None = Field(default=None, ge=0)
    competition: float | None = Field(default=None, ge=0, le=1)
    trending_status: str | None = None
    estimated_traffic: int | None = Field(default=None, ge=0)
    difficulty: float | None = Field(default=None, ge=0, le=1)
    geo_intent_type: str | None = None
    category: str | None = None
    content_hours_est: float | None = None


class ContentInsert(BaseModel):
    roadmap_id: int | None = None
    title: str
    channel: str
    content_type: str | None = None
    publish_status: PublishStatus = PublishStatus.DRAFT
    publish_date: str | None = None
    kpi_ctr: float = 0.0
    kpi_views: int = 0
    kpi_gmv: float = 0.0
    kpi_engagement: float = 0.0
    kpi_conversion: float = 0.0


class CitationInsert(BaseModel):
    roadmap_id: int | None = None
    content_id: int | None = None
    platform: str
    citation_url: str | None = None
    citation_strength: CitationStrength = CitationStrength.MENTIONED
    ai_indexed: bool = False
    is_active: bool = True
    query: str | None = None
    detected_at: str


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class Page(BaseModel):
    """One page of a listed collection."""
    items: list[dict[str, object]]
    pagination: Pagination
