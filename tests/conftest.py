"""Shared test fixtures for geomap tests."""

import pytest

from geomap.config import Config
from geomap.db import GeoDB
from geomap.models import Edge, EdgeKind, Graph, Layer, Node, PLevel
from geomap.seed import seed_demo
from geomap.sources import FixtureSource, load_graph


@pytest.fixture()
def tmp_db(tmp_path):
    """Create a GeoDB backed by a temp file."""
    config = Config(db_path=str(tmp_path / "test.db"), output_dir=str(tmp_path / "out"))
    db = GeoDB(config)
    db.init_db()
    yield db
    db.close()


@pytest.fixture()
def populated_db(tmp_db):
    """DB seeded with the demo dataset: 6 prompts, 7 contents, 10 citations."""
    seed_demo(tmp_db)
    return tmp_db


@pytest.fixture()
def demo_graph() -> Graph:
    return load_graph(FixtureSource())


@pytest.fixture()
def small_graph() -> Graph:
    """One prompt P1 -> contents C1, C2; C1 -> citations T1, T2; C2 -> T2."""
    nodes = (
        Node(id="P1", name="best cooling mattress", layer=Layer.PROMPT, p_level=PLevel.P0, score=150),
        Node(id="C1", name="Cooling guide", layer=Layer.CONTENT, content_type="Deep Blog"),
        Node(id="C2", name="FAQ", layer=Layer.CONTENT, content_type="FAQ"),
        Node(id="C3", name="Unlinked review", layer=Layer.CONTENT, content_type="Review"),
        Node(id="T1", name="YouTube", layer=Layer.CITATION, platform="YouTube"),
        Node(id="T2", name="ChatGPT", layer=Layer.CITATION, platform="ChatGPT"),
    )
    edges = (
        Edge(source="P1", target="C1", kind=EdgeKind.PROMPT_CONTENT),
        Edge(source="P1", target="C2", kind=EdgeKind.PROMPT_CONTENT),
        Edge(source="C1", target="T1", kind=EdgeKind.CONTENT_CITATION),
        Edge(source="C1", target="T2", kind=EdgeKind.CONTENT_CITATION),
        Edge(source="C2", target="T2", kind=EdgeKind.CONTENT_CITATION),
        Edge(source="C3", target="T1", kind=EdgeKind.CONTENT_CITATION),
    )
    return Graph(nodes=nodes, edges=edges)
