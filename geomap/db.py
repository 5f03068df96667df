"""SQLite database setup and operations for the GEO mapping tool."""

import logging
import math
import sqlite3

from geomap.config import Config
from geomap.models import (
    CitationInsert,
    CitationRow,
    ContentInsert,
    ContentRow,
    Pagination,
    RoadmapInsert,
    RoadmapRow,
)

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS roadmap (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    month TEXT NOT NULL,
    prompt TEXT NOT NULL,
    p_level TEXT NOT NULL,
    enhanced_geo_score REAL DEFAULT 0.0,
    quick_win_index REAL DEFAULT 0.0,
    search_volume INTEGER,
    competition REAL,
    trending_status TEXT,
    estimated_traffic INTEGER,
    difficulty REAL,
    geo_intent_type TEXT,
    category TEXT,
    content_hours_est REAL,
    created_at TEXT NOT NULL DEFAULT (datetime('now')),
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS content (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    roadmap_id INTEGER REFERENCES roadmap(id) ON DELETE SET NULL,
    title TEXT NOT NULL,
    channel TEXT NOT NULL,
    content_type TEXT,
    publish_status TEXT NOT NULL DEFAULT 'draft',
    publish_date TEXT,
    kpi_ctr REAL DEFAULT 0.0,
    kpi_views INTEGER DEFAULT 0,
    kpi_gmv REAL DEFAULT 0.0,
    kpi_engagement REAL DEFAULT 0.0,
    kpi_conversion REAL DEFAULT 0.0,
    created_at TEXT NOT NULL DEFAULT (datetime('now')),
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS citations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    roadmap_id INTEGER REFERENCES roadmap(id) ON DELETE SET NULL,
    content_id INTEGER REFERENCES content(id) ON DELETE SET NULL,
    platform TEXT NOT NULL,
    citation_url TEXT,
    citation_strength INTEGER NOT NULL DEFAULT 1,
    ai_indexed INTEGER NOT NULL DEFAULT 0,
    is_active INTEGER NOT NULL DEFAULT 1,
    query TEXT,
    detected_at TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE INDEX IF NOT EXISTS idx_roadmap_month ON roadmap(month);
CREATE INDEX IF NOT EXISTS idx_roadmap_p_level ON roadmap(p_level);
CREATE INDEX IF NOT EXISTS idx_content_roadmap ON content(roadmap_id);
CREATE INDEX IF NOT EXISTS idx_content_status ON content(publish_status);
CREATE INDEX IF NOT EXISTS idx_citations_content ON citations(content_id);
CREATE INDEX IF NOT EXISTS idx_citations_platform ON citations(platform);
"""

ROADMAP_SORT_COLUMNS = {
    "enhanced_geo_score", "quick_win_index", "month", "p_level",
    "search_volume", "created_at", "prompt",
}


def _paginate(total: int, page: int, limit: int) -> Pagination:
    return Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit) if limit else 0,
    )


class GeoDB:
    """SQLite database wrapper for roadmap, content and citation records."""

    def __init__(self, config: Config) -> None:
        self.db_path = config.resolved_db_path
        self._conn: sqlite3.Connection | None = None

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("Database not initialized. Call init_db() first.")
        return self._conn

    def init_db(self) -> None:
        """Create database and tables."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(str(self.db_path))
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA foreign_keys=ON")
        self._conn.executescript(SCHEMA_SQL)
        logger.info("Database initialized at %s", self.db_path)

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def _update(self, table: str, row_id: int, changes: dict[str, object]) -> bool:
        """Apply a partial update. Returns False if the row does not exist."""
        exists = self.conn.execute(
            f"SELECT 1 FROM {table} WHERE id = ?", (row_id,)
        ).fetchone()
        if not exists:
            return False
        if not changes:
            return True

        sets = [f"{col} = ?" for col in changes]
        params: list[object] = list(changes.values())
        if table != "citations":
            sets.append("updated_at = datetime('now')")
        params.append(row_id)
        self.conn.execute(
            f"UPDATE {table} SET {', '.join(sets)} WHERE id = ?", params
        )
        self.conn.commit()
        return True

    def _delete(self, table: str, row_id: int) -> bool:
        cursor = self.conn.execute(f"DELETE FROM {table} WHERE id = ?", (row_id,))
        self.conn.commit()
        return cursor.rowcount > 0

    # --- Roadmap operations ---

    def insert_roadmap(self, item: RoadmapInsert) -> int:
        data = item.model_dump(mode="json")
        cols = ", ".join(data)
        marks = ", ".join("?" for _ in data)
        cursor = self.conn.execute(
            f"INSERT INTO roadmap ({cols}) VALUES ({marks})", list(data.values())
        )
        self.conn.commit()
        return cursor.lastrowid  # type: ignore[return-value]

    def get_roadmap(self, roadmap_id: int) -> RoadmapRow | None:
        row = self.conn.execute(
            "SELECT * FROM roadmap WHERE id = ?", (roadmap_id,)
        ).fetchone()
        if row:
            return RoadmapRow(**dict(row))
        return None

    def list_roadmap(
        self,
        month: str | None = None,
        p_level: str | None = None,
        search: str | None = None,
        sort_by: str = "enhanced_geo_score",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[RoadmapRow], Pagination]:
        """Filtered, sorted, paginated roadmap listing."""
        if sort_by not in ROADMAP_SORT_COLUMNS:
            raise ValueError(f"Cannot sort roadmap by {sort_by!r}")
        if sort_order.lower() not in ("asc", "desc"):
            raise ValueError(f"sort_order must be 'asc' or 'desc', got {sort_order!r}")
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be >= 1")

        clauses: list[str] = []
        params: list[str | int] = []
        if month is not None:
            clauses.append("month = ?")
            params.append(month)
        if p_level is not None:
            clauses.append("p_level = ?")
            params.append(p_level)
        if search:
            clauses.append("LOWER(prompt) LIKE ?")
            params.append(f"%{search.lower()}%")

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        total = self.conn.execute(
            f"SELECT COUNT(*) as cnt FROM roadmap {where}", params
        ).fetchone()["cnt"]
        rows = self.conn.execute(
            f"SELECT * FROM roadmap {where} ORDER BY {sort_by} {sort_order.upper()}, id "
            "LIMIT ? OFFSET ?",
            [*params, limit, (page - 1) * limit],
        ).fetchall()
        return [RoadmapRow(**dict(r)) for r in rows], _paginate(total, page, limit)

    def all_roadmap(self) -> list[RoadmapRow]:
        rows = self.conn.execute("SELECT * FROM roadmap ORDER BY id").fetchall()
        return [RoadmapRow(**dict(r)) for r in rows]

    def update_roadmap(self, roadmap_id: int, changes: dict[str, object]) -> bool:
        return self._update("roadmap", roadmap_id, changes)

    def delete_roadmap(self, roadmap_id: int) -> bool:
        return self._delete("roadmap", roadmap_id)

    def count_roadmap_children(self, roadmap_id: int) -> dict[str, int]:
        contents = self.conn.execute(
            "SELECT COUNT(*) as cnt FROM content WHERE roadmap_id = ?", (roadmap_id,)
        ).fetchone()
        citations = self.conn.execute(
            "SELECT COUNT(*) as cnt FROM citations WHERE roadmap_id = ?", (roadmap_id,)
        ).fetchone()
        return {"contents": contents["cnt"], "citations": citations["cnt"]}

    # --- Content operations ---

    def insert_content(self, item: ContentInsert) -> int:
        data = item.model_dump(mode="json")
        cols = ", ".join(data)
        marks = ", ".join("?" for _ in data)
        cursor = self.conn.execute(
            f"INSERT INTO content ({cols}) VALUES ({marks})", list(data.values())
        )
        self.conn.commit()
        return cursor.lastrowid  # type: ignore[return-value]

    def get_content(self, content_id: int) -> ContentRow | None:
        row = self.conn.execute(
            "SELECT * FROM content WHERE id = ?", (content_id,)
        ).fetchone()
        if row:
            return ContentRow(**dict(row))
        return None

    def list_content(
        self,
        channel: str | None = None,
        publish_status: str | None = None,
        roadmap_id: int | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[ContentRow], Pagination]:
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be >= 1")
        clauses: list[str] = []
        params: list[str | int] = []
        if channel is not None:
            clauses.append("channel = ?")
            params.append(channel)
        if publish_status is not None:
            clauses.append("publish_status = ?")
            params.append(publish_status)
        if roadmap_id is not None:
            clauses.append("roadmap_id = ?")
            params.append(roadmap_id)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        total = self.conn.execute(
            f"SELECT COUNT(*) as cnt FROM content {where}", params
        ).fetchone()["cnt"]
        rows = self.conn.execute(
            f"SELECT * FROM content {where} ORDER BY publish_date DESC, id LIMIT ? OFFSET ?",
            [*params, limit, (page - 1) * limit],
        ).fetchall()
        return [ContentRow(**dict(r)) for r in rows], _paginate(total, page, limit)

    def all_content(self) -> list[ContentRow]:
        rows = self.conn.execute("SELECT * FROM content ORDER BY id").fetchall()
        return [ContentRow(**dict(r)) for r in rows]

    def update_content(self, content_id: int, changes: dict[str, object]) -> bool:
        return self._update("content", content_id, changes)

    def delete_content(self, content_id: int) -> bool:
        return self._delete("content", content_id)

    # --- Citation operations ---

    def insert_citation(self, item: CitationInsert) -> int:
        data = item.model_dump(mode="json")
        cols = ", ".join(data)
        marks = ", ".join("?" for _ in data)
        cursor = self.conn.execute(
            f"INSERT INTO citations ({cols}) VALUES ({marks})", list(data.values())
        )
        self.conn.commit()
        return cursor.lastrowid  # type: ignore[return-value]

    def get_citation(self, citation_id: int) -> CitationRow | None:
        row = self.conn.execute(
            "SELECT * FROM citations WHERE id = ?", (citation_id,)
        ).fetchone()
        if row:
            return CitationRow(**dict(row))
        return None

    def list_citations(
        self,
        platform: str | None = None,
        citation_strength: int | None = None,
        ai_indexed: bool | None = None,
        content_id: int | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[CitationRow], Pagination]:
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be >= 1")
        clauses: list[str] = []
        params: list[str | int] = []
        if platform is not None:
            clauses.append("platform = ?")
            params.append(platform)
        if citation_strength is not None:
            clauses.append("citation_strength = ?")
            params.append(citation_strength)
        if ai_indexed is not None:
            clauses.append("ai_indexed = ?")
            params.append(int(ai_indexed))
        if content_id is not None:
            clauses.append("content_id = ?")
            params.append(content_id)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        total = self.conn.execute(
            f"SELECT COUNT(*) as cnt FROM citations {where}", params
        ).fetchone()["cnt"]
        rows = self.conn.execute(
            f"SELECT * FROM citations {where} ORDER BY detected_at DESC, id LIMIT ? OFFSET ?",
            [*params, limit, (page - 1) * limit],
        ).fetchall()
        return [CitationRow(**dict(r)) for r in rows], _paginate(total, page, limit)

    def all_citations(self) -> list[CitationRow]:
        rows = self.conn.execute("SELECT * FROM citations ORDER BY id").fetchall()
        return [CitationRow(**dict(r)) for r in rows]

    def update_citation(self, citation_id: int, changes: dict[str, object]) -> bool:
        return self._update("citations", citation_id, changes)

    def delete_citation(self, citation_id: int) -> bool:
        return self._delete("citations", citation_id)

    def clear_all(self) -> None:
        """Delete every citation, content and roadmap row."""
        for table in ("citations", "content", "roadmap"):
            self.conn.execute(f"DELETE FROM {table}")
        self.conn.commit()
        logger.info("Cleared roadmap, content and citations")

    # --- Aggregates ---

    def count_by(self, table: str, column: str) -> dict[str, int]:
        """Group-by count over one column, e.g. roadmap by p_level."""
        rows = self.conn.execute(
            f"SELECT {column} as k, COUNT(*) as cnt FROM {table} GROUP BY {column} ORDER BY {column}"
        ).fetchall()
        return {str(r["k"]): r["cnt"] for r in rows}

    def count_rows(self, table: str, where: str = "", params: tuple = ()) -> int:
        clause = f"WHERE {where}" if where else ""
        row = self.conn.execute(
            f"SELECT COUNT(*) as cnt FROM {table} {clause}", params
        ).fetchone()
        return row["cnt"] if row else 0

    def averages(self, table: str, columns: list[str]) -> dict[str, float]:
        select = ", ".join(f"AVG({c}) as {c}" for c in columns)
        row = self.conn.execute(f"SELECT {select} FROM {table}").fetchone()
        return {c: (row[c] or 0.0) for c in columns}
