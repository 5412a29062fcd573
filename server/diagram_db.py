"""SQLite storage for saved diagrams."""

import os
import sqlite3
from pathlib import Path

from flowforge.models.diagram import StoredDiagram
from flowforge.models.graph import Graph


DEFAULT_DB_PATH = Path(__file__).parent / "data" / "flowforge.db"
DIAGRAM_DB_PATH = Path(os.getenv("DIAGRAM_DB_PATH", str(DEFAULT_DB_PATH)))


def _connect() -> sqlite3.Connection:
    DIAGRAM_DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(DIAGRAM_DB_PATH)
    conn.row_factory = sqlite3.Row
    return conn


def init_db() -> None:
    with _connect() as conn:
        conn.execute(
            """
            create table if not exists diagrams (
                diagram_id text primary key,
                owner_id text not null,
                title text not null,
                diagram_kind text not null,
                layout text,
                diagram_json text not null,
                created_at text not null,
                updated_at text not null
            )
            """
        )
        conn.execute(
            "create index if not exists idx_diagrams_owner on diagrams (owner_id, updated_at)"
        )
        conn.commit()


def _row_to_diagram(row: sqlite3.Row) -> StoredDiagram:
    return StoredDiagram(
        diagram_id=row["diagram_id"],
        owner_id=row["owner_id"],
        title=row["title"],
        diagram_kind=row["diagram_kind"],
        layout=row["layout"],
        graph=Graph.model_validate_json(row["diagram_json"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def upsert_diagram(diagram: StoredDiagram) -> None:
    """insert or update a stored diagram."""
    with _connect() as conn:
        conn.execute(
            """
            insert into diagrams (
                diagram_id, owner_id, title, diagram_kind, layout,
                diagram_json, created_at, updated_at
            )
            values (?, ?, ?, ?, ?, ?, ?, ?)
            on conflict(diagram_id) do update set
                title = excluded.title,
                diagram_kind = excluded.diagram_kind,
                layout = excluded.layout,
                diagram_json = excluded.diagram_json,
                updated_at = excluded.updated_at
            """,
            (
                diagram.diagram_id,
                diagram.owner_id,
                diagram.title,
                diagram.diagram_kind,
                diagram.layout,
                diagram.graph.model_dump_json(exclude_none=True),
                diagram.created_at,
                diagram.updated_at,
            ),
        )
        conn.commit()


def get_diagram(owner_id: str, diagram_id: str) -> StoredDiagram | None:
    """fetch one diagram; diagrams of other owners are invisible."""
    with _connect() as conn:
        row = conn.execute(
            "select * from diagrams where diagram_id = ? and owner_id = ?",
            (diagram_id, owner_id),
        ).fetchone()
    if not row:
        return None
    return _row_to_diagram(row)


def list_diagrams(owner_id: str, limit: int = 50, offset: int = 0) -> list[StoredDiagram]:
    with _connect() as conn:
        rows = conn.execute(
            """
            select * from diagrams
            where owner_id = ?
            order by updated_at desc
            limit ? offset ?
            """,
            (owner_id, limit, offset),
        ).fetchall()
    return [_row_to_diagram(row) for row in rows]


def delete_diagram(owner_id: str, diagram_id: str) -> bool:
    """delete a diagram; returns False when nothing matched."""
    with _connect() as conn:
        cursor = conn.execute(
            "delete from diagrams where diagram_id = ? and owner_id = ?",
            (diagram_id, owner_id),
        )
        conn.commit()
    return cursor.rowcount > 0
