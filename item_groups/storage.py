from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from item_groups.interfaces.repository import CodedValueRepository


def _ts() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(slots=True)
class SQLiteCodedValueConfig:
    """Configuration for the SQLite-backed coded value store."""

    db_path: Path
    enable_wal: bool = True


class SQLiteCodedValueStore(CodedValueRepository):
    """Keeps the coded values of each client document in input order."""

    def __init__(self, config: SQLiteCodedValueConfig) -> None:
        self.config = config
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            Path(self.config.db_path).parent.mkdir(parents=True, exist_ok=True)
            # FastAPI may resolve a dependency and run the endpoint on different threads.
            self._conn = sqlite3.connect(self.config.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys=ON;")
            if self.config.enable_wal:
                self._conn.execute("PRAGMA journal_mode=WAL;")
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def initialize(self) -> None:
        """Create tables and indices if they do not exist."""

        cursor = self.conn.cursor()
        cursor.executescript(
            """
            CREATE TABLE IF NOT EXISTS documents (
                document_guid TEXT PRIMARY KEY,
                name TEXT,
                created_at TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS coded_values (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                document_guid TEXT NOT NULL,
                position INTEGER NOT NULL,
                coded_value TEXT,
                FOREIGN KEY(document_guid) REFERENCES documents(document_guid) ON DELETE CASCADE
            );

            CREATE INDEX IF NOT EXISTS idx_coded_values_document
                ON coded_values (document_guid, position);
            """
        )
        self.conn.commit()

    def add_coded_values(
        self,
        document_guid: str,
        values: Iterable[Optional[str]],
        *,
        name: Optional[str] = None,
    ) -> int:
        """Append values after any already stored for the document."""

        cursor = self.conn.cursor()
        cursor.execute(
            """
            INSERT INTO documents(document_guid, name, created_at)
            VALUES (?, ?, ?)
            ON CONFLICT(document_guid) DO UPDATE SET
                name=COALESCE(excluded.name, documents.name);
            """,
            (document_guid, name, _ts()),
        )
        cursor.execute(
            "SELECT COALESCE(MAX(position) + 1, 0) AS next_position FROM coded_values WHERE document_guid = ?;",
            (document_guid,),
        )
        start = cursor.fetchone()["next_position"]
        rows = [(document_guid, start + offset, value) for offset, value in enumerate(values)]
        cursor.executemany(
            """
            INSERT INTO coded_values(document_guid, position, coded_value)
            VALUES (?, ?, ?);
            """,
            rows,
        )
        self.conn.commit()
        return len(rows)

    def get_coded_values(self, document_guid: str) -> List[str]:
        cursor = self.conn.cursor()
        cursor.execute(
            """
            SELECT coded_value
            FROM coded_values
            WHERE document_guid = ?
            ORDER BY position;
            """,
            (document_guid,),
        )
        return [row["coded_value"] for row in cursor.fetchall()]

    def list_documents(self) -> List[sqlite3.Row]:
        cursor = self.conn.cursor()
        cursor.execute(
            """
            SELECT d.*, (
                SELECT COUNT(*)
                FROM coded_values cv
                WHERE cv.document_guid = d.document_guid
            ) AS value_count
            FROM documents d
            ORDER BY d.created_at, d.document_guid;
            """
        )
        return cursor.fetchall()

    def delete_document(self, document_guid: str) -> bool:
        cursor = self.conn.cursor()
        cursor.execute("DELETE FROM coded_values WHERE document_guid = ?", (document_guid,))
        cursor.execute("DELETE FROM documents WHERE document_guid = ?", (document_guid,))
        deleted = cursor.rowcount > 0
        self.conn.commit()
        return deleted

    def clear_all(self) -> None:
        cursor = self.conn.cursor()
        cursor.executescript(
            """
            DELETE FROM coded_values;
            DELETE FROM documents;
            """
        )
        self.conn.commit()


__all__ = ["SQLiteCodedValueConfig", "SQLiteCodedValueStore"]
