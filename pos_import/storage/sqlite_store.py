"""SQLite persistence for POS records.

Name uniqueness is a ``UNIQUE`` constraint on the table, so concurrent
creates with the same name let at most one insert succeed.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from pos_import.common.errors import DuplicateNameError, PosNotFoundError
from pos_import.common.fs import ensure_dir
from pos_import.common.models import Campus, Pos, PosType, build_pos
from pos_import.common.time_utils import utc_timestamp_iso

MEMORY_DB = ":memory:"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS pos (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    description TEXT NOT NULL,
    type TEXT NOT NULL,
    campus TEXT NOT NULL,
    street TEXT NOT NULL,
    house_number TEXT NOT NULL,
    postal_code INTEGER,
    city TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

_COLUMNS = (
    "id, name, description, type, campus, street, house_number, postal_code, city, created_at, updated_at"
)


def _row_to_pos(row: sqlite3.Row) -> Pos:
    return build_pos(
        name=row["name"],
        description=row["description"],
        type=PosType(row["type"]),
        campus=Campus(row["campus"]),
        street=row["street"],
        house_number=row["house_number"],
        postal_code=row["postal_code"],
        city=row["city"],
    ).with_identity(row["id"], row["created_at"], row["updated_at"])


def _is_name_violation(exc: sqlite3.IntegrityError) -> bool:
    return "pos.name" in str(exc)


class SqlitePosStore:
    """SQLite-backed POS store"""

    def __init__(self, db_path: str | Path = MEMORY_DB):
        self.db_path = str(db_path)
        self._shared_conn: sqlite3.Connection | None = None
        if self.db_path == MEMORY_DB:
            self._shared_conn = self._connect()
        else:
            ensure_dir(Path(self.db_path).parent)
        self.init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def get_connection(self) -> Iterator[sqlite3.Connection]:
        """One transaction per block: commit on success, rollback on error."""
        conn = self._shared_conn or self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            if conn is not self._shared_conn:
                conn.close()

    def close(self) -> None:
        if self._shared_conn is not None:
            self._shared_conn.close()
            self._shared_conn = None

    def init_schema(self) -> None:
        with self.get_connection() as conn:
            conn.execute(_SCHEMA)

    def clear(self) -> None:
        with self.get_connection() as conn:
            conn.execute("DELETE FROM pos")

    def get_all(self) -> list[Pos]:
        with self.get_connection() as conn:
            rows = conn.execute(f"SELECT {_COLUMNS} FROM pos ORDER BY id").fetchall()
        return [_row_to_pos(row) for row in rows]

    def get_by_id(self, pos_id: int) -> Pos:
        with self.get_connection() as conn:
            row = conn.execute(f"SELECT {_COLUMNS} FROM pos WHERE id = ?", (pos_id,)).fetchone()
        if row is None:
            raise PosNotFoundError(pos_id)
        return _row_to_pos(row)

    def upsert(self, pos: Pos) -> Pos:
        """Insert when ``pos.id`` is None, otherwise overwrite the stored row."""
        values = (
            pos.name,
            pos.description,
            pos.type.value,
            pos.campus.value,
            pos.street,
            pos.house_number,
            pos.postal_code,
            pos.city,
        )
        now = utc_timestamp_iso()
        try:
            with self.get_connection() as conn:
                if pos.id is None:
                    cursor = conn.execute(
                        """
                        INSERT INTO pos
                        (name, description, type, campus, street, house_number, postal_code, city,
                         created_at, updated_at)
                        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        (*values, now, now),
                    )
                    pos_id = cursor.lastrowid
                else:
                    cursor = conn.execute(
                        """
                        UPDATE pos
                        SET name = ?, description = ?, type = ?, campus = ?, street = ?,
                            house_number = ?, postal_code = ?, city = ?, updated_at = ?
                        WHERE id = ?
                        """,
                        (*values, now, pos.id),
                    )
                    if cursor.rowcount == 0:
                        raise PosNotFoundError(pos.id)
                    pos_id = pos.id
                row = conn.execute(f"SELECT {_COLUMNS} FROM pos WHERE id = ?", (pos_id,)).fetchone()
        except sqlite3.IntegrityError as exc:
            if _is_name_violation(exc):
                raise DuplicateNameError(pos.name) from exc
            raise
        return _row_to_pos(row)
