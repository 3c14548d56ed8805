"""
SQLite-backed result store.

Persists successful processing results in a single question_papers table.

Key properties:
- Implements exactly the same interface as StubResultStore
- Written only after a request succeeds
- Non-fatal: failures are returned as response status, never raised
"""

import sqlite3
import logging
import uuid
from typing import Optional

from pipeline.types import ProcessingResult
from storage.base import ResultStore
from storage.types import StoredPaper, StoreReadResponse, StoreWriteResponse

logger = logging.getLogger(__name__)


class SQLiteResultStore(ResultStore):
    """
    SQLite-backed store for processed question papers.

    Design:
    - One table: question_papers
    - Columns: id, filename, file_type, extracted_text, solutions, created_at
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Initialize SQLite result store.

        Args:
            db_path: Path to SQLite database file.
                    If None, uses ':memory:' (in-memory, useful for testing).
        """
        self.db_path = db_path or ":memory:"
        # A bare ':memory:' database lives only as long as its connection
        self._shared_conn = (
            sqlite3.connect(self.db_path, check_same_thread=False)
            if self.db_path == ":memory:" else None
        )
        self._initialize_db()

    def _connect(self) -> sqlite3.Connection:
        if self._shared_conn is not None:
            return self._shared_conn
        return sqlite3.connect(self.db_path)

    def _release(self, conn: sqlite3.Connection) -> None:
        if conn is not self._shared_conn:
            conn.close()

    def _initialize_db(self) -> None:
        """
        Create the schema if it does not exist.

        Errors are logged; the store then reports itself unavailable on use.
        """
        try:
            conn = self._connect()
            try:
                cursor = conn.cursor()

                if self.db_path != ":memory:":
                    cursor.execute("PRAGMA journal_mode=WAL")

                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS question_papers (
                        id TEXT PRIMARY KEY,
                        filename TEXT NOT NULL,
                        file_type TEXT NOT NULL,
                        extracted_text TEXT,
                        solutions TEXT,
                        created_at TEXT NOT NULL
                    )
                """)

                conn.commit()
            finally:
                self._release(conn)

            logger.debug(f"SQLite result store initialized: {self.db_path}")
        except Exception as e:
            logger.error(f"Failed to initialize SQLite result store: {str(e)}")

    def save(self, result: ProcessingResult) -> StoreWriteResponse:
        """
        Insert a processed paper.

        Returns:
            StoreWriteResponse with the new id or explicit failure
        """
        paper_id = uuid.uuid4().hex
        try:
            conn = self._connect()
            try:
                conn.execute(
                    """
                    INSERT INTO question_papers
                        (id, filename, file_type, extracted_text, solutions, created_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        paper_id,
                        result.filename,
                        result.file_type or "text/plain",
                        result.extracted_text,
                        result.solutions,
                        result.processed_at,
                    ),
                )
                conn.commit()
            finally:
                self._release(conn)

            logger.debug(f"Stored paper {paper_id} ({result.filename})")
            return StoreWriteResponse(status="success", paper_id=paper_id)

        except sqlite3.OperationalError as e:
            logger.error(f"SQLite operational error during save: {str(e)}")
            return StoreWriteResponse(status="unavailable", error=f"Store unavailable: {str(e)}")
        except Exception as e:
            logger.error(f"Result save failed: {str(e)}")
            return StoreWriteResponse(status="failed", error=f"Save failed: {str(e)}")

    def get(self, paper_id: str) -> StoreReadResponse:
        """Load a stored paper by id."""
        try:
            conn = self._connect()
            try:
                row = conn.execute(
                    """
                    SELECT id, filename, file_type, extracted_text, solutions, created_at
                    FROM question_papers WHERE id = ?
                    """,
                    (paper_id,),
                ).fetchone()
            finally:
                self._release(conn)

            if row is None:
                return StoreReadResponse(status="not_found", error=f"Paper '{paper_id}' not found")

            return StoreReadResponse(status="success", paper=StoredPaper(*row))

        except sqlite3.OperationalError as e:
            logger.error(f"SQLite operational error during read: {str(e)}")
            return StoreReadResponse(status="unavailable", error=f"Store unavailable: {str(e)}")
        except Exception as e:
            return StoreReadResponse(status="failed", error=f"Read failed: {str(e)}")
