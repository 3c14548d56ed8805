"""
In-memory result store for tests.
"""

import uuid
from typing import Dict

from pipeline.types import ProcessingResult
from storage.base import ResultStore
from storage.types import StoredPaper, StoreReadResponse, StoreWriteResponse


class StubResultStore(ResultStore):
    """Deterministic dict-backed store."""

    def __init__(self):
        self.papers: Dict[str, StoredPaper] = {}

    def save(self, result: ProcessingResult) -> StoreWriteResponse:
        paper_id = uuid.uuid4().hex
        self.papers[paper_id] = StoredPaper(
            id=paper_id,
            filename=result.filename,
            file_type=result.file_type or "text/plain",
            extracted_text=result.extracted_text,
            solutions=result.solutions,
            created_at=result.processed_at,
        )
        return StoreWriteResponse(status="success", paper_id=paper_id)

    def get(self, paper_id: str) -> StoreReadResponse:
        paper = self.papers.get(paper_id)
        if paper is None:
            return StoreReadResponse(status="not_found", error=f"Paper '{paper_id}' not found")
        return StoreReadResponse(status="success", paper=paper)
