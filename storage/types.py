from dataclasses import dataclass
from typing import Optional, Literal

StoreStatus = Literal["success", "not_found", "unavailable", "failed"]


@dataclass
class StoredPaper:
    """A processed question paper, as persisted."""
    id: str
    filename: str
    file_type: str
    extracted_text: Optional[str]
    solutions: Optional[str]
    created_at: str


@dataclass
class StoreWriteResponse:
    status: StoreStatus
    paper_id: Optional[str] = None
    error: Optional[str] = None


@dataclass
class StoreReadResponse:
    status: StoreStatus
    paper: Optional[StoredPaper] = None
    error: Optional[str] = None
