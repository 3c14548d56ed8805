"""
Request-scoped data model for the solver pipeline.

Nothing here is persisted or shared between requests.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, field_validator

MANUAL_INPUT_FILENAME = "Manual Input"


class MediaKind(str, Enum):
    """Artifact kinds the extractor can handle."""
    PDF = "pdf"
    IMAGE = "image"
    TEXT = "text"


# Declared media type → kind. "image/jpg" is a common non-standard alias.
MEDIA_TYPES: Dict[str, MediaKind] = {
    "application/pdf": MediaKind.PDF,
    "image/png": MediaKind.IMAGE,
    "image/jpeg": MediaKind.IMAGE,
    "image/jpg": MediaKind.IMAGE,
    "text/plain": MediaKind.TEXT,
}


def normalize_media_type(media_type: Optional[str]) -> str:
    """Lowercase and drop parameters: "Text/Plain; charset=utf-8" → "text/plain"."""
    if not media_type:
        return ""
    return media_type.split(";", 1)[0].strip().lower()


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class ProcessTextPayload(BaseModel):
    """Body of POST /api/process-text."""
    text: str = Field(..., min_length=1)
    filename: Optional[str] = None

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Question text is required")
        return value


@dataclass
class RawTextRequest:
    """Pasted question text."""
    text: str
    filename: Optional[str] = None


@dataclass
class UploadedArtifact:
    """Uploaded file held in memory."""
    data: bytes
    media_type: str
    filename: str
    size: int = field(default=-1)

    def __post_init__(self):
        if self.size < 0:
            self.size = len(self.data)
        self.media_type = normalize_media_type(self.media_type)


IncomingRequest = Union[RawTextRequest, UploadedArtifact]


@dataclass
class ProcessingResult:
    """Terminal artifact of a successful request."""
    extracted_text: str
    solutions: str
    filename: str
    file_type: Optional[str] = None
    processed_at: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the wire field names."""
        body: Dict[str, Any] = {
            "success": True,
            "extractedText": self.extracted_text,
            "solutions": self.solutions,
            "filename": self.filename,
        }
        if self.file_type is not None:
            body["fileType"] = self.file_type
        body["processedAt"] = self.processed_at
        return body


@dataclass
class ProbeResult:
    """Outcome of an availability probe."""
    valid: bool
    error: Optional[str] = None
    checked_at: str = field(default_factory=utc_timestamp)
