"""
Upload validation.

Runs before any extraction work so oversized or mistyped payloads never
reach a collaborator.
"""

from .errors import FileTooLargeError, UnsupportedFileTypeError
from .types import MEDIA_TYPES, MediaKind, normalize_media_type

MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB


class FileValidator:
    """Checks declared media type and byte size against fixed rules."""

    def __init__(self, max_bytes: int = MAX_UPLOAD_BYTES):
        self.max_bytes = max_bytes

    def validate(self, media_type: str, size: int) -> MediaKind:
        """
        Accept or reject an upload.

        Args:
            media_type: Declared media type (parameters and case ignored)
            size: Byte size of the payload

        Returns:
            The MediaKind the artifact will be extracted as

        Raises:
            UnsupportedFileTypeError: media type not on the allow-list
            FileTooLargeError: size above the ceiling
        """
        kind = MEDIA_TYPES.get(normalize_media_type(media_type))
        if kind is None:
            raise UnsupportedFileTypeError(media_type)

        if size > self.max_bytes:
            raise FileTooLargeError(size, self.max_bytes)

        return kind
