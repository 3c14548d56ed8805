"""
Result store exports.

Optional persistence of successful processing results.
"""

from .types import StoredPaper, StoreReadResponse, StoreWriteResponse, StoreStatus
from .base import ResultStore
from .stub import StubResultStore
from .sqlite import SQLiteResultStore

__all__ = [
    "StoredPaper",
    "StoreReadResponse",
    "StoreWriteResponse",
    "StoreStatus",
    "ResultStore",
    "StubResultStore",
    "SQLiteResultStore",
]
