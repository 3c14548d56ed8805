"""
Abstract result store interface.

The orchestrator writes a ProcessingResult here after a request succeeds,
never before. Store operations return Response objects and never raise, so a
broken store can never change what the caller receives.
"""

from abc import ABC, abstractmethod

from pipeline.types import ProcessingResult
from storage.types import StoreReadResponse, StoreWriteResponse


class ResultStore(ABC):
    """Abstract persistence boundary for processed question papers."""

    @abstractmethod
    def save(self, result: ProcessingResult) -> StoreWriteResponse:
        """
        Persist a successful result.

        Never raises exceptions. All failures are returned as response status.
        """
        raise NotImplementedError

    @abstractmethod
    def get(self, paper_id: str) -> StoreReadResponse:
        """
        Load a stored paper by id.

        Never raises exceptions. All failures are returned as response status.
        """
        raise NotImplementedError
