from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import ScheduleDocument


class IScheduleRepository(ABC):
    """Persistence port for the route schedule and stop artifacts."""

    @abstractmethod
    def load_document(self) -> ScheduleDocument:
        """Load both artifacts; raises DataFetchError when unreachable."""

    @abstractmethod
    def save_document(self, document: ScheduleDocument) -> None:
        """Persist both artifacts, or neither."""
