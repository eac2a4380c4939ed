from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models.gtfs import GtfsFeed


class IGtfsRepository(ABC):
    """Port for loading the raw GTFS tables as typed rows."""

    @abstractmethod
    def load_feed(self) -> GtfsFeed:
        raise NotImplementedError
