from __future__ import annotations

import logging
from dataclasses import dataclass

from src.app.ports.output import IGtfsRepository, IScheduleRepository
from src.domain.algorithms.schedule_builder import build_schedule
from src.domain.models import ScheduleDocument

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PreprocessService:
    """GTFS tables -> schedule document -> persisted artifacts.

    Errors from loading or building propagate before anything is written.
    """

    gtfs_repository: IGtfsRepository
    schedule_repository: IScheduleRepository

    def run(self) -> ScheduleDocument:
        feed = self.gtfs_repository.load_feed()
        document = build_schedule(feed)
        logger.info(
            "Built %d routes and %d unique stops",
            len(document.routes),
            len(document.stops),
        )
        self.schedule_repository.save_document(document)
        return document
