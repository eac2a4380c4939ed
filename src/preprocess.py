from __future__ import annotations

import argparse
import logging
import os
import sys

from src.adapters.persistence.local_gtfs_repository import LocalGtfsRepository
from src.adapters.persistence.local_schedule_repository import LocalScheduleRepository
from src.adapters.persistence.s3_schedule_repository import S3ScheduleRepository
from src.app.ports.output import IScheduleRepository
from src.app.services.preprocess_service import PreprocessService
from src.domain.exceptions import ScheduleError

logger = logging.getLogger("src.preprocess")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build route schedule and stop artifacts from a GTFS feed."
    )
    parser.add_argument(
        "--gtfs-root",
        default=None,
        help="Directory searched for the GTFS folder (env: GTFS_ROOT).",
    )
    parser.add_argument(
        "--match",
        default=None,
        help="Substring identifying the GTFS folder (env: GTFS_DIR_MATCH).",
    )
    parser.add_argument(
        "--out",
        default=None,
        help="Output directory for routes.json/stops.json (env: SCHEDULE_DIR).",
    )
    parser.add_argument(
        "--s3",
        action="store_true",
        help="Upload artifacts to SCHEDULE_BUCKET instead of writing locally.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = parse_args(argv)

    sink: IScheduleRepository
    if args.s3:
        sink = S3ScheduleRepository()
    else:
        sink = LocalScheduleRepository(base_path=args.out)

    service = PreprocessService(
        gtfs_repository=LocalGtfsRepository(root=args.gtfs_root, match=args.match),
        schedule_repository=sink,
    )

    try:
        document = service.run()
    except ScheduleError as exc:
        logger.error("Preprocessing failed: %s", exc)
        return 1

    logger.info("Done: %d routes, %d stops", len(document.routes), len(document.stops))
    return 0


if __name__ == "__main__":
    sys.exit(main())
