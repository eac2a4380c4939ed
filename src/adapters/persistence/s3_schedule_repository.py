from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from botocore.exceptions import BotoCoreError, ClientError

from src.adapters.aws import s3_client
from src.adapters.persistence.schedule_codec import (
    decode_document,
    encode_routes,
    encode_stops,
)
from src.app.ports.output import IScheduleRepository
from src.domain.exceptions import DataFetchError
from src.domain.models import ScheduleDocument

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class S3ScheduleRepository(IScheduleRepository):
    """Schedule artifacts stored as two JSON objects in S3.

    Env vars:
      - SCHEDULE_BUCKET: bucket name
      - SCHEDULE_PREFIX: key prefix (default: schedule/)
      - SCHEDULE_ROUTES_FILE / SCHEDULE_STOPS_FILE: object names
      - ENDPOINT_URL, USE_LOCALSTACK, AWS_REGION: see src.adapters.aws
    """

    bucket: str | None = None
    prefix: str | None = None

    def _bucket(self) -> str:
        value = self.bucket or os.getenv("SCHEDULE_BUCKET")
        if not value:
            raise DataFetchError("Missing SCHEDULE_BUCKET")
        return value

    def _key(self, name: str) -> str:
        prefix = self.prefix if self.prefix is not None else os.getenv(
            "SCHEDULE_PREFIX", "schedule/"
        )
        return f"{prefix}{name}"

    def routes_key(self) -> str:
        return self._key(os.getenv("SCHEDULE_ROUTES_FILE") or "routes.json")

    def stops_key(self) -> str:
        return self._key(os.getenv("SCHEDULE_STOPS_FILE") or "stops.json")

    def load_document(self) -> ScheduleDocument:
        bucket = self._bucket()
        s3 = s3_client()
        try:
            routes_raw = s3.get_object(Bucket=bucket, Key=self.routes_key())[
                "Body"
            ].read()
            stops_raw = s3.get_object(Bucket=bucket, Key=self.stops_key())[
                "Body"
            ].read()
        except (BotoCoreError, ClientError) as exc:
            raise DataFetchError(f"Cannot fetch schedule from s3://{bucket}: {exc}") from exc
        return decode_document(routes_raw, stops_raw)

    def save_document(self, document: ScheduleDocument) -> None:
        bucket = self._bucket()
        s3 = s3_client()
        routes_payload = encode_routes(document.routes)
        stops_payload = encode_stops(document.stops)

        for key, payload in (
            (self.routes_key(), routes_payload),
            (self.stops_key(), stops_payload),
        ):
            try:
                s3.put_object(
                    Bucket=bucket,
                    Key=key,
                    Body=payload,
                    ContentType="application/json",
                )
            except (BotoCoreError, ClientError) as exc:
                raise DataFetchError(f"Cannot upload s3://{bucket}/{key}: {exc}") from exc
            logger.info("Uploaded s3://%s/%s (%d bytes)", bucket, key, len(payload))
