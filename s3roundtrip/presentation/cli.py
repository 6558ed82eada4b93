from __future__ import annotations

import json
import logging

from s3roundtrip.application.round_trip_use_case import RoundTripOptions, RoundTripUseCase
from s3roundtrip.config import Settings, settings
from s3roundtrip.domain.errors import ConfigurationError, RoundTripError
from s3roundtrip.infrastructure.metrics import MetricsStore
from s3roundtrip.infrastructure.object_storage import S3ObjectStorage

logger = logging.getLogger("s3roundtrip.cli")

_COMPLETION_LINES = {
    "upload": "Upload Completed",
    "download": "Download Completed",
}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def build_storage(config: Settings) -> S3ObjectStorage:
    return S3ObjectStorage.from_settings(config)


def _print_step(step: str) -> None:
    print(_COMPLETION_LINES[step])


def main() -> int:
    configure_logging(settings.log_level)

    try:
        storage = build_storage(settings)
    except ConfigurationError as exc:
        logger.error("init S3 client error: %s", exc)
        return 1

    metrics = MetricsStore()
    use_case = RoundTripUseCase(storage, storage, storage, metrics=metrics)
    options = RoundTripOptions(
        bucket=settings.bucket_name,
        upload_key=settings.upload_key,
        download_key=settings.download_key,
        payload=settings.payload,
    )

    try:
        result = use_case.execute(options, on_step=_print_step)
    except RoundTripError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        logger.debug(json.dumps(metrics.snapshot()))

    logger.info(
        json.dumps(
            {
                "bucket": result.bucket,
                "created": result.created,
                "location": result.location,
                "uploaded_key": result.uploaded_key,
                "downloaded_key": result.downloaded_key,
                "downloaded_bytes": len(result.payload),
            }
        )
    )
    return 0
