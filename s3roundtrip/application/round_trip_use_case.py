from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Callable

from s3roundtrip.domain.errors import ConsistencyError, RoundTripError
from s3roundtrip.domain.object_store import BucketAdmin, ObjectDownloader, ObjectUploader
from s3roundtrip.infrastructure.metrics import MetricsStore

logger = logging.getLogger("s3roundtrip.round_trip")


@dataclass
class RoundTripOptions:
    bucket: str
    upload_key: str = "test/test.text"
    download_key: str = "test.txt"
    payload: str = "Hello Go!!!"


@dataclass
class RoundTripResult:
    bucket: str
    created: bool
    location: str | None
    uploaded_key: str
    downloaded_key: str
    payload: bytes


class RoundTripUseCase:
    """Ensure a bucket, upload a fixed payload, then read an object back.

    Steps run strictly in order and the first failure propagates. A bucket
    created by ``ensure_bucket`` is left in place when a later step fails.
    """

    def __init__(
        self,
        admin: BucketAdmin,
        uploader: ObjectUploader,
        downloader: ObjectDownloader,
        metrics: MetricsStore | None = None,
    ) -> None:
        self._admin = admin
        self._uploader = uploader
        self._downloader = downloader
        self._metrics = metrics or MetricsStore()

    @property
    def metrics(self) -> MetricsStore:
        return self._metrics

    def ensure_bucket(self, bucket: str) -> str | None:
        """Create ``bucket`` unless the listing already contains it.

        Returns the location reported on creation, or ``None`` when the
        bucket was already there.
        """
        _, location = self._ensure_bucket(bucket)
        return location

    def _ensure_bucket(self, bucket: str) -> tuple[bool, str | None]:
        buckets = self._admin.list_buckets()
        self._metrics.incr("buckets_listed", len(buckets))

        discovered = False
        for index, summary in enumerate(buckets):
            logger.info("%d, %s", index, summary.name)
            if summary.name == bucket:
                discovered = True
                logger.info("found bucket %s", bucket)

        if discovered:
            return False, None

        location = self._admin.create_bucket(bucket)
        self._metrics.incr("buckets_created")
        logger.info("bucket %s created, location is %s", bucket, location)
        return True, location

    def upload(self, bucket: str, key: str, payload: str) -> None:
        body = payload.encode("utf-8")
        self._uploader.upload(bucket, key, io.BytesIO(body))
        self._metrics.incr("objects_uploaded")
        self._metrics.incr("bytes_uploaded", len(body))
        logger.info("uploaded s3://%s/%s (%d bytes)", bucket, key, len(body))

    def download(self, bucket: str, key: str) -> bytes:
        buffer = io.BytesIO()
        reported = self._downloader.download(bucket, key, buffer)
        data = buffer.getvalue()
        if reported != len(data):
            raise ConsistencyError(expected=reported, received=len(data))

        self._metrics.incr("objects_downloaded")
        self._metrics.incr("bytes_downloaded", len(data))
        logger.info("downloaded s3://%s/%s (%d bytes)", bucket, key, len(data))
        return data

    def execute(
        self,
        options: RoundTripOptions,
        on_step: Callable[[str], None] | None = None,
    ) -> RoundTripResult:
        if options.upload_key != options.download_key:
            logger.warning(
                "upload key %r differs from download key %r",
                options.upload_key,
                options.download_key,
            )

        try:
            created, location = self._ensure_bucket(options.bucket)
            self.upload(options.bucket, options.upload_key, options.payload)
            if on_step:
                on_step("upload")
            payload = self.download(options.bucket, options.download_key)
            if on_step:
                on_step("download")
        except RoundTripError:
            self._metrics.incr("errors_total")
            raise

        return RoundTripResult(
            bucket=options.bucket,
            created=created,
            location=location,
            uploaded_key=options.upload_key,
            downloaded_key=options.download_key,
            payload=payload,
        )
