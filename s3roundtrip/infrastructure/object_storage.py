from __future__ import annotations

import logging
from typing import Any, BinaryIO

from boto3.exceptions import Boto3Error, S3TransferFailedError
from boto3.s3.transfer import TransferConfig
from botocore.client import BaseClient, Config
from botocore.exceptions import BotoCoreError, ClientError
from s3transfer.exceptions import RetriesExceededError
import boto3

from s3roundtrip.config import Settings
from s3roundtrip.domain.errors import ConfigurationError, RemoteError
from s3roundtrip.domain.object_store import (
    BucketAdmin,
    BucketSummary,
    ObjectDownloader,
    ObjectUploader,
)

logger = logging.getLogger("s3roundtrip.storage")

# us-east-1 rejects an explicit LocationConstraint.
DEFAULT_REGION = "us-east-1"

_TRANSFER_CONFIG = TransferConfig(use_threads=False)
_TRANSFER_ERRORS = (ClientError, BotoCoreError, Boto3Error, RetriesExceededError, S3TransferFailedError)


def build_s3_client(region: str, endpoint_url: str | None = None) -> BaseClient:
    if not region:
        raise ConfigurationError("unable to load SDK config: region is empty")

    try:
        session = boto3.Session(region_name=region)
        if session.get_credentials() is None:
            raise ConfigurationError("unable to load SDK config: no AWS credentials found")
        client = session.client(
            "s3",
            endpoint_url=endpoint_url,
            config=Config(signature_version="s3v4"),
        )
    except BotoCoreError as exc:
        raise ConfigurationError(f"unable to load SDK config: {exc}") from exc

    logger.debug("s3 client ready region=%s endpoint=%s", region, endpoint_url or "aws")
    return client


def _remote_error(operation: str, exc: Exception) -> RemoteError:
    if isinstance(exc, ClientError):
        code = str(exc.response.get("Error", {}).get("Code", "")) or None
        return RemoteError(operation, str(exc), code=code)
    return RemoteError(operation, str(exc))


class _TransferCounter:
    """Progress callback summing the bytes the transfer manager reports.

    Retries report negative amounts for the progress they discard.
    """

    def __init__(self) -> None:
        self.total = 0

    def __call__(self, bytes_amount: int) -> None:
        self.total += bytes_amount


class S3ObjectStorage(BucketAdmin, ObjectUploader, ObjectDownloader):
    def __init__(self, client: Any, region: str = DEFAULT_REGION) -> None:
        self._client = client
        self._region = region

    @classmethod
    def from_settings(cls, settings: Settings) -> S3ObjectStorage:
        client = build_s3_client(settings.region, settings.endpoint_url)
        return cls(client, region=settings.region)

    @property
    def region(self) -> str:
        return self._region

    def list_buckets(self) -> list[BucketSummary]:
        paginator = self._client.get_paginator("list_buckets")
        buckets: list[BucketSummary] = []
        try:
            for page in paginator.paginate():
                for item in page.get("Buckets", []):
                    buckets.append(BucketSummary(name=item["Name"], creation_date=item.get("CreationDate")))
        except (ClientError, BotoCoreError) as exc:
            raise _remote_error("list_buckets", exc) from exc
        return buckets

    def create_bucket(self, name: str) -> str | None:
        params: dict[str, Any] = {"Bucket": name}
        if self._region != DEFAULT_REGION:
            params["CreateBucketConfiguration"] = {"LocationConstraint": self._region}
        try:
            response = self._client.create_bucket(**params)
        except (ClientError, BotoCoreError) as exc:
            raise _remote_error("create_bucket", exc) from exc
        return response.get("Location")

    def upload(self, bucket: str, key: str, body: BinaryIO) -> None:
        try:
            self._client.upload_fileobj(body, bucket, key, Config=_TRANSFER_CONFIG)
        except _TRANSFER_ERRORS as exc:
            raise _remote_error("upload", exc) from exc

    def download(self, bucket: str, key: str, buffer: BinaryIO) -> int:
        counter = _TransferCounter()
        try:
            self._client.download_fileobj(bucket, key, buffer, Callback=counter, Config=_TRANSFER_CONFIG)
        except _TRANSFER_ERRORS as exc:
            raise _remote_error("download", exc) from exc
        return counter.total
