from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO


@dataclass(frozen=True)
class BucketSummary:
    name: str
    creation_date: datetime | None = None


class BucketAdmin(ABC):
    @abstractmethod
    def list_buckets(self) -> list[BucketSummary]:
        """Return every bucket visible to the caller's credentials."""

    @abstractmethod
    def create_bucket(self, name: str) -> str | None:
        """Create a bucket and return its location, if the provider reports one."""


class ObjectUploader(ABC):
    @abstractmethod
    def upload(self, bucket: str, key: str, body: BinaryIO) -> None:
        """Write the full contents of body under bucket/key."""


class ObjectDownloader(ABC):
    @abstractmethod
    def download(self, bucket: str, key: str, buffer: BinaryIO) -> int:
        """Write bucket/key into buffer and return the number of bytes transferred."""
