from __future__ import annotations

import os


class Settings:
    region: str = os.getenv("S3_REGION", "us-east-1")
    bucket_name: str = os.getenv("S3_BUCKET", "testing-aws-go-yjhu")
    endpoint_url: str | None = os.getenv("S3_ENDPOINT_URL") or None

    upload_key: str = os.getenv("S3_UPLOAD_KEY", "test/test.text")
    download_key: str = os.getenv("S3_DOWNLOAD_KEY", "test.txt")
    payload: str = os.getenv("S3_PAYLOAD", "Hello Go!!!")

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
