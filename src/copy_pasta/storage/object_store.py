from __future__ import annotations

from typing import BinaryIO, Protocol

import boto3
from botocore.client import Config
from botocore.exceptions import ClientError

from copy_pasta.config.object_store_config import ObjectStoreConfig
from copy_pasta.logging_config import get_logger

logger = get_logger(__name__)

_MISSING_BUCKET_CODES = {"404", "NoSuchBucket", "NotFound"}


class ObjectStoreClient(Protocol):
    """The four object-store operations copy-pasta needs.

    Implementations raise on failure; callers pass errors through untouched.
    """

    def bucket_exists(self, bucket_name: str) -> bool: ...

    def make_bucket(self, bucket_name: str, location: str) -> None: ...

    def put_object(self, bucket_name: str, object_name: str, content: BinaryIO, content_type: str) -> int: ...

    def fget_object(self, bucket_name: str, object_name: str, file_path: str) -> None: ...


class S3ObjectStore:
    def __init__(self, config: ObjectStoreConfig):
        self.endpoint = config.endpoint
        self.region = config.region
        client_kwargs = {
            "config": Config(signature_version="s3v4"),
            "region_name": self.region,
        }
        if self.endpoint:
            client_kwargs["endpoint_url"] = self.endpoint
        if config.access_key:
            client_kwargs["aws_access_key_id"] = config.access_key
        if config.secret_key:
            client_kwargs["aws_secret_access_key"] = config.secret_key
        self.client = boto3.client("s3", **client_kwargs)

    def bucket_exists(self, bucket_name: str) -> bool:
        try:
            self.client.head_bucket(Bucket=bucket_name)
            return True
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in _MISSING_BUCKET_CODES:
                return False
            raise

    def make_bucket(self, bucket_name: str, location: str) -> None:
        kwargs = {"Bucket": bucket_name}
        # us-east-1 is the implicit default and is rejected as an explicit constraint
        if location and location != "us-east-1":
            kwargs["CreateBucketConfiguration"] = {"LocationConstraint": location}
        self.client.create_bucket(**kwargs)
        logger.info("Created bucket: bucket=%s location=%s", bucket_name, location)

    def put_object(self, bucket_name: str, object_name: str, content: BinaryIO, content_type: str) -> int:
        data = content.read()
        self.client.put_object(
            Bucket=bucket_name,
            Key=object_name,
            Body=data,
            ContentType=content_type,
        )
        return len(data)

    def fget_object(self, bucket_name: str, object_name: str, file_path: str) -> None:
        self.client.download_file(bucket_name, object_name, file_path)
