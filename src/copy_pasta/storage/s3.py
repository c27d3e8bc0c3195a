from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from copy_pasta.logging_config import get_logger
from copy_pasta.storage.object_store import ObjectStoreClient

CONTENT_TYPE = "text/html"
TEMP_FILE_PREFIX = "tempS3ObjectFile"

logger = get_logger(__name__)


def s3_write(client: ObjectStoreClient, bucket_name: str, object_name: str, location: str, content: BinaryIO) -> None:
    """Put ``content`` at bucket/object, creating the bucket first if needed.

    Any failure of the existence check aborts before anything is created.
    """
    if not client.bucket_exists(bucket_name):
        logger.info("Bucket missing, creating it: bucket=%s location=%s", bucket_name, location)
        client.make_bucket(bucket_name, location)

    written = client.put_object(bucket_name, object_name, content, CONTENT_TYPE)
    logger.info("Uploaded clipboard: bucket=%s object=%s bytes=%s", bucket_name, object_name, written)


@contextmanager
def _scoped_temp_file() -> Iterator[Path]:
    fd, name = tempfile.mkstemp(prefix=TEMP_FILE_PREFIX)
    os.close(fd)
    path = Path(name)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)


def s3_read(client: ObjectStoreClient, bucket_name: str, object_name: str) -> str:
    with _scoped_temp_file() as path:
        client.fget_object(bucket_name, object_name, str(path))
        # decode the raw bytes so CR/CRLF line endings survive the round trip
        content = path.read_bytes().decode("utf-8")
    logger.info("Downloaded clipboard: bucket=%s object=%s chars=%s", bucket_name, object_name, len(content))
    return content
