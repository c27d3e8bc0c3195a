"""
copy-pasta test configuration

Shared fixtures for all tests.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, BinaryIO, Callable, Optional

import pytest


# =============================================================================
# FAKES
# =============================================================================

class FakeObjectStoreClient:
    """In-memory ObjectStoreClient that records every call.

    Set the ``*_error`` attributes to make an operation raise, and
    ``fget_object_stub`` to control what lands in the download path.
    """

    def __init__(self) -> None:
        self.bucket_exists_result = True
        self.bucket_exists_error: Optional[Exception] = None
        self.make_bucket_error: Optional[Exception] = None
        self.put_object_error: Optional[Exception] = None
        self.fget_object_error: Optional[Exception] = None
        self.fget_object_stub: Optional[Callable[[str, str, str], None]] = None
        self.calls: dict[str, list[tuple[Any, ...]]] = {
            "bucket_exists": [],
            "make_bucket": [],
            "put_object": [],
            "fget_object": [],
        }

    def call_count(self, name: str) -> int:
        return len(self.calls[name])

    def bucket_exists(self, bucket_name: str) -> bool:
        self.calls["bucket_exists"].append((bucket_name,))
        if self.bucket_exists_error is not None:
            raise self.bucket_exists_error
        return self.bucket_exists_result

    def make_bucket(self, bucket_name: str, location: str) -> None:
        self.calls["make_bucket"].append((bucket_name, location))
        if self.make_bucket_error is not None:
            raise self.make_bucket_error

    def put_object(self, bucket_name: str, object_name: str, content: BinaryIO, content_type: str) -> int:
        self.calls["put_object"].append((bucket_name, object_name, content, content_type))
        if self.put_object_error is not None:
            raise self.put_object_error
        return 0

    def fget_object(self, bucket_name: str, object_name: str, file_path: str) -> None:
        self.calls["fget_object"].append((bucket_name, object_name, file_path))
        if self.fget_object_error is not None:
            raise self.fget_object_error
        if self.fget_object_stub is not None:
            self.fget_object_stub(bucket_name, object_name, file_path)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def fake_client() -> FakeObjectStoreClient:
    return FakeObjectStoreClient()


@pytest.fixture
def rc_path(tmp_path) -> Path:
    """Location of a not-yet-existing rc file."""
    return tmp_path / ".copy-pastarc"


@pytest.fixture
def isolated_tempdir(tmp_path, monkeypatch) -> Path:
    """Point the tempfile module at a private directory for leak checks."""
    temp_root = tmp_path / "tmp"
    temp_root.mkdir()
    monkeypatch.setattr("tempfile.tempdir", str(temp_root))
    return temp_root


VALID_RC = """currenttarget:
  name: mycurrenttarget
  accesskey: current-key
  secretaccesskey: current-secret-key
  bucketname: current-bucket-name
targets:
  mycurrenttarget:
    name: mycurrenttarget
    accesskey: current-key
    secretaccesskey: current-secret-key
    bucketname: current-bucket-name
  another-target:
    name: another-target
    accesskey: another-key
    secretaccesskey: another-secret-key
    bucketname: another-bucket-name
"""


@pytest.fixture
def valid_rc(rc_path) -> Path:
    rc_path.write_text(VALID_RC)
    return rc_path
