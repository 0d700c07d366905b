"""Shared fixtures and test doubles."""

from __future__ import annotations

import botocore.exceptions
import pytest

from bucket_nuke.backend import ObjectVersion
from bucket_nuke.errors import BackendError


def client_error(code: str, operation: str, message: str = "boom") -> botocore.exceptions.ClientError:
    """Build a real ClientError as botocore would raise it."""
    return botocore.exceptions.ClientError(
        {"Error": {"Code": code, "Message": message}}, operation
    )


class FakeBackend:
    """In-memory backend recording every call in order."""

    def __init__(self, buckets: dict[str, list[ObjectVersion]] | None = None) -> None:
        self.buckets = buckets if buckets is not None else {}
        self.calls: list[tuple] = []
        self.fail_listing: set[str] = set()
        self.fail_delete_object: set[str] = set()
        self.fail_delete_bucket: set[str] = set()
        self.fail_list_buckets = False

    def list_buckets(self) -> list[str]:
        self.calls.append(("list_buckets",))
        if self.fail_list_buckets:
            raise BackendError("ListBuckets", "Access Denied", code="AccessDenied")
        return list(self.buckets)

    def list_object_versions(self, bucket_name: str) -> list[ObjectVersion]:
        self.calls.append(("list_object_versions", bucket_name))
        if bucket_name in self.fail_listing:
            raise BackendError("ListObjectVersions", "Access Denied", bucket=bucket_name)
        return list(self.buckets[bucket_name])

    def delete_object(self, bucket_name: str, key: str, version_id: str) -> None:
        self.calls.append(("delete_object", bucket_name, key, version_id))
        if bucket_name in self.fail_delete_object:
            raise BackendError("DeleteObject", "Access Denied", bucket=bucket_name)
        self.buckets[bucket_name].remove(ObjectVersion(key, version_id))

    def delete_bucket(self, bucket_name: str) -> None:
        self.calls.append(("delete_bucket", bucket_name))
        if bucket_name in self.fail_delete_bucket:
            raise BackendError("DeleteBucket", "The bucket you tried to delete is not empty", bucket=bucket_name)
        if self.buckets.get(bucket_name):
            raise BackendError("DeleteBucket", "The bucket you tried to delete is not empty", bucket=bucket_name)
        del self.buckets[bucket_name]

    def calls_named(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend(
        {
            "a": [ObjectVersion("one.txt", "v1"), ObjectVersion("one.txt", "v2")],
            "b": [],
            "backup-prod": [ObjectVersion("dump.sql", "null")],
            "c": [ObjectVersion("logs/x.log", "v9")],
        }
    )


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Keep the developer's environment out of configuration tests."""
    for name in (
        "AWS_REGION",
        "AWS_DEFAULT_REGION",
        "BUCKET_NUKE_ENDPOINT_URL",
        "BUCKET_NUKE_MAX_BUCKETS",
        "BUCKET_NUKE_PROTECTED_NAMES",
    ):
        monkeypatch.delenv(name, raising=False)
