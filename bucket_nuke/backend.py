"""S3 storage backend used to enumerate, empty and delete buckets."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

import boto3
import botocore.config
import botocore.exceptions

from bucket_nuke.config import DEFAULT_REGION, NukeConfig
from bucket_nuke.errors import BackendError

if TYPE_CHECKING:
    from boto3 import Session
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


class ObjectVersion(NamedTuple):
    """One deletable object version or delete marker."""

    key: str
    version_id: str


def _backend_error(
    operation: str, error: Exception, bucket: str | None = None
) -> BackendError:
    code = None
    if isinstance(error, botocore.exceptions.ClientError):
        code = error.response.get("Error", {}).get("Code")
    return BackendError(operation, str(error), bucket=bucket, code=code)


class S3Backend:
    """
    Thin wrapper over a boto3 S3 client.

    Every SDK failure is re-raised as BackendError so callers only deal with
    one exception type.

    Attributes:
        config: Configuration settings for the backend.
    """

    def __init__(self, config: NukeConfig, s3_client: S3Client | None = None) -> None:
        """
        Initialize the backend.

        Args:
            config: Run configuration.
            s3_client: Pre-built client, mainly for tests. Created lazily otherwise.
        """
        self.config = config
        self._session: Session | None = None
        self._boto_config: botocore.config.Config | None = None
        self._s3_client = s3_client

    @property
    def session(self) -> Session:
        """Lazily create and cache boto3 session."""
        if self._session is None:
            self._session = boto3.session.Session(
                profile_name=self.config.profile,
                region_name=self.config.region,
            )
        return self._session

    @property
    def region(self) -> str:
        """Configured region, falling back to the session's, then us-east-1."""
        return self.config.region or self.session.region_name or DEFAULT_REGION

    @property
    def boto_config(self) -> botocore.config.Config:
        """Lazily create and cache boto configuration."""
        if self._boto_config is None:
            self._boto_config = botocore.config.Config(
                region_name=self.region,
                retries={"max_attempts": self.config.max_attempts, "mode": "standard"},
            )
        return self._boto_config

    @property
    def s3_client(self) -> S3Client:
        """Lazily create and cache the S3 client."""
        if self._s3_client is None:
            self._s3_client = self.session.client(
                "s3", endpoint_url=self.config.endpoint_url, config=self.boto_config
            )
        return self._s3_client

    def list_buckets(self) -> list[str]:
        """
        List all buckets visible to the caller.

        Follows continuation tokens until the listing is exhausted.

        Returns:
            Bucket names in the order the service reports them.

        Raises:
            BackendError: If the listing call fails.
        """
        names: list[str] = []
        kwargs: dict[str, str] = {}
        try:
            while True:
                response = self.s3_client.list_buckets(**kwargs)
                names.extend(bucket["Name"] for bucket in response.get("Buckets", []))
                token = response.get("ContinuationToken")
                if not token:
                    break
                kwargs["ContinuationToken"] = token
        except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as e:
            raise _backend_error("ListBuckets", e) from e
        logger.debug(f"Found {len(names)} buckets")
        return names

    def list_object_versions(self, bucket_name: str) -> list[ObjectVersion]:
        """
        List every object version and delete marker in a bucket.

        Args:
            bucket_name: Name of the bucket.

        Returns:
            All (key, version id) pairs currently stored.

        Raises:
            BackendError: If any page of the listing fails.
        """
        paginator = self.s3_client.get_paginator("list_object_versions")
        versions: list[ObjectVersion] = []
        try:
            for page in paginator.paginate(Bucket=bucket_name):
                for v in page.get("Versions", []):
                    versions.append(ObjectVersion(v["Key"], v.get("VersionId") or "null"))
                for m in page.get("DeleteMarkers", []):
                    versions.append(ObjectVersion(m["Key"], m.get("VersionId") or "null"))
        except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as e:
            raise _backend_error("ListObjectVersions", e, bucket_name) from e
        return versions

    def delete_object(self, bucket_name: str, key: str, version_id: str) -> None:
        """
        Delete a single object version.

        Raises:
            BackendError: If the service rejects the deletion.
        """
        try:
            self.s3_client.delete_object(Bucket=bucket_name, Key=key, VersionId=version_id)
        except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as e:
            raise _backend_error("DeleteObject", e, bucket_name) from e

    def delete_bucket(self, bucket_name: str) -> None:
        """
        Delete an (empty) bucket.

        Raises:
            BackendError: If the bucket is not empty, missing, or access is denied.
        """
        try:
            self.s3_client.delete_bucket(Bucket=bucket_name)
        except (botocore.exceptions.ClientError, botocore.exceptions.BotoCoreError) as e:
            raise _backend_error("DeleteBucket", e, bucket_name) from e
