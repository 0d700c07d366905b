"""
Destructive batch execution.

Buckets are emptied and deleted one after another, in selection order. A
failure is recorded against the bucket and stage where it happened and the
batch moves on to the next bucket. Nothing is rolled back.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Sequence

from bucket_nuke.backend import S3Backend
from bucket_nuke.errors import BackendError

logger = logging.getLogger(__name__)


class Stage(enum.Enum):
    EMPTY = "empty"
    DELETE = "delete"


@dataclass
class BucketOutcome:
    """Result of processing one bucket."""

    bucket: str
    objects_deleted: int = 0
    failed_stage: Stage | None = None
    reason: str | None = None
    delete_attempted: bool = False
    deleted: bool = False

    @property
    def succeeded(self) -> bool:
        return self.failed_stage is None


@dataclass
class RunReport:
    """Outcomes accumulated over a batch run."""

    outcomes: list[BucketOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[BucketOutcome]:
        return [o for o in self.outcomes if o.succeeded]

    @property
    def deleted(self) -> list[BucketOutcome]:
        return [o for o in self.outcomes if o.deleted]

    @property
    def failed(self) -> list[BucketOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    @property
    def total_objects_deleted(self) -> int:
        return sum(o.objects_deleted for o in self.outcomes)


class BatchExecutor:
    """
    Empties and deletes a confirmed list of buckets.

    Attributes:
        backend: Storage backend performing the calls.
        skip_delete_on_empty_failure: When True, a bucket whose empty stage
            failed is not passed to the delete stage.
    """

    def __init__(
        self,
        backend: S3Backend,
        skip_delete_on_empty_failure: bool = True,
    ) -> None:
        """
        Initialize the executor.

        Args:
            backend: Storage backend.
            skip_delete_on_empty_failure: Skip the delete stage after an
                empty failure.
        """
        self.backend = backend
        self.skip_delete_on_empty_failure = skip_delete_on_empty_failure

    def empty_bucket(self, bucket_name: str) -> int:
        """
        Delete every object version and delete marker in a bucket.

        Args:
            bucket_name: Name of the bucket to clear.

        Returns:
            Number of object versions deleted.

        Raises:
            BackendError: If listing or any single deletion fails. Versions
                deleted before the failure stay deleted.
        """
        versions = self.backend.list_object_versions(bucket_name)
        if not versions:
            logger.debug(f"Bucket '{bucket_name}' is already empty")
            return 0

        logger.info(f"Deleting {len(versions)} object versions from {bucket_name}")
        deleted = 0
        for version in versions:
            self.backend.delete_object(bucket_name, version.key, version.version_id)
            deleted += 1
            logger.debug(f"Deleted {version.key!r} ({version.version_id})")
        return deleted

    def process_bucket(self, bucket_name: str) -> BucketOutcome:
        """Run the empty and delete stages for one bucket."""
        outcome = BucketOutcome(bucket=bucket_name)
        logger.info(f"Deleting bucket: {bucket_name}")

        try:
            outcome.objects_deleted = self.empty_bucket(bucket_name)
        except BackendError as e:
            logger.error(f"Error emptying bucket {bucket_name}: {e}")
            outcome.failed_stage = Stage.EMPTY
            outcome.reason = str(e)
            if self.skip_delete_on_empty_failure:
                logger.warning(f"Skipping deletion of bucket {bucket_name}")
                return outcome

        outcome.delete_attempted = True
        try:
            self.backend.delete_bucket(bucket_name)
        except BackendError as e:
            logger.error(f"Error deleting bucket {bucket_name}: {e}")
            if outcome.failed_stage is None:
                outcome.failed_stage = Stage.DELETE
                outcome.reason = str(e)
            return outcome

        outcome.deleted = True
        logger.info(f"Successfully deleted bucket: {bucket_name}")
        return outcome

    def run(self, bucket_names: Sequence[str]) -> RunReport:
        """
        Process every bucket in order, never stopping early.

        Args:
            bucket_names: Confirmed selection.

        Returns:
            Report with one outcome per bucket, in selection order.
        """
        report = RunReport()
        for bucket_name in bucket_names:
            outcome = self.process_bucket(bucket_name)
            report.outcomes.append(outcome)
        return report
