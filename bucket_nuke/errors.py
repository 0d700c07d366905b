"""Exception hierarchy for bucket-nuke.

Every error carries the process exit code the command line maps it to.
"""

from __future__ import annotations


class BucketNukeError(Exception):
    """Base class for all bucket-nuke errors."""

    exit_code = 1


class ConfigError(BucketNukeError):
    """Raised for invalid environment or command line settings."""

    exit_code = 2


class BackendError(BucketNukeError):
    """
    A storage backend call failed.

    Attributes:
        operation: Name of the S3 operation that failed (e.g. 'ListBuckets').
        bucket: Bucket the call targeted, if any.
        code: Error code reported by the service, if any.
    """

    exit_code = 1

    def __init__(
        self,
        operation: str,
        reason: str,
        bucket: str | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(reason)
        self.operation = operation
        self.reason = reason
        self.bucket = bucket
        self.code = code

    def __str__(self) -> str:
        return self.reason


class ValidationError(BucketNukeError):
    """
    A selection violated one of the selection rules.

    Recoverable: the operator is prompted again.
    """


class CancellationError(BucketNukeError):
    """The operator declined or aborted the run."""

    exit_code = 1
