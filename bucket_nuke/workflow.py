"""Interactive workflow: enumerate, select, confirm, execute."""

from __future__ import annotations

import enum
import logging

from bucket_nuke.backend import S3Backend
from bucket_nuke.errors import BackendError, CancellationError, ValidationError
from bucket_nuke.executor import BatchExecutor, RunReport
from bucket_nuke.prompts import Prompter
from bucket_nuke.validators import ValidatorChain

logger = logging.getLogger(__name__)

SELECT_MESSAGE = "Select buckets to be removed"
CONFIRM_HELP = "There's no turning back from here"


class State(enum.Enum):
    ENUMERATING = "enumerating"
    SELECTING = "selecting"
    CONFIRMING = "confirming"
    EXECUTING = "executing"
    DONE = "done"
    ERROR = "error"
    CANCELLED = "cancelled"


class WorkflowController:
    """
    Drives one interactive deletion run.

    Errors are raised to the caller: BackendError when enumeration fails,
    CancellationError when the operator backs out. Per-bucket failures during
    execution end up in the returned RunReport instead.
    """

    def __init__(
        self,
        backend: S3Backend,
        validators: ValidatorChain,
        executor: BatchExecutor,
        prompter: Prompter,
    ) -> None:
        self.backend = backend
        self.validators = validators
        self.executor = executor
        self.prompter = prompter
        self.state = State.ENUMERATING

    def enumerate(self) -> list[str]:
        self.state = State.ENUMERATING
        logger.info("Finding buckets...")
        try:
            return self.backend.list_buckets()
        except BackendError:
            self.state = State.ERROR
            raise

    def select(self, bucket_names: list[str]) -> list[str]:
        """
        Prompt until the operator submits a valid selection.

        Raises:
            CancellationError: If the prompt is aborted.
        """
        self.state = State.SELECTING
        while True:
            selected = self.prompter.select_buckets(
                SELECT_MESSAGE, bucket_names, self.validators.prompt_validator()
            )
            if selected is None:
                self.state = State.CANCELLED
                raise CancellationError("Selection aborted")

            try:
                self.validators.check(selected)
            except ValidationError as e:
                logger.warning(f"Invalid selection: {e}")
                continue
            return selected

    def confirm(self, selected: list[str]) -> None:
        self.state = State.CONFIRMING
        logger.info(f"Deleting {len(selected)} buckets")
        logger.info("\t - " + "\n\t - ".join(selected))

        confirmed = self.prompter.confirm(
            f"Do you wish to proceed? This action will delete {len(selected)} buckets",
            default=False,
            help_message=CONFIRM_HELP,
        )
        if not confirmed:
            self.state = State.CANCELLED
            raise CancellationError("Quitting")

    def execute(self, selected: list[str]) -> RunReport:
        self.state = State.EXECUTING
        report = self.executor.run(selected)
        self.state = State.DONE
        self._log_summary(report)
        return report

    def run(self) -> RunReport | None:
        """
        Run the whole workflow.

        Returns:
            The execution report, or None when there was nothing to select.

        Raises:
            BackendError: If the bucket listing fails.
            CancellationError: If the operator aborts or declines.
        """
        bucket_names = self.enumerate()
        if not bucket_names:
            self.state = State.DONE
            logger.info("No buckets found.")
            return None

        selected = self.select(bucket_names)
        self.confirm(selected)
        return self.execute(selected)

    def _log_summary(self, report: RunReport) -> None:
        logger.info(f"\n{'=' * 50}")
        logger.info(f"Buckets deleted: {len(report.deleted)}/{len(report.outcomes)}")
        logger.info(f"Object versions deleted: {report.total_objects_deleted}")
        for outcome in report.failed:
            logger.warning(
                f"Failed: {outcome.bucket} ({outcome.failed_stage.value}): {outcome.reason}"
            )
        logger.info(f"{'=' * 50}")
        logger.info("Done!")
