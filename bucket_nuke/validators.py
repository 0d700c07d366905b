"""
Selection validators.

Each validator inspects the candidate bucket names and returns a
ValidationOutcome. The chain runs them in a fixed order and stops at the
first rejection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from bucket_nuke.config import SelectionRules
from bucket_nuke.errors import ValidationError

PROTECTED_NAME_MESSAGE = "Cannot delete buckets with protected names"
EMPTY_SELECTION_MESSAGE = "Must select a bucket"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating a selection: valid, or invalid with a reason."""

    reason: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.reason is None

    @classmethod
    def valid(cls) -> ValidationOutcome:
        return cls()

    @classmethod
    def invalid(cls, reason: str) -> ValidationOutcome:
        return cls(reason=reason)


Validator = Callable[[Sequence[str]], ValidationOutcome]


def protected_names_validator(rules: SelectionRules) -> Validator:
    """Reject selections where any name contains a protected substring."""

    def validate(candidates: Sequence[str]) -> ValidationOutcome:
        for name in candidates:
            if any(protected in name for protected in rules.protected_names):
                return ValidationOutcome.invalid(PROTECTED_NAME_MESSAGE)
        return ValidationOutcome.valid()

    return validate


def length_validator(rules: SelectionRules) -> Validator:
    """Reject empty selections and selections above the maximum size."""

    def validate(candidates: Sequence[str]) -> ValidationOutcome:
        length = len(candidates)
        if length > rules.max_buckets:
            return ValidationOutcome.invalid(
                f"Maximum of {rules.max_buckets} selections. You have {length}"
            )
        if length == 0:
            return ValidationOutcome.invalid(EMPTY_SELECTION_MESSAGE)
        return ValidationOutcome.valid()

    return validate


class ValidatorChain:
    """
    Ordered set of selection validators.

    Attributes:
        rules: The selection rules the validators were built from.
    """

    def __init__(self, rules: SelectionRules) -> None:
        self.rules = rules
        self._validators: list[Validator] = [
            protected_names_validator(rules),
            length_validator(rules),
        ]

    def validate(self, candidates: Sequence[str]) -> ValidationOutcome:
        """
        Run every validator in order.

        Args:
            candidates: Bucket names currently selected.

        Returns:
            The first invalid outcome, or a valid outcome if all checks pass.
        """
        for validator in self._validators:
            outcome = validator(candidates)
            if not outcome.is_valid:
                return outcome
        return ValidationOutcome.valid()

    def check(self, candidates: Sequence[str]) -> None:
        """
        Validate and raise on rejection.

        Raises:
            ValidationError: With the reason of the first failing check.
        """
        outcome = self.validate(candidates)
        if not outcome.is_valid:
            raise ValidationError(outcome.reason)

    def prompt_validator(self) -> Callable[[Sequence[str]], bool | str]:
        """Adapt the chain to the prompt convention: True, or an error message."""

        def validate(candidates: Sequence[str]) -> bool | str:
            outcome = self.validate(candidates)
            return True if outcome.is_valid else outcome.reason

        return validate
