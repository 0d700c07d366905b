"""Terminal prompts backed by questionary."""

from __future__ import annotations

from typing import Callable, Sequence

import questionary


class Prompter:
    """Synchronous request/response wrapper around the terminal prompts."""

    def select_buckets(
        self,
        message: str,
        bucket_names: Sequence[str],
        validate: Callable[[Sequence[str]], bool | str],
    ) -> list[str] | None:
        """
        Ask the operator to pick buckets.

        The validator runs on every toggle and submission is refused while it
        returns a message instead of True.

        Returns:
            The selected names, or None if the prompt was aborted.
        """
        return questionary.checkbox(
            message,
            choices=list(bucket_names),
            validate=validate,
        ).ask()

    def confirm(self, message: str, default: bool, help_message: str) -> bool:
        """Ask a yes/no question. An aborted prompt counts as 'no'."""
        answer = questionary.confirm(
            message,
            default=default,
            instruction=f"({help_message}) {'[Y/n]' if default else '[y/N]'} ",
        ).ask()
        return bool(answer)
