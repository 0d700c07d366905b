"""Runtime configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace

from bucket_nuke.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"
DEFAULT_MAX_BUCKETS = 5
DEFAULT_PROTECTED_NAMES: tuple[str, ...] = ("backup", "do-not-delete", "console")


@dataclass(frozen=True)
class SelectionRules:
    """Limits a selection must satisfy before it can be confirmed."""

    max_buckets: int = DEFAULT_MAX_BUCKETS
    protected_names: tuple[str, ...] = DEFAULT_PROTECTED_NAMES

    def __post_init__(self) -> None:
        if self.max_buckets < 1:
            raise ConfigError(
                f"Maximum bucket count must be at least 1, got {self.max_buckets}"
            )


@dataclass
class NukeConfig:
    """Configuration settings for a bucket-nuke run."""

    region: str | None = None
    profile: str | None = None
    endpoint_url: str | None = None
    max_attempts: int = 3
    skip_delete_on_empty_failure: bool = True
    rules: SelectionRules = field(default_factory=SelectionRules)

    @classmethod
    def from_environment(cls) -> NukeConfig:
        """
        Create configuration from environment variables.

        Reads AWS_REGION / AWS_DEFAULT_REGION, BUCKET_NUKE_ENDPOINT_URL,
        BUCKET_NUKE_MAX_BUCKETS and BUCKET_NUKE_PROTECTED_NAMES. Credentials
        and profiles are left to the boto3 session chain.

        Raises:
            ConfigError: If a numeric setting cannot be parsed.
        """
        region = os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION")
        endpoint_url = os.environ.get("BUCKET_NUKE_ENDPOINT_URL") or None

        raw_max = os.environ.get("BUCKET_NUKE_MAX_BUCKETS", "")
        max_buckets = DEFAULT_MAX_BUCKETS
        if raw_max:
            max_buckets = parse_max_buckets(raw_max)

        raw_protected = os.environ.get("BUCKET_NUKE_PROTECTED_NAMES")
        if raw_protected is None:
            protected = DEFAULT_PROTECTED_NAMES
        else:
            protected = split_names(raw_protected)
            if not protected:
                logger.warning("BUCKET_NUKE_PROTECTED_NAMES is empty; no names are protected")

        return cls(
            region=region,
            endpoint_url=endpoint_url,
            rules=SelectionRules(max_buckets=max_buckets, protected_names=protected),
        )

    def with_rules(
        self,
        max_buckets: int | None = None,
        extra_protected: list[str] | None = None,
    ) -> NukeConfig:
        """Return a copy of this config with overridden selection rules."""
        protected = self.rules.protected_names
        for name in extra_protected or []:
            if name and name not in protected:
                protected = protected + (name,)
        rules = SelectionRules(
            max_buckets=self.rules.max_buckets if max_buckets is None else max_buckets,
            protected_names=protected,
        )
        return replace(self, rules=rules)


def parse_max_buckets(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Invalid maximum bucket count: {value!r}") from None


def split_names(value: str) -> tuple[str, ...]:
    """Split a comma separated list, dropping blanks."""
    return tuple(part.strip() for part in value.split(",") if part.strip())
