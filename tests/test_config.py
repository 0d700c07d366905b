"""Tests for configuration loading."""

import pytest

from bucket_nuke.config import DEFAULT_PROTECTED_NAMES, NukeConfig, SelectionRules
from bucket_nuke.errors import ConfigError


class TestFromEnvironment:
    def test_defaults(self):
        config = NukeConfig.from_environment()
        assert config.region is None
        assert config.endpoint_url is None
        assert config.rules.max_buckets == 5
        assert config.rules.protected_names == DEFAULT_PROTECTED_NAMES
        assert config.skip_delete_on_empty_failure is True

    def test_reads_region_and_endpoint(self, monkeypatch):
        monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
        monkeypatch.setenv("BUCKET_NUKE_ENDPOINT_URL", "http://localhost:9000")
        config = NukeConfig.from_environment()
        assert config.region == "eu-west-1"
        assert config.endpoint_url == "http://localhost:9000"

    def test_aws_region_wins(self, monkeypatch):
        monkeypatch.setenv("AWS_REGION", "us-west-2")
        monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
        assert NukeConfig.from_environment().region == "us-west-2"

    def test_reads_selection_rules(self, monkeypatch):
        monkeypatch.setenv("BUCKET_NUKE_MAX_BUCKETS", "3")
        monkeypatch.setenv("BUCKET_NUKE_PROTECTED_NAMES", "prod, , keep")
        rules = NukeConfig.from_environment().rules
        assert rules.max_buckets == 3
        assert rules.protected_names == ("prod", "keep")

    def test_invalid_max_buckets(self, monkeypatch):
        monkeypatch.setenv("BUCKET_NUKE_MAX_BUCKETS", "lots")
        with pytest.raises(ConfigError):
            NukeConfig.from_environment()


class TestSelectionRules:
    def test_rejects_non_positive_maximum(self):
        with pytest.raises(ConfigError):
            SelectionRules(max_buckets=0)


class TestWithRules:
    def test_adds_protected_names_without_duplicates(self):
        config = NukeConfig().with_rules(extra_protected=["prod", "backup", "prod"])
        assert config.rules.protected_names == DEFAULT_PROTECTED_NAMES + ("prod",)

    def test_overrides_maximum_and_keeps_other_fields(self):
        original = NukeConfig(region="eu-west-1")
        config = original.with_rules(max_buckets=2)
        assert config.rules.max_buckets == 2
        assert config.region == "eu-west-1"
        assert original.rules.max_buckets == 5
