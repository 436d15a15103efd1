"""Tests for MergeConfig."""

import pytest
from pydantic import ValidationError

from branchsync.config import DEFAULT_API_URL, ExitCode, MergeConfig


class TestMergeConfig:

    def test_defaults(self):
        config = MergeConfig()
        assert config.api_url == DEFAULT_API_URL
        assert config.close_source_branch is False
        assert config.timeout > 0

    def test_is_immutable(self):
        """Config cannot be changed after it is assembled."""
        config = MergeConfig(source="develop")
        with pytest.raises(ValidationError):
            config.source = "main"

    def test_missing_dependencies(self):
        config = MergeConfig(user="ci-bot", repo_slug="shop")
        assert config.missing_dependencies() == ["password", "repo-owner"]

    def test_no_missing_dependencies(self):
        config = MergeConfig(user="u", password="p", repo_owner="o", repo_slug="s")
        assert config.missing_dependencies() == []

    def test_password_not_in_repr(self):
        config = MergeConfig(user="ci-bot", password="s3cret")
        assert "s3cret" not in repr(config)

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            MergeConfig(timeout=0)


def test_exit_codes_are_distinct():
    values = [code.value for code in ExitCode]
    assert len(values) == len(set(values))
    assert ExitCode.OK == 0
