"""Tests for StandardKit data models."""

from datetime import UTC, datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from standardkit.models import (
    BuildConfig,
    Fragment,
    Profile,
    ProfileMetadata,
    RulesetInfo,
    SiteSettings,
)


class TestFragment:
    """Test Fragment defaults and validation."""

    def test_defaults(self) -> None:
        """Test title, category and priority defaults."""
        fragment = Fragment(id="naming")
        assert fragment.title == "naming"
        assert fragment.category == "general"
        assert fragment.priority == 99
        assert fragment.tags == []

    def test_explicit_title_kept(self) -> None:
        fragment = Fragment(id="naming", title="Naming Rules")
        assert fragment.title == "Naming Rules"

    def test_numeric_id_is_text(self) -> None:
        fragment = Fragment.model_validate({"id": 42})
        assert fragment.id == "42"
        assert fragment.title == "42"

    def test_tags_from_comma_string(self) -> None:
        fragment = Fragment(id="x", tags="python, testing")
        assert fragment.tags == ["python", "testing"]

    def test_priority_must_be_integer(self) -> None:
        with pytest.raises(ValidationError):
            Fragment.model_validate({"id": "x", "priority": "high"})

    def test_boolean_priority_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Priority must be an integer"):
            Fragment.model_validate({"id": "x", "priority": True})

    def test_fragment_is_immutable(self) -> None:
        fragment = Fragment(id="x")
        with pytest.raises(ValidationError):
            fragment.priority = 1


class TestProfile:
    """Test Profile parsing and accessors."""

    def test_accessors(self) -> None:
        profile = Profile.model_validate({
            "profile": {"name": "Backend", "description": "Services"},
            "includes": {"guidelines": ["a", "b"]},
            "context": {"preamble": "Hello"},
        })
        assert profile.name == "Backend"
        assert profile.description == "Services"
        assert profile.included_ids == ["a", "b"]
        assert profile.preamble == "Hello"

    def test_optional_sections(self) -> None:
        profile = Profile.model_validate({"profile": {"name": "Bare"}})
        assert profile.description == ""
        assert profile.included_ids == []
        assert profile.preamble == ""

    def test_name_required(self) -> None:
        with pytest.raises(ValidationError):
            Profile.model_validate({"profile": {"description": "No name"}})


class TestProfileMetadata:
    """Test metadata serialization."""

    def test_camel_case_timestamp(self) -> None:
        metadata = ProfileMetadata(
            profile="Backend",
            description="Services",
            guidelines=["a"],
            generated_at=datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC),
        )
        data = metadata.model_dump(by_alias=True)
        assert "generatedAt" in data
        assert "generated_at" not in data


class TestRulesetInfo:
    """Test language and tier derivation from ruleset ids."""

    def test_language_and_tier(self) -> None:
        info = RulesetInfo(id="python-production", source="python-production.toml")
        assert info.language == "python"
        assert info.tier == "production"

    def test_multi_part_tier(self) -> None:
        info = RulesetInfo(id="typescript-internal-strict", source="x.toml")
        assert info.language == "typescript"
        assert info.tier == "internal-strict"

    def test_no_tier(self) -> None:
        info = RulesetInfo(id="eslint", source="eslint.toml")
        assert info.language == "eslint"
        assert info.tier == ""


class TestBuildConfig:
    """Test default path layout."""

    def test_from_root(self, tmp_path: Path) -> None:
        config = BuildConfig.from_root(tmp_path)
        assert config.guidelines_dir == tmp_path / "guidelines"
        assert config.profiles_dir == tmp_path / "profiles"
        assert config.rulesets_dir == tmp_path / "rulesets"
        assert config.dist_dir == tmp_path / "dist"
        assert config.site_dir == tmp_path / "generated" / "site"
        assert config.site == SiteSettings()

    def test_overrides(self, tmp_path: Path) -> None:
        config = BuildConfig.from_root(tmp_path, dist_dir=tmp_path / "out")
        assert config.dist_dir == tmp_path / "out"
