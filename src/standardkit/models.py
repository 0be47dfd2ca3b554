"""Core data models for StandardKit."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_CATEGORY = "general"
DEFAULT_PRIORITY = 99


class Fragment(BaseModel):
    """A single named, prioritized unit of guideline text."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique fragment identifier")
    title: str = Field(default="", description="Display title, defaults to id")
    category: str = Field(
        default=DEFAULT_CATEGORY,
        description="Grouping used by the guidelines index",
    )
    priority: int = Field(
        default=DEFAULT_PRIORITY,
        description="Ordering key, lower values sort first",
    )
    tags: list[str] = Field(default_factory=list, description="Free-form tags")
    body: str = Field(default="", description="Markdown body after the header")
    source: str = Field(default="", description="File name the fragment came from")

    @field_validator("id", "title", "category", mode="before")
    @classmethod
    def coerce_scalar_text(cls, v: Any) -> Any:
        """Accept bare YAML numbers where text is expected."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("priority", mode="before")
    @classmethod
    def reject_bool_priority(cls, v: Any) -> Any:
        """Refuse booleans, which would otherwise coerce to 0 or 1."""
        if isinstance(v, bool):
            msg = "Priority must be an integer"
            raise ValueError(msg)
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> Any:
        """Normalize tags given as a comma-separated string."""
        if v is None:
            return []
        if isinstance(v, str):
            return [t.strip() for t in v.strip("[]").split(",") if t.strip()]
        if isinstance(v, list):
            return [str(t) for t in v]
        return v

    @model_validator(mode="before")
    @classmethod
    def default_title(cls, data: Any) -> Any:
        """Fall back to the id when no title is given."""
        if isinstance(data, dict) and not data.get("title") and data.get("id") is not None:
            data = {**data, "title": data["id"]}
        return data


class ProfileInfo(BaseModel):
    """The ``[profile]`` section of a profile document."""

    name: str = Field(..., description="Display name of the profile")
    description: str = Field(default="", description="One-line summary")


class ProfileIncludes(BaseModel):
    """The ``[includes]`` section of a profile document."""

    guidelines: list[str] = Field(
        default_factory=list,
        description="Ordered fragment ids to compose",
    )


class ProfileContext(BaseModel):
    """The optional ``[context]`` section of a profile document."""

    preamble: str | None = Field(default=None, description="Text placed first")


class Profile(BaseModel):
    """A named selection and ordering of fragments plus optional preamble."""

    profile: ProfileInfo
    includes: ProfileIncludes = Field(default_factory=ProfileIncludes)
    context: ProfileContext | None = None

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def description(self) -> str:
        return self.profile.description

    @property
    def included_ids(self) -> list[str]:
        return self.includes.guidelines

    @property
    def preamble(self) -> str:
        if self.context is None or self.context.preamble is None:
            return ""
        return self.context.preamble


class ProfileMetadata(BaseModel):
    """JSON metadata written next to each generated profile."""

    model_config = ConfigDict(populate_by_name=True)

    profile: str
    description: str
    guidelines: list[str]
    generated_at: datetime = Field(..., alias="generatedAt")


class RulesetInfo(BaseModel):
    """Identity of a ruleset derived from its file name."""

    id: str
    source: str

    @property
    def language(self) -> str:
        """Language prefix, e.g. ``python`` for ``python-production``."""
        return self.id.split("-", 1)[0]

    @property
    def tier(self) -> str:
        """Everything after the language prefix, or an empty string."""
        parts = self.id.split("-", 1)
        return parts[1] if len(parts) > 1 else ""


class SiteSettings(BaseModel):
    """Configurable fields of the generated documentation site."""

    title: str = Field(default="Coding Standards", description="Site title")
    description: str = Field(
        default="Composable coding standards and guidelines",
        description="Site description",
    )
    tagline: str = Field(
        default="Composable coding standards and guidelines for our projects.",
        description="Lead paragraph on the home page",
    )
    repository_url: str | None = Field(
        default=None,
        description="Link shown in the upper right navigation",
    )
    footer: str | None = Field(default=None, description="Footer text")
    color_scheme: str = Field(default="light", description="Theme color scheme")


class BuildConfig(BaseModel):
    """Resolved input and output locations for one run."""

    root: Path = Field(..., description="Repository root")
    guidelines_dir: Path = Field(..., description="Guideline fragment files")
    profiles_dir: Path = Field(..., description="Profile documents")
    rulesets_dir: Path = Field(..., description="Ruleset documents")
    dist_dir: Path = Field(..., description="Output root for profile artifacts")
    generated_dir: Path = Field(
        ...,
        description="Output root for rendered rulesets and the site",
    )
    site: SiteSettings = Field(default_factory=SiteSettings)

    @classmethod
    def from_root(cls, root: Path, **overrides: Any) -> BuildConfig:
        """Build the default directory layout under ``root``."""
        root = Path(root)
        values: dict[str, Any] = {
            "root": root,
            "guidelines_dir": root / "guidelines",
            "profiles_dir": root / "profiles",
            "rulesets_dir": root / "rulesets",
            "dist_dir": root / "dist",
            "generated_dir": root / "generated",
        }
        values.update(overrides)
        return cls.model_validate(values)

    @property
    def site_dir(self) -> Path:
        return self.generated_dir / "site"
