"""Artifact compilers wrapping composed and rendered content into output files."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

import yaml

from .models import Fragment, Profile, ProfileMetadata, RulesetInfo, SiteSettings
from .renderer import RulesetRenderer

JEKYLL_THEME = "just-the-docs/just-the-docs"

LANGUAGE_NAMES = {
    "javascript": "JavaScript",
    "typescript": "TypeScript",
}

TIER_DESCRIPTIONS = [
    ("Production", "Strictest settings for production code"),
    ("Internal", "Moderate settings for internal tools"),
    ("Prototype", "Relaxed settings for rapid prototyping"),
]


def display_name(identifier: str) -> str:
    """Turn a file id or category such as ``python-3.12-production`` into a title.

    Words are split on dashes only, so dots and underscores are kept.
    """
    return " ".join(w[:1].upper() + w[1:] for w in identifier.split("-"))


def front_matter(fields: Mapping[str, Any]) -> list[str]:
    """Jekyll front matter block as lines, followed by a blank line."""
    block = yaml.safe_dump(dict(fields), sort_keys=False, allow_unicode=True)
    return ["---", *block.rstrip("\n").split("\n"), "---", ""]


def language_name(language: str) -> str:
    """Display name of a ruleset language prefix."""
    return LANGUAGE_NAMES.get(language, display_name(language))


class ProfileCompiler:
    """Compiles one profile's composed guidelines into assistant artifacts."""

    def __init__(
        self,
        profile_id: str,
        profile: Profile,
        content: str,
        generated_at: datetime | None = None,
    ) -> None:
        """Initialize compiler.

        Args:
            profile_id: Profile file stem, used as output directory name
            profile: Loaded profile
            content: Composed guideline document
            generated_at: Timestamp recorded in the metadata file
        """
        self.profile_id = profile_id
        self.profile = profile
        self.content = content
        self.generated_at = generated_at or datetime.now(tz=UTC)

    def compile_artifacts(self) -> dict[str, str]:
        """Generate all profile artifacts.

        Returns:
            Dictionary of file names to their content
        """
        return {
            "CLAUDE.md": self.compile_claude_md(),
            ".cursorrules": self.compile_cursor_rules(),
            "guidelines.md": self.content,
            "metadata.json": self.compile_metadata(),
        }

    def compile_claude_md(self) -> str:
        """Instruction file for Claude Code."""
        sections = [
            "<!-- AUTO-GENERATED FROM STANDARDS REPO - DO NOT EDIT -->",
            f"<!-- Profile: {self.profile.name} -->",
            '<!-- Run "stdkit generate" to update -->',
            "",
            "# Guidelines",
            "",
            self.content,
            "",
        ]
        return "\n".join(sections)

    def compile_cursor_rules(self) -> str:
        """Rules file for Cursor; same content under the profile heading."""
        sections = [
            f"# {self.profile.name}",
            "",
            self.profile.description,
            "",
            "---",
            "",
            self.content,
            "",
        ]
        return "\n".join(sections)

    def compile_metadata(self) -> str:
        """JSON description of the generated profile."""
        metadata = ProfileMetadata(
            profile=self.profile.name,
            description=self.profile.description,
            guidelines=list(self.profile.included_ids),
            generated_at=self.generated_at,
        )
        return metadata.model_dump_json(by_alias=True, indent=2)


class RulesetCompiler:
    """Compiles one ruleset into its raw Markdown and site page."""

    def __init__(
        self,
        ruleset: RulesetInfo,
        config: Mapping[str, Any],
        renderer: RulesetRenderer | None = None,
    ) -> None:
        self.ruleset = ruleset
        self.config = config
        self.renderer = renderer or RulesetRenderer()

    @property
    def title(self) -> str:
        return display_name(self.ruleset.id)

    def compile_artifacts(self) -> dict[str, str]:
        """Generate both renderings, keyed by path under the output root."""
        return {
            f"rulesets/{self.ruleset.id}.md": self.compile_markdown(),
            f"site/rulesets/{self.ruleset.id}.md": self.compile_markdown(for_site=True),
        }

    def compile_markdown(self, for_site: bool = False) -> str:
        """Render the ruleset with the generated-document notice.

        Args:
            for_site: Prepend navigation front matter for the site

        Returns:
            Markdown document
        """
        lines: list[str] = []
        if for_site:
            lines.extend(
                front_matter(
                    {"title": self.title, "layout": "default", "parent": "Rulesets"},
                ),
            )
        lines.extend([
            "<!-- AUTO-GENERATED - DO NOT EDIT -->",
            f"<!-- Ruleset: {self.ruleset.source} -->",
            '<!-- Run "stdkit site" to update -->',
            "",
            self.renderer.render(self.config, self.title),
        ])
        return "\n".join(lines)


class SiteCompiler:
    """Compiles the static documentation site pages."""

    def __init__(self, settings: SiteSettings | None = None) -> None:
        self.settings = settings or SiteSettings()

    def compile_artifacts(
        self,
        guidelines: Iterable[Fragment],
        rulesets: Iterable[RulesetInfo],
    ) -> dict[str, str]:
        """Generate every site page except the per-ruleset pages.

        Args:
            guidelines: Fragments in display order
            rulesets: Rulesets to list in the indices

        Returns:
            Dictionary of paths under the site root to their content
        """
        guidelines = list(guidelines)
        rulesets = sorted(rulesets, key=lambda r: r.id)

        artifacts = {
            f"guidelines/{g.id}.md": self.compile_guideline_page(g) for g in guidelines
        }
        artifacts["index.md"] = self.compile_home_index(guidelines, rulesets)
        artifacts["guidelines/index.md"] = self.compile_guidelines_index(guidelines)
        artifacts["rulesets/index.md"] = self.compile_rulesets_index(rulesets)
        artifacts["_config.yml"] = self.compile_jekyll_config()
        return artifacts

    def compile_guideline_page(self, guideline: Fragment) -> str:
        lines = front_matter(
            {"title": guideline.title, "layout": "default", "parent": "Guidelines"},
        )
        lines.extend([guideline.body, ""])
        return "\n".join(lines)

    def compile_home_index(
        self,
        guidelines: list[Fragment],
        rulesets: list[RulesetInfo],
    ) -> str:
        lines = front_matter({"title": "Home", "layout": "default", "nav_order": 1})
        lines.extend([
            f"# {self.settings.title}",
            "",
            self.settings.tagline,
            "",
            "## Quick Links",
            "",
            "- [Guidelines](./guidelines/) - Architectural and implementation standards",
            "- [Rulesets](./rulesets/) - Linting and tooling configurations",
            "",
            "## Guidelines Overview",
            "",
            "| Guideline | Category | Tags |",
            "|-----------|----------|------|",
        ])
        for g in guidelines:
            lines.append(
                f"| [{g.title}](./guidelines/{g.id}.html) | {g.category} "
                f"| {', '.join(g.tags)} |",
            )

        lines.extend([
            "",
            "## Rulesets Overview",
            "",
            "| Ruleset | Language | Tier |",
            "|---------|----------|------|",
        ])
        for r in rulesets:
            lines.append(
                f"| [{display_name(r.id)}](./rulesets/{r.id}.html) "
                f"| {language_name(r.language)} | {display_name(r.tier)} |",
            )
        lines.append("")
        return "\n".join(lines)

    def compile_guidelines_index(self, guidelines: list[Fragment]) -> str:
        """Guidelines grouped by category, in order of first appearance."""
        lines = front_matter({
            "title": "Guidelines",
            "layout": "default",
            "nav_order": 2,
            "has_children": True,
        })
        lines.extend([
            "# Guidelines",
            "",
            "Architectural and implementation standards.",
            "",
        ])

        by_category: dict[str, list[Fragment]] = {}
        for g in guidelines:
            by_category.setdefault(g.category, []).append(g)

        for category, items in by_category.items():
            lines.extend([f"## {display_name(category)}", ""])
            lines.extend(f"- [{g.title}](./{g.id}.html)" for g in items)
            lines.append("")
        return "\n".join(lines)

    def compile_rulesets_index(self, rulesets: list[RulesetInfo]) -> str:
        """Rulesets grouped by their language prefix."""
        lines = front_matter({
            "title": "Rulesets",
            "layout": "default",
            "nav_order": 3,
            "has_children": True,
        })
        lines.extend([
            "# Rulesets",
            "",
            "Linting and tooling configurations at different strictness tiers.",
            "",
            "## Tiers",
            "",
        ])
        lines.extend(f"- **{name}**: {text}" for name, text in TIER_DESCRIPTIONS)
        lines.append("")

        by_language: dict[str, list[RulesetInfo]] = {}
        for r in rulesets:
            by_language.setdefault(r.language, []).append(r)

        for language in sorted(by_language):
            lines.extend([f"## {language_name(language)}", ""])
            lines.extend(
                f"- [{display_name(r.id)}](./{r.id}.html)"
                for r in sorted(by_language[language], key=lambda r: r.id)
            )
            lines.append("")
        return "\n".join(lines)

    def compile_jekyll_config(self) -> str:
        """``_config.yml`` for the just-the-docs theme."""
        config: dict[str, Any] = {
            "title": self.settings.title,
            "description": self.settings.description,
            "remote_theme": JEKYLL_THEME,
        }
        if self.settings.repository_url:
            config["aux_links"] = {"GitHub": [self.settings.repository_url]}
        config.update({
            "footer_content": self.settings.footer or self.settings.title,
            "color_scheme": self.settings.color_scheme,
            "search_enabled": True,
            "search": {"heading_level": 2, "previews": 3},
            "back_to_top": True,
            "back_to_top_text": "Back to top",
        })
        return yaml.safe_dump(config, sort_keys=False, allow_unicode=True)
