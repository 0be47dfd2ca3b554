"""Build orchestration: load inputs, compile artifacts and write them."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from .compiler import ProfileCompiler, RulesetCompiler, SiteCompiler
from .composer import compose
from .config import discover_documents, load_profile, load_ruleset, ruleset_info
from .models import BuildConfig, RulesetInfo
from .store import load_fragments

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """What a build produced."""

    written: list[Path] = field(default_factory=list)
    profiles: list[str] = field(default_factory=list)
    rulesets: list[str] = field(default_factory=list)
    guidelines: list[str] = field(default_factory=list)

    def merge(self, other: BuildReport) -> BuildReport:
        return BuildReport(
            written=self.written + other.written,
            profiles=self.profiles + other.profiles,
            rulesets=self.rulesets + other.rulesets,
            guidelines=self.guidelines + other.guidelines,
        )


class ArtifactWriter:
    """Writes compiled artifacts below an output directory."""

    def __init__(self, output_dir: Path, dry_run: bool = False) -> None:
        """Initialize writer.

        Args:
            output_dir: Directory artifact paths are relative to
            dry_run: Record paths without touching the filesystem
        """
        self.output_dir = Path(output_dir)
        self.dry_run = dry_run

    def write(self, artifacts: dict[str, str]) -> list[Path]:
        """Write all artifacts, creating parent directories as needed.

        Returns:
            Paths written (or that would be written in dry-run mode)
        """
        written: list[Path] = []
        for relative_path, content in artifacts.items():
            target = self.output_dir / relative_path
            if not self.dry_run:
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content, encoding="utf-8")
            written.append(target)
        return written


def generate_profiles(
    config: BuildConfig,
    *,
    dry_run: bool = False,
    now: datetime | None = None,
) -> BuildReport:
    """Compose every profile and write its assistant artifacts.

    The fragment store is loaded in full before any profile is composed.

    Args:
        config: Resolved build locations
        dry_run: Compile without writing
        now: Generation timestamp, defaults to the current UTC time

    Returns:
        Build report

    Raises:
        RegistryError: If the profiles directory is missing
        ConfigError: If a profile document is malformed
    """
    profile_paths = discover_documents(config.profiles_dir, "profiles")

    logger.info("Loading guidelines from %s", config.guidelines_dir)
    store = load_fragments(config.guidelines_dir)
    logger.info("Loaded %d guidelines", len(store))

    generated_at = now or datetime.now(tz=UTC)
    report = BuildReport()
    for path in profile_paths:
        profile = load_profile(path)
        profile_id = path.stem
        content = compose(profile, store)

        compiler = ProfileCompiler(profile_id, profile, content, generated_at)
        writer = ArtifactWriter(config.dist_dir / "profiles" / profile_id, dry_run)
        report.written.extend(writer.write(compiler.compile_artifacts()))
        report.profiles.append(profile_id)
        logger.info("Generated profile: %s", profile_id)

    return report


def generate_site(config: BuildConfig, *, dry_run: bool = False) -> BuildReport:
    """Render every ruleset and build the documentation site.

    Args:
        config: Resolved build locations
        dry_run: Compile without writing

    Returns:
        Build report

    Raises:
        RegistryError: If the rulesets directory is missing
        ConfigError: If a ruleset document is malformed
    """
    ruleset_paths = discover_documents(config.rulesets_dir, "rulesets")
    report = BuildReport()

    generated_writer = ArtifactWriter(config.generated_dir, dry_run)
    rulesets: list[RulesetInfo] = []
    for path in ruleset_paths:
        info = ruleset_info(path)
        compiler = RulesetCompiler(info, load_ruleset(path))
        report.written.extend(generated_writer.write(compiler.compile_artifacts()))
        rulesets.append(info)
        report.rulesets.append(info.id)
        logger.info("Generated ruleset: %s", info.id)

    store = load_fragments(config.guidelines_dir)
    guidelines = store.by_priority()

    site = SiteCompiler(config.site)
    site_writer = ArtifactWriter(config.site_dir, dry_run)
    report.written.extend(site_writer.write(site.compile_artifacts(guidelines, rulesets)))
    report.guidelines.extend(g.id for g in guidelines)
    logger.info("Site generated at %s", config.site_dir)

    return report


def build_all(config: BuildConfig, *, dry_run: bool = False) -> BuildReport:
    """Generate profile artifacts, ruleset pages and the site."""
    return generate_profiles(config, dry_run=dry_run).merge(
        generate_site(config, dry_run=dry_run),
    )
