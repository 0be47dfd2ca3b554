"""Loaders for profile and ruleset documents and the build configuration."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError, RegistryError
from .models import BuildConfig, Profile, RulesetInfo, SiteSettings

logger = logging.getLogger(__name__)

TOML_SUFFIXES = (".toml",)
YAML_SUFFIXES = (".yaml", ".yml")
DOCUMENT_SUFFIXES = TOML_SUFFIXES + YAML_SUFFIXES

BUILD_CONFIG_FILE = "standardkit.yaml"


def load_config_document(path: Path) -> dict[str, Any]:
    """Parse a TOML or YAML document into a nested dictionary.

    Args:
        path: Document path, format chosen by suffix

    Returns:
        Parsed tree (empty for an empty YAML document)

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in DOCUMENT_SUFFIXES:
        msg = f"Unsupported document type: {path}"
        raise ConfigError(msg, details={"path": str(path)})

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Failed to read {path}: {e}"
        raise ConfigError(msg, details={"path": str(path)}) from e

    if suffix in TOML_SUFFIXES:
        try:
            return tomllib.loads(content)
        except tomllib.TOMLDecodeError as e:
            msg = f"Failed to parse TOML {path}: {e}"
            raise ConfigError(msg, details={"path": str(path)}) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        msg = f"Failed to parse YAML {path}: {e}"
        raise ConfigError(msg, details={"path": str(path)}) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Top level of {path} must be a mapping"
        raise ConfigError(msg, details={"path": str(path)})
    return data


def load_profile(path: Path) -> Profile:
    """Load a profile document.

    Raises:
        ConfigError: If the document is malformed or has no profile name
    """
    data = load_config_document(path)
    try:
        return Profile.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid profile {path}: {e}"
        raise ConfigError(msg, details={"path": str(path)}) from e


def load_ruleset(path: Path) -> dict[str, Any]:
    """Load a ruleset document; any tree shape is accepted."""
    return load_config_document(path)


def _unique_by_stem(paths: list[Path], kind: str) -> list[Path]:
    """Drop documents whose stem is already taken by an earlier path.

    ``python.toml`` and ``python.yaml`` would write the same outputs, so only
    the first in sorted order is kept and a warning names the one dropped.
    """
    seen: dict[str, Path] = {}
    for path in paths:
        if path.stem in seen:
            logger.warning(
                "Duplicate %s id '%s' in %s; keeping %s",
                kind.rstrip("s"),
                path.stem,
                path.name,
                seen[path.stem].name,
            )
            continue
        seen[path.stem] = path
    return list(seen.values())


def discover_documents(directory: Path, kind: str) -> list[Path]:
    """List the config documents of a required input directory.

    Args:
        directory: Directory to scan (not recursive)
        kind: Human-readable name used in messages, e.g. ``"profiles"``

    Returns:
        Document paths sorted by file name, one per document id

    Raises:
        RegistryError: If the directory does not exist
    """
    directory = Path(directory)
    if not directory.is_dir():
        msg = f"{kind.capitalize()} directory not found: {directory}"
        raise RegistryError(msg, details={"path": str(directory)})

    documents = sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in DOCUMENT_SUFFIXES
    )
    if not documents:
        logger.warning("No %s files found in %s", kind, directory)
    return _unique_by_stem(documents, kind)


def ruleset_info(path: Path) -> RulesetInfo:
    """Identity of a ruleset document, taken from its file name."""
    return RulesetInfo(id=path.stem, source=path.name)


def load_build_config(root: Path) -> BuildConfig:
    """Resolve the build configuration for a repository root.

    The default layout can be adjusted with an optional ``standardkit.yaml``
    at the root::

        paths:
          guidelines: docs/guidelines
          dist: out
        site:
          title: Acme Standards

    Raises:
        ConfigError: If the configuration file is invalid
    """
    root = Path(root)
    config_path = root / BUILD_CONFIG_FILE
    if not config_path.exists():
        return BuildConfig.from_root(root)

    data = load_config_document(config_path)
    paths = data.get("paths") or {}
    if not isinstance(paths, dict):
        msg = f"'paths' in {config_path} must be a mapping"
        raise ConfigError(msg, details={"path": str(config_path)})

    overrides: dict[str, Any] = {}
    for key in ("guidelines", "profiles", "rulesets", "dist", "generated"):
        if paths.get(key):
            overrides[f"{key}_dir"] = root / str(paths[key])

    try:
        overrides["site"] = SiteSettings.model_validate(data.get("site") or {})
        return BuildConfig.from_root(root, **overrides)
    except ValidationError as e:
        msg = f"Invalid build configuration {config_path}: {e}"
        raise ConfigError(msg, details={"path": str(config_path)}) from e
