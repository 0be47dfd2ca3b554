"""StandardKit: composable coding guidelines for AI assistants and docs sites."""

__version__ = "0.1.0"
__author__ = "StandardKit Contributors"
__description__ = "Composable coding guidelines for AI assistants and docs sites"

from .composer import compose
from .models import BuildConfig, Fragment, Profile
from .renderer import RulesetRenderer, SectionKind, classify_section, render_ruleset
from .store import FragmentStore, load_fragments

__all__ = [
    "BuildConfig",
    "Fragment",
    "FragmentStore",
    "Profile",
    "RulesetRenderer",
    "SectionKind",
    "classify_section",
    "compose",
    "load_fragments",
    "render_ruleset",
]
