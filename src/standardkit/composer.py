"""Guideline composition for profiles."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .models import Fragment, Profile

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n---\n\n"


def resolve(profile: Profile, store: Mapping[str, Fragment]) -> list[Fragment]:
    """Resolve a profile's included ids against the store.

    Unknown ids are logged once each and dropped. The result is stably
    sorted by priority, so equal priorities keep inclusion order.
    """
    resolved: list[Fragment] = []
    for fragment_id in profile.included_ids:
        fragment = store.get(fragment_id)
        if fragment is None:
            logger.warning(
                "Guideline '%s' not found (profile '%s')",
                fragment_id,
                profile.name,
            )
            continue
        resolved.append(fragment)

    return sorted(resolved, key=lambda f: f.priority)


def compose(profile: Profile, store: Mapping[str, Fragment]) -> str:
    """Compose the guideline document for a profile.

    Args:
        profile: Profile naming the fragments to include
        store: Fully loaded fragment store

    Returns:
        Preamble, a rule, then the fragment bodies joined by rules, trimmed
    """
    body = SECTION_SEPARATOR.join(f.body for f in resolve(profile, store))
    return "\n".join([profile.preamble, "", "---", "", body]).strip()
