"""Guideline fragment parsing and the read-only fragment store."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import FragmentError, MalformedValueError, MissingFieldError
from .models import Fragment

logger = logging.getLogger(__name__)

FRAGMENT_SUFFIX = ".md"

_FRONT_MATTER = re.compile(
    r"\A---[ \t]*\r?\n(?P<header>.*?)\r?\n---[ \t]*(?:\r?\n|\Z)(?P<body>.*)\Z",
    re.DOTALL,
)


def parse_fragment(text: str, source: str = "") -> Fragment:
    """Parse one fragment file into a Fragment.

    The file starts with a YAML front matter block delimited by ``---``
    lines; everything after it is the body.

    Args:
        text: Full file content
        source: File name, used in error messages

    Returns:
        Validated fragment

    Raises:
        MissingFieldError: If there is no header or it has no ``id``
        MalformedValueError: If the header or one of its values is invalid
    """
    match = _FRONT_MATTER.match(text)
    if match is None:
        msg = f"{source or 'fragment'}: missing front matter header with 'id'"
        raise MissingFieldError(msg, details={"field": "id", "source": source})

    try:
        header = yaml.safe_load(match.group("header"))
    except yaml.YAMLError as e:
        msg = f"{source or 'fragment'}: unparseable front matter: {e}"
        raise MalformedValueError(msg, details={"source": source}) from e

    if header is None:
        header = {}
    if not isinstance(header, dict):
        msg = f"{source or 'fragment'}: front matter must be a key-value block"
        raise MalformedValueError(msg, details={"source": source})

    if header.get("id") in (None, ""):
        msg = f"{source or 'fragment'}: missing 'id' in front matter"
        raise MissingFieldError(msg, details={"field": "id", "source": source})

    data: dict[str, Any] = {
        **header,
        "body": match.group("body").strip(),
        "source": source,
    }
    try:
        return Fragment.model_validate(data)
    except ValidationError as e:
        fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        msg = f"{source or 'fragment'}: invalid value for {', '.join(fields)}"
        raise MalformedValueError(
            msg,
            details={"fields": fields, "source": source},
        ) from e


class FragmentStore(Mapping[str, Fragment]):
    """All fragments loaded for one run, keyed by id."""

    def __init__(self, fragments: Iterable[Fragment] = ()) -> None:
        self._fragments: dict[str, Fragment] = {}
        for fragment in fragments:
            if fragment.id in self._fragments:
                kept = self._fragments[fragment.id]
                logger.warning(
                    "Duplicate guideline id '%s' in %s; keeping %s",
                    fragment.id,
                    fragment.source,
                    kept.source,
                )
                continue
            self._fragments[fragment.id] = fragment

    def __getitem__(self, fragment_id: str) -> Fragment:
        return self._fragments[fragment_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)

    def by_priority(self) -> list[Fragment]:
        """All fragments, stably sorted by ascending priority."""
        return sorted(self._fragments.values(), key=lambda f: f.priority)


def load_fragments(directory: Path) -> FragmentStore:
    """Load every fragment file in a directory.

    Files are read in file name order, so when two files declare the same
    id the lexicographically-first one is kept.

    Args:
        directory: Directory holding ``*.md`` fragment files

    Returns:
        Fully populated store, empty when the directory does not exist
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Guidelines directory not found: %s", directory)
        return FragmentStore()

    fragments: list[Fragment] = []
    for path in sorted(directory.glob(f"*{FRAGMENT_SUFFIX}")):
        if not path.is_file():
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping %s: %s", path.name, e)
            continue

        try:
            fragments.append(parse_fragment(text, path.name))
        except FragmentError as e:
            logger.warning("Skipping %s", e)

    return FragmentStore(fragments)
