"""Projection of nested ruleset configuration into Markdown.

Every mapping-valued entry of the tree becomes a section with a heading
derived from its key. How the section body is drawn depends on its
:class:`SectionKind`, which :func:`classify_section` picks from the key name
and the shape of the mapping:

* keys containing ``rules`` become a ``Rule | Config`` table,
* keys containing ``require`` become an ``Option | Value`` table,
* mappings holding only scalars and lists become a bullet list,
* anything else is a nested section rendered one heading level deeper.

Scalars and lists are only ever emitted through their parent's table or
list. ``None`` values are skipped wherever they appear.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from datetime import date, datetime, time
from enum import Enum
from typing import Any

MIN_HEADING_LEVEL = 2
MAX_HEADING_LEVEL = 4


class SectionKind(str, Enum):
    """How a mapping node of a ruleset is rendered."""

    RULE_TABLE = "rule_table"
    OPTION_TABLE = "option_table"
    FLAT_LIST = "flat_list"
    NESTED = "nested"


Classifier = Callable[[str, Mapping[str, Any]], SectionKind]

_TABLE_HEADERS: dict[SectionKind, tuple[str, str]] = {
    SectionKind.RULE_TABLE: ("Rule", "Config"),
    SectionKind.OPTION_TABLE: ("Option", "Value"),
}


def classify_section(key: str, value: Mapping[str, Any]) -> SectionKind:
    """Pick the section kind for a mapping node.

    Key checks are case-sensitive substring matches and win over shape.
    """
    if "rules" in key:
        return SectionKind.RULE_TABLE
    if "require" in key:
        return SectionKind.OPTION_TABLE

    children = [v for v in value.values() if v is not None]
    if children and not any(isinstance(v, Mapping) for v in children):
        return SectionKind.FLAT_LIST
    return SectionKind.NESTED


def title_case(name: str) -> str:
    """Turn ``max-line_length`` into ``Max Line Length``.

    Only the last dotted segment of the name is used.
    """
    segment = name.rsplit(".", 1)[-1] or name
    return " ".join(w[:1].upper() + w[1:] for w in re.split(r"[-_]", segment))


def _plain(value: Any) -> str:
    """Default string form of a value, as used inside code spans."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, list):
        return ",".join(_plain(v) for v in value if v is not None)
    return str(value)


def format_value(value: Any) -> str:
    """Format a table cell or bullet value.

    Scalars become code spans and lists comma-separated code spans. A
    mapping is flattened one level into ``{ key: value, ... }``.
    """
    if isinstance(value, Mapping):
        entries = ", ".join(
            f"{k}: {_plain(v)}" for k, v in value.items() if v is not None
        )
        return f"{{ {entries} }}"
    if isinstance(value, list):
        return ", ".join(f"`{_plain(v)}`" for v in value if v is not None)
    return f"`{_plain(value)}`"


class RulesetRenderer:
    """Renders a ruleset tree section by section."""

    def __init__(self, classifier: Classifier = classify_section) -> None:
        """Initialize renderer.

        Args:
            classifier: Function choosing the section kind of each mapping
        """
        self.classifier = classifier
        self._handlers: dict[
            SectionKind, Callable[[Mapping[str, Any], int], list[str]]
        ] = {
            SectionKind.RULE_TABLE: self._render_rule_table,
            SectionKind.OPTION_TABLE: self._render_option_table,
            SectionKind.FLAT_LIST: self._render_flat_list,
            SectionKind.NESTED: self._render_nested,
        }

    def render(self, config: Mapping[str, Any], title: str) -> str:
        """Render a full document with a top-level title."""
        lines = [f"# {title}", ""]
        lines.extend(self._render_sections(config, MIN_HEADING_LEVEL))
        return "\n".join(lines)

    def render_sections(self, config: Mapping[str, Any]) -> str:
        """Render the sections of a tree without a document title."""
        return "\n".join(self._render_sections(config, MIN_HEADING_LEVEL))

    def _render_sections(self, node: Mapping[str, Any], depth: int) -> list[str]:
        lines: list[str] = []
        for key, value in node.items():
            if not isinstance(value, Mapping):
                continue

            name = str(key)
            kind = self.classifier(name, value)
            heading = "#" * min(depth, MAX_HEADING_LEVEL)
            lines.extend([f"{heading} {title_case(name)}", ""])
            lines.extend(self._handlers[kind](value, depth))
        return lines

    def _render_rule_table(self, value: Mapping[str, Any], depth: int) -> list[str]:
        return self._table(value, _TABLE_HEADERS[SectionKind.RULE_TABLE])

    def _render_option_table(self, value: Mapping[str, Any], depth: int) -> list[str]:
        return self._table(value, _TABLE_HEADERS[SectionKind.OPTION_TABLE])

    def _render_flat_list(self, value: Mapping[str, Any], depth: int) -> list[str]:
        lines = [
            f"- **{k}**: {format_value(v)}" for k, v in value.items() if v is not None
        ]
        lines.append("")
        return lines

    def _render_nested(self, value: Mapping[str, Any], depth: int) -> list[str]:
        return self._render_sections(value, depth + 1)

    def _table(self, value: Mapping[str, Any], headers: tuple[str, str]) -> list[str]:
        left, right = headers
        lines = [
            f"| {left} | {right} |",
            f"|{'-' * (len(left) + 2)}|{'-' * (len(right) + 2)}|",
        ]
        for k, v in value.items():
            if v is None:
                continue
            lines.append(f"| `{k}` | {format_value(v)} |")
        lines.append("")
        return lines


def render_ruleset(
    config: Mapping[str, Any],
    title: str,
    classifier: Classifier = classify_section,
) -> str:
    """Render a ruleset tree as a Markdown document titled ``title``."""
    return RulesetRenderer(classifier).render(config, title)
