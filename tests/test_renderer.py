"""Tests for the ruleset Markdown renderer."""

from collections.abc import Mapping
from datetime import date
from typing import Any

import pytest

from standardkit.renderer import (
    RulesetRenderer,
    SectionKind,
    classify_section,
    format_value,
    render_ruleset,
    title_case,
)


class TestClassifySection:
    """Test the section kind heuristic."""

    @pytest.mark.parametrize(
        ("key", "value", "expected"),
        [
            ("rules", {"no-any": True}, SectionKind.RULE_TABLE),
            ("eslint-rules", {"x": {"nested": 1}}, SectionKind.RULE_TABLE),
            ("require", {"strict": True}, SectionKind.OPTION_TABLE),
            ("compiler-requirements", {"a": 1}, SectionKind.OPTION_TABLE),
            ("format", {"indent": 2, "targets": ["src"]}, SectionKind.FLAT_LIST),
            ("lint", {"rules": {"a": 1}}, SectionKind.NESTED),
            ("empty", {}, SectionKind.NESTED),
        ],
    )
    def test_kinds(self, key: str, value: dict, expected: SectionKind) -> None:
        assert classify_section(key, value) == expected

    def test_rules_wins_over_require(self) -> None:
        assert classify_section("required-rules", {"a": 1}) == SectionKind.RULE_TABLE

    def test_match_is_case_sensitive(self) -> None:
        assert classify_section("Rules", {"a": 1}) == SectionKind.FLAT_LIST

    def test_null_children_ignored(self) -> None:
        assert classify_section("style", {"a": None, "b": 1}) == SectionKind.FLAT_LIST
        assert classify_section("style", {"a": None}) == SectionKind.NESTED


class TestTitleCase:
    """Test heading derivation from key names."""

    def test_dash_and_underscore(self) -> None:
        assert title_case("max-line_length") == "Max Line Length"

    def test_last_dotted_segment(self) -> None:
        assert title_case("tool.ruff") == "Ruff"

    def test_keeps_inner_case(self) -> None:
        assert title_case("typeScript-rules") == "TypeScript Rules"


class TestFormatValue:
    """Test cell and bullet value formatting."""

    def test_scalars(self) -> None:
        assert format_value("error") == "`error`"
        assert format_value(100) == "`100`"
        assert format_value(True) == "`true`"
        assert format_value(False) == "`false`"
        assert format_value(1.5) == "`1.5`"

    def test_date(self) -> None:
        assert format_value(date(2025, 1, 2)) == "`2025-01-02`"

    def test_sequence(self) -> None:
        assert format_value(["a", 1, True]) == "`a`, `1`, `true`"

    def test_mapping_one_level(self) -> None:
        assert format_value({"level": "error", "max": 3}) == "{ level: error, max: 3 }"
        assert format_value({"on": True, "skip": None}) == "{ on: true }"

    def test_nested_mapping_degrades(self) -> None:
        assert format_value({"opt": {"x": 1}}) == "{ opt: {'x': 1} }"


class TestRenderRuleset:
    """Test full document rendering."""

    def test_lint_rules_table(self) -> None:
        config = {"lint": {"rules": {"no-any": True, "max-len": 100}}}
        assert render_ruleset(config, "Demo") == (
            "# Demo\n"
            "\n"
            "## Lint\n"
            "\n"
            "### Rules\n"
            "\n"
            "| Rule | Config |\n"
            "|------|--------|\n"
            "| `no-any` | `true` |\n"
            "| `max-len` | `100` |\n"
        )

    def test_require_renders_option_table(self) -> None:
        result = render_ruleset({"require": {"strict": True}}, "Demo")
        assert "## Require\n\n| Option | Value |\n|--------|-------|\n" in result
        assert "| `strict` | `true` |" in result
        assert "- **strict**" not in result

    def test_flat_list(self) -> None:
        config = {"format": {"targets": ["src", "tests"], "line-length": 88}}
        assert render_ruleset(config, "Demo") == (
            "# Demo\n"
            "\n"
            "## Format\n"
            "\n"
            "- **targets**: `src`, `tests`\n"
            "- **line-length**: `88`\n"
        )

    def test_null_values_skipped(self) -> None:
        config = {
            "lint": None,
            "style": {"indent": None, "quotes": "single"},
            "checks-rules": {"unused": None, "shadow": "warn"},
        }
        result = render_ruleset(config, "Demo")
        assert "Lint" not in result
        assert "indent" not in result
        assert "unused" not in result
        assert "- **quotes**: `single`" in result
        assert "| `shadow` | `warn` |" in result

    def test_top_level_scalars_not_rendered(self) -> None:
        result = render_ruleset({"version": "1.0", "tags": ["a"]}, "Demo")
        assert result == "# Demo\n"

    def test_heading_depth_capped(self) -> None:
        config = {"a": {"b": {"c": {"d": {"e": {"x": 1}}}}}}
        lines = render_ruleset(config, "Deep").split("\n")
        headings = [line for line in lines if line.startswith("#")]
        assert headings == ["# Deep", "## A", "### B", "#### C", "#### D", "#### E"]
        assert "- **x**: `1`" in lines

    def test_insertion_order_preserved(self) -> None:
        config = {"zeta": {"a": 1}, "alpha": {"b": 2}}
        result = render_ruleset(config, "Order")
        assert result.index("## Zeta") < result.index("## Alpha")

    def test_deterministic(self) -> None:
        config = {"lint": {"rules": {"a": 1}, "opts": {"b": [1, 2]}}}
        assert render_ruleset(config, "X") == render_ruleset(config, "X")

    def test_render_sections_without_title(self) -> None:
        result = RulesetRenderer().render_sections({"fmt": {"a": 1}})
        assert result == "## Fmt\n\n- **a**: `1`\n"


class TestCustomClassifier:
    """Test overriding the classification heuristic."""

    def test_injected_classifier(self) -> None:
        def everything_is_a_list(key: str, value: Mapping[str, Any]) -> SectionKind:
            return SectionKind.FLAT_LIST

        renderer = RulesetRenderer(classifier=everything_is_a_list)
        result = renderer.render({"lint-rules": {"a": 1}}, "Custom")
        assert "- **a**: `1`" in result
        assert "| Rule |" not in result
