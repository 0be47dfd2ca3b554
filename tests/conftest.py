"""Shared fixtures for StandardKit tests."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

ARCHITECTURE_GUIDELINE = """\
---
id: architecture
title: Architecture
category: design
priority: 1
tags: [structure, layering]
---

# Architecture

Keep modules small.
"""

TESTING_GUIDELINE = """\
---
id: testing
title: Testing Standards
category: quality
priority: 10
tags: [pytest]
---

# Testing

Write tests first.
"""

NAMING_GUIDELINE = """\
---
id: naming
category: design
---

# Naming

Use descriptive names.
"""

BACKEND_PROFILE = """\
[profile]
name = "Backend"
description = "Standards for backend services"

[includes]
guidelines = ["testing", "architecture", "ghost"]

[context]
preamble = "Follow these standards."
"""

PYTHON_RULESET = """\
[lint]
select = ["E", "F"]

[lint.rules]
"no-any" = true
"max-len" = 100

[format]
quote-style = "double"
line-length = 88
"""


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo the handler and propagation changes the CLI makes."""
    logger = logging.getLogger("standardkit")
    saved = (logger.handlers[:], logger.level, logger.propagate)
    yield
    logger.handlers, logger.level, logger.propagate = saved


@pytest.fixture
def standards_repo(tmp_path: Path) -> Path:
    """Create a small standards repository with every input kind."""
    guidelines = tmp_path / "guidelines"
    guidelines.mkdir()
    (guidelines / "architecture.md").write_text(ARCHITECTURE_GUIDELINE, encoding="utf-8")
    (guidelines / "testing.md").write_text(TESTING_GUIDELINE, encoding="utf-8")
    (guidelines / "naming.md").write_text(NAMING_GUIDELINE, encoding="utf-8")

    profiles = tmp_path / "profiles"
    profiles.mkdir()
    (profiles / "backend.toml").write_text(BACKEND_PROFILE, encoding="utf-8")

    rulesets = tmp_path / "rulesets"
    rulesets.mkdir()
    (rulesets / "python-production.toml").write_text(PYTHON_RULESET, encoding="utf-8")

    return tmp_path
