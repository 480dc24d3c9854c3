"""Tests for SKILL.md parsing and rendering."""
from skillwright.skills.document import parse_skill_markdown, render_skill_markdown

SKILL_MD = """---
name: python-testing
description: Write and run pytest suites for Python projects.
tags:
  - python
  - testing
---

# python-testing

## About

Testing Python code with pytest.

## Requirements

- Python 3.10+
- pytest installed

### Procedure

1. Install pytest
2. Write tests
3. Run pytest

## Use Cases

```bash
pytest -q
```

## Troubleshooting

Check the rootdir.

## Constraints

No coverage reports.
"""


def test_parse_frontmatter():
    doc = parse_skill_markdown(SKILL_MD)
    assert doc.frontmatter.name == "python-testing"
    assert doc.frontmatter.description == "Write and run pytest suites for Python projects."
    assert doc.frontmatter.tags == ["python", "testing"]
    assert doc.frontmatter.deprecated is False
    assert doc.raw_content == SKILL_MD


def test_parse_sections_by_heading_alias():
    body = parse_skill_markdown(SKILL_MD).body
    assert body.overview == "Testing Python code with pytest."
    assert body.prerequisites == ["Python 3.10+", "pytest installed"]
    assert body.steps == ["Install pytest", "Write tests", "Run pytest"]
    assert body.examples == ["pytest -q"]
    assert body.error_handling == "Check the rootdir."
    assert body.limitations == "No coverage reports."


def test_no_frontmatter():
    doc = parse_skill_markdown("# Just a heading\n\nSome text.")
    assert doc.frontmatter.name == ""
    assert doc.frontmatter.description == ""
    assert doc.body.raw_body.startswith("# Just a heading")


def test_malformed_frontmatter():
    doc = parse_skill_markdown("---\nname: [unclosed\n---\n\n## Overview\n\nText")
    assert doc.frontmatter.name == ""
    assert doc.body.overview == "Text"


def test_unstructured_list_falls_back_to_lines():
    doc = parse_skill_markdown("## Steps\n\nFirst do this\nThen do that\n")
    assert doc.body.steps == ["First do this", "Then do that"]


def test_examples_without_code_blocks():
    doc = parse_skill_markdown("## Examples\n\nRun it twice.\n")
    assert doc.body.examples == ["Run it twice."]


def test_render_then_parse():
    content = render_skill_markdown(
        "git-workflow",
        "Manage git repositories and branches.",
        overview="Day to day git work.",
        prerequisites=["git installed"],
        steps=["Create a branch", "Commit changes"],
        examples=["git checkout -b feature/x"],
        error_handling="Abort the rebase.",
        limitations="No submodules.",
        tags=["git", "vcs"],
    )
    doc = parse_skill_markdown(content)
    assert doc.frontmatter.name == "git-workflow"
    assert doc.frontmatter.description == "Manage git repositories and branches."
    assert doc.frontmatter.tags == ["git", "vcs"]
    assert doc.body.overview == "Day to day git work."
    assert doc.body.prerequisites == ["git installed"]
    assert doc.body.steps == ["Create a branch", "Commit changes"]
    assert doc.body.examples == ["git checkout -b feature/x"]
    assert doc.body.error_handling == "Abort the rebase."
    assert doc.body.limitations == "No submodules."


def test_render_description_needing_block_scalar():
    description = "Use when: the build breaks.\nCovers CI logs."
    content = render_skill_markdown("ci-fix", description)
    assert "description: |" in content
    assert parse_skill_markdown(content).frontmatter.description == description


def test_render_skips_empty_sections():
    content = render_skill_markdown("lint", "Run the linters on a Python project.")
    assert "## Steps" not in content
    assert "## Overview" not in content
    assert content.startswith("---\nname: lint\n")
