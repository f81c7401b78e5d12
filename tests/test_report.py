"""Tests for prdplan.decompose.report module."""

from datetime import datetime

from prdplan.decompose.models import DecompositionResult, Task
from prdplan.decompose.report import render_markdown
from prdplan.decompose.service import decompose


NOW = datetime(2025, 1, 15, 10, 0, 0)

PRD = """# Overview
A customer portal that must serve a million users.

## Requirements
- Users must log in
- Integrate with Stripe
"""


class TestRenderMarkdown:
    """Test render_markdown function."""

    def test_summary_header(self):
        result = decompose({"id": "p1", "name": "Portal", "description": "", "prd": PRD}, now=NOW)
        text = render_markdown(result, title="Portal")
        assert text.startswith("# Portal\n")
        assert "**Project type:** web-app" in text
        assert "**Estimated duration:** 18 days" in text
        assert "**Requirements:** 2" in text
        assert f"**Tasks:** {len(result.tasks)}" in text

    def test_critical_path(self):
        result = decompose({"id": "p1", "name": "Portal", "description": "", "prd": PRD}, now=NOW)
        text = render_markdown(result)
        assert "## Critical Path" in text
        assert "Requirements Analysis -> System Architecture Design -> Database Schema Design" in text

    def test_sections(self):
        result = decompose({"id": "p1", "name": "Portal", "description": "", "prd": PRD}, now=NOW)
        text = render_markdown(result)
        assert "- [critical] REQ-1: Users must log in" in text
        assert "- **Project Complete** (due 2025-02-14, 14 tasks)" in text
        assert "### Stripe Integration" in text
        assert "*design, high, 12h*" in text
        assert "Depends on: UI/UX Design, API Design" in text
        assert "## Risks" in text
        assert "- Scalability requirements may require additional architecture considerations" in text
        assert "## Warnings" not in text

    def test_warnings_and_unknown_dependency(self):
        task = Task(id="t1", project_id="p1", type="review", title="Review", description="",
                    priority="low", dependencies=["gone"])
        result = DecompositionResult([], [task], [], {"t1": ["gone"]}, 0, [], warnings=["something odd"])
        text = render_markdown(result)
        assert "Depends on: gone" in text
        assert "## Warnings\n\n- something odd" in text
        assert "**Project type:** unknown" in text

    def test_empty_result(self):
        text = render_markdown(DecompositionResult([], [], [], {}, 0, []))
        assert "**Tasks:** 0" in text
        assert "## Critical Path" not in text
        assert "## Tasks" not in text
