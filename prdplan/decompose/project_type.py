"""Project type detection from PRD keywords."""

from prdplan.decompose.models import Project, Section
from prdplan.decompose.rules import PROJECT_TYPE_RULES, first_match
from prdplan.lib.constants import DEFAULT_PROJECT_TYPE


def detect_project_type(sections: list[Section], project: Project) -> str:
    """Classify as mobile-app, api-service or web-app (the default)."""
    content = " ".join(s.content for s in sections)
    text = f"{content} {project.name} {project.description}".lower()
    return first_match(PROJECT_TYPE_RULES, text, DEFAULT_PROJECT_TYPE)
