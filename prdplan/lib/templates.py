"""
Task template catalog.

Each project type maps to an ordered list of task templates. A template's
dependencies name earlier templates by title, so every list must declare
dependencies before dependents.

Defaults live in DEFAULT_TASK_TEMPLATES. A project can replace the list for
one or more types with a templates.yaml next to its prdplan.env:

    project_types:
      api-service:
        - title: API Requirements Analysis
          description: Define API requirements and use cases
          type: requirement
          priority: high
          estimated_hours: 6
          skills: [api-design, analysis]
        - title: API Implementation
          ...
          dependencies: [API Requirements Analysis]

Types not named in the file keep their defaults.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml

from prdplan.decompose.models import TaskTemplate
from prdplan.lib.constants import DEFAULT_PROJECT_TYPE
from prdplan.lib.validate import ValidationError, validate

logger = logging.getLogger(__name__)

TEMPLATES_FILENAME = "templates.yaml"


def _t(title, description, task_type, priority, hours, skills, dependencies=()):
    return TaskTemplate(
        title=title,
        description=description,
        type=task_type,
        priority=priority,
        estimated_hours=hours,
        skills=list(skills),
        dependencies=list(dependencies),
    )


DEFAULT_TASK_TEMPLATES: dict[str, list[TaskTemplate]] = {
    "web-app": [
        _t("Requirements Analysis", "Analyze PRD and create detailed technical requirements",
           "requirement", "high", 8, ["analysis", "documentation"]),
        _t("System Architecture Design", "Design system architecture and component structure",
           "design", "high", 16, ["architecture", "system-design"],
           ["Requirements Analysis"]),
        _t("Database Schema Design", "Design database schema and relationships",
           "design", "high", 8, ["database", "sql"],
           ["System Architecture Design"]),
        _t("API Design", "Design RESTful API endpoints and contracts",
           "design", "high", 12, ["api-design", "rest"],
           ["Database Schema Design"]),
        _t("UI/UX Design", "Create UI mockups and user flow diagrams",
           "design", "medium", 24, ["ui-design", "ux"]),
        _t("Backend Implementation", "Implement backend services and API",
           "implementation", "high", 40, ["backend", "nodejs", "typescript"],
           ["API Design"]),
        _t("Frontend Implementation", "Implement frontend application",
           "implementation", "high", 40, ["frontend", "react", "typescript"],
           ["UI/UX Design", "API Design"]),
        _t("Authentication & Authorization", "Implement user authentication and authorization",
           "implementation", "high", 16, ["security", "authentication"],
           ["Backend Implementation"]),
        _t("Unit Tests", "Write unit tests for all components",
           "test", "high", 24, ["testing", "jest"],
           ["Backend Implementation", "Frontend Implementation"]),
        _t("Integration Tests", "Write integration tests for API endpoints",
           "test", "high", 16, ["testing", "integration"],
           ["Backend Implementation"]),
        _t("E2E Tests", "Write end-to-end tests for critical user flows",
           "test", "medium", 20, ["testing", "e2e", "playwright"],
           ["Frontend Implementation"]),
        _t("Deployment Setup", "Setup CI/CD pipeline and deployment configuration",
           "deployment", "high", 12, ["devops", "ci-cd"],
           ["Unit Tests"]),
        _t("Documentation", "Write technical documentation and user guides",
           "implementation", "medium", 16, ["documentation"],
           ["Frontend Implementation", "Backend Implementation"]),
    ],
    "mobile-app": [
        _t("Requirements Analysis", "Analyze PRD and platform-specific requirements",
           "requirement", "high", 8, ["analysis", "mobile"]),
        _t("Mobile Architecture Design", "Design mobile app architecture and navigation",
           "design", "high", 12, ["mobile-architecture"],
           ["Requirements Analysis"]),
        _t("UI/UX Mobile Design", "Create mobile-specific UI designs and prototypes",
           "design", "high", 24, ["mobile-ui", "ux"]),
        _t("Mobile App Implementation", "Implement mobile application",
           "implementation", "high", 60, ["mobile", "react-native", "flutter"],
           ["Mobile Architecture Design", "UI/UX Mobile Design"]),
        _t("Platform Integration", "Integrate platform-specific features (push notifications, etc)",
           "implementation", "medium", 16, ["mobile", "platform-apis"],
           ["Mobile App Implementation"]),
        _t("Mobile Testing", "Test on various devices and OS versions",
           "test", "high", 20, ["mobile-testing"],
           ["Mobile App Implementation"]),
        _t("App Store Preparation", "Prepare for app store submission",
           "deployment", "high", 8, ["mobile", "app-store"],
           ["Mobile Testing"]),
    ],
    "api-service": [
        _t("API Requirements Analysis", "Define API requirements and use cases",
           "requirement", "high", 6, ["api-design", "analysis"]),
        _t("API Contract Design", "Design API contracts and OpenAPI specification",
           "design", "high", 8, ["api-design", "openapi"],
           ["API Requirements Analysis"]),
        _t("Service Architecture", "Design service architecture and data flow",
           "design", "high", 8, ["architecture", "microservices"],
           ["API Requirements Analysis"]),
        _t("API Implementation", "Implement API endpoints and business logic",
           "implementation", "high", 32, ["backend", "api"],
           ["API Contract Design", "Service Architecture"]),
        _t("API Testing", "Write comprehensive API tests",
           "test", "high", 16, ["testing", "api-testing"],
           ["API Implementation"]),
        _t("API Documentation", "Generate and review API documentation",
           "implementation", "medium", 8, ["documentation", "api"],
           ["API Implementation"]),
    ],
}


def load_task_templates(config_dir: Optional[Path]) -> dict[str, list[TaskTemplate]]:
    """Load templates.yaml from config_dir, layered over the defaults.

    If config_dir is None or the file doesn't exist, returns defaults.
    An unparsable or schema-invalid file logs a warning and returns defaults.
    """
    catalog = dict(DEFAULT_TASK_TEMPLATES)
    if config_dir is None:
        return catalog

    path = Path(config_dir) / TEMPLATES_FILENAME
    if not path.exists():
        return catalog

    try:
        data = yaml.safe_load(path.read_text())
        validate(data, "templates")
    except (yaml.YAMLError, ValidationError) as e:
        logger.warning(f"Failed to load {path}: {e}")
        return catalog

    for project_type, templates in data["project_types"].items():
        catalog[project_type] = [TaskTemplate.from_dict(t) for t in templates]
        logger.debug(f"Loaded {len(templates)} {project_type} templates from {path}")

    return catalog


def templates_for(catalog: dict[str, list[TaskTemplate]], project_type: str) -> list[TaskTemplate]:
    """Templates for a project type, falling back to web-app."""
    if project_type in catalog:
        return catalog[project_type]
    return catalog[DEFAULT_PROJECT_TYPE]
