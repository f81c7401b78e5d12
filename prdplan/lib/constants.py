"""Shared constants for prdplan."""

import re

# Must match the enums in schemas/*.schema.json
TASK_TYPES = ("requirement", "design", "implementation", "test", "deployment", "review")
PRIORITIES = ("critical", "high", "medium", "low")

DEFAULT_PROJECT_TYPE = "web-app"

# Section types whose list items become functional / user-story requirements
REQUIREMENT_SECTION_TYPES = ("requirements", "user-stories", "acceptance-criteria")

# Keywords that tie a requirement to a template task
ENRICHMENT_KEYWORDS = ("auth", "api", "database", "ui", "test", "deploy", "security")

INTEGRATION_RE = re.compile(r'integrate\s+(?:with\s+)?(\w+)', re.IGNORECASE)

MAX_TITLE_LEN = 50
MAX_RELATED_DESCRIPTION_LEN = 100
