"""
Requirement extraction and classification.

Every list item in a requirements-like section becomes one Requirement.
Numbering is local to a single call so concurrent decompositions never
share a counter.
"""

import itertools
import logging
import re
import uuid
from datetime import datetime

from prdplan.decompose.models import Requirement, Section
from prdplan.decompose.rules import DEFAULT_PRIORITY, PRIORITY_RULES, first_match
from prdplan.decompose.sections import extract_list_items
from prdplan.lib.constants import MAX_TITLE_LEN, REQUIREMENT_SECTION_TYPES

logger = logging.getLogger(__name__)

FIRST_SENTENCE_RE = re.compile(r'^[^.!?]+')


def requirement_title(item: str) -> str:
    """First sentence of the item, or its start, cut to 50 characters."""
    match = FIRST_SENTENCE_RE.match(item)
    if match:
        return match.group(0)[:MAX_TITLE_LEN].strip()
    return item[:MAX_TITLE_LEN].strip()


def detect_priority(text: str) -> str:
    """Lexical priority: must > should > could, defaulting to medium."""
    return first_match(PRIORITY_RULES, text, DEFAULT_PRIORITY)


def extract_requirements(
    sections: list[Section],
    project_id: str,
    now: datetime | None = None,
) -> list[Requirement]:
    """Turn section list items into Requirement records.

    Functional and user-story requirements come first (REQ-<n>), then
    technical ones (TECH-<n>, always high priority). Both share one
    counter starting at 1.
    """
    now = now or datetime.now()
    counter = itertools.count(1)
    requirements = []

    for section in sections:
        if section.type not in REQUIREMENT_SECTION_TYPES:
            continue
        req_type = "user-story" if section.type == "user-stories" else "functional"
        for item, number in zip(extract_list_items(section.content), counter):
            requirements.append(Requirement(
                id=str(uuid.uuid4()),
                project_id=project_id,
                type=req_type,
                title=f"REQ-{number}: {requirement_title(item)}",
                description=item,
                priority=detect_priority(item),
                created_at=now,
                updated_at=now,
            ))

    for section in sections:
        if section.type != "technical":
            continue
        for item, number in zip(extract_list_items(section.content), counter):
            requirements.append(Requirement(
                id=str(uuid.uuid4()),
                project_id=project_id,
                type="technical",
                title=f"TECH-{number}: {requirement_title(item)}",
                description=item,
                priority="high",
                created_at=now,
                updated_at=now,
            ))

    logger.debug(f"Extracted {len(requirements)} requirements from {len(sections)} sections")
    return requirements
