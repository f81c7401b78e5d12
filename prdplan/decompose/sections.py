"""
PRD section segmentation and list item extraction.

Splits raw PRD markdown into typed sections by heading, then pulls bullet
and numbered items out of a section body.
"""

import re

from prdplan.decompose.models import Section

# Ordered: the first pattern that matches a line decides its type
SECTION_PATTERNS = [
    (re.compile(r'#+\s*(?:executive\s*)?(?:overview|summary)', re.IGNORECASE), "overview"),
    (re.compile(r'#+\s*(?:functional\s*)?requirements', re.IGNORECASE), "requirements"),
    (re.compile(r'#+\s*user\s*stories', re.IGNORECASE), "user-stories"),
    (re.compile(r'#+\s*technical\s*(?:requirements|details|specifications)', re.IGNORECASE), "technical"),
    (re.compile(r'#+\s*(?:timeline|schedule|milestones)', re.IGNORECASE), "timeline"),
    (re.compile(r'#+\s*(?:acceptance\s*criteria|success\s*metrics)', re.IGNORECASE), "acceptance-criteria"),
]

HEADING_MARKUP_RE = re.compile(r'#+\s*')
BULLET_RE = re.compile(r'^\s*[-*•]\s+')
NUMBERED_RE = re.compile(r'^\s*\d+\.\s+')


def match_section_type(line: str) -> str | None:
    """Return the section type a heading line introduces, or None."""
    for pattern, section_type in SECTION_PATTERNS:
        if pattern.search(line):
            return section_type
    return None


def parse_sections(text: str) -> list[Section]:
    """Split PRD text into sections in document order.

    Lines before the first recognised heading go into an implicit
    "Overview" section, so text without any headings comes back as a
    single Overview holding everything.
    """
    sections = []
    current = None
    current_lines = []

    for line in text.split("\n"):
        section_type = match_section_type(line)

        if section_type:
            if current:
                current.content = "\n".join(current_lines).strip()
                sections.append(current)

            current = Section(
                title=HEADING_MARKUP_RE.sub("", line, count=1).strip(),
                content="",
                type=section_type,
            )
            current_lines = []
            continue

        if current is None:
            current = Section(title="Overview", content="", type="overview")
        current_lines.append(line)

    if current:
        current.content = "\n".join(current_lines).strip()
        sections.append(current)

    return sections


def _is_list_marker(line: str) -> bool:
    return bool(BULLET_RE.match(line) or NUMBERED_RE.match(line))


def extract_list_items(content: str) -> list[str]:
    """Extract bullet and numbered list items from section content.

    Non-blank lines that follow an item without their own marker are
    joined onto it. Prose before the first marker is ignored.
    """
    items = []
    current = ""

    for line in content.split("\n"):
        if _is_list_marker(line):
            if current:
                items.append(current.strip())
            current = NUMBERED_RE.sub("", BULLET_RE.sub("", line, count=1), count=1)
        elif current and line.strip():
            current += " " + line.strip()

    if current:
        items.append(current.strip())

    return items
