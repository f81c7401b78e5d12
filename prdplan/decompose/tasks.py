"""
Task generation.

Instantiates the template list for a project type, enriches each task with
the requirements it touches, then adds ad hoc tasks for integrations,
performance and security requirements.
"""

import logging
import uuid
from datetime import datetime

from prdplan.decompose.models import Requirement, Task, TaskTemplate
from prdplan.decompose.rules import contains_any
from prdplan.lib.constants import (
    ENRICHMENT_KEYWORDS,
    INTEGRATION_RE,
    MAX_RELATED_DESCRIPTION_LEN,
)

logger = logging.getLogger(__name__)

_mentions_performance = contains_any("performance", "optimization")
_mentions_security = contains_any("security", "encryption", "compliance")


def is_requirement_relevant(requirement: Requirement, template: TaskTemplate) -> bool:
    """True if requirement and template share any enrichment keyword."""
    req_text = requirement.description.lower()
    template_text = f"{template.title} {template.description}".lower()
    return any(k in req_text and k in template_text for k in ENRICHMENT_KEYWORDS)


def enrich_description(template: TaskTemplate, requirements: list[Requirement]) -> str:
    """Template description plus a "Related Requirements" list, if any match."""
    relevant = [r for r in requirements if is_requirement_relevant(r, template)]
    if not relevant:
        return template.description

    lines = [template.description, "", "Related Requirements:"]
    for req in relevant:
        lines.append(f"- {req.title}: {req.description[:MAX_RELATED_DESCRIPTION_LEN]}...")
    return "\n".join(lines) + "\n"


def task_from_template(
    template: TaskTemplate,
    project_id: str,
    description: str | None = None,
    now: datetime | None = None,
) -> Task:
    """Materialize a task from a template. Dependencies are resolved by the caller."""
    return Task(
        id=str(uuid.uuid4()),
        project_id=project_id,
        type=template.type,
        title=template.title,
        description=template.description if description is None else description,
        priority=template.priority,
        metadata={
            "estimated_hours": template.estimated_hours,
            "required_skills": list(dict.fromkeys(template.skills)),
        },
        created_at=now or datetime.now(),
    )


def resolve_dependencies(
    task: Task,
    names: list[str],
    title_to_id: dict[str, str],
    warnings: list[str],
) -> None:
    """Add dependencies named by title, dropping (and reporting) unknown names."""
    for name in names:
        dep_id = title_to_id.get(name)
        if dep_id is None:
            message = f"Task '{task.title}': dependency '{name}' not found, edge dropped"
            logger.warning(message)
            warnings.append(message)
            continue
        task.add_dependency(dep_id)


def _ad_hoc_task(project_id, requirement, title, description, priority, hours, skills, now) -> Task:
    return Task(
        id=str(uuid.uuid4()),
        project_id=project_id,
        type="implementation",
        title=title,
        description=description,
        priority=priority,
        metadata={
            "requirement_id": requirement.id,
            "estimated_hours": hours,
            "required_skills": skills,
        },
        created_at=now,
    )


def generate_requirement_tasks(
    requirements: list[Requirement],
    project_id: str,
    now: datetime | None = None,
) -> list[Task]:
    """Ad hoc tasks for integration, performance and security requirements.

    One task per triggering requirement; none of them have dependencies.
    """
    now = now or datetime.now()
    tasks = []

    for req in requirements:
        match = INTEGRATION_RE.search(req.description)
        if match:
            target = match.group(1)
            target = target[:1].upper() + target[1:]
            tasks.append(_ad_hoc_task(
                project_id, req,
                title=f"{target} Integration",
                description=f"Implement integration with {target} as specified in {req.title}",
                priority="high" if req.priority == "critical" else "medium",
                hours=16,
                skills=["integration"],
                now=now,
            ))

        if _mentions_performance(req.description):
            tasks.append(_ad_hoc_task(
                project_id, req,
                title="Performance Optimization",
                description=f"Optimize application performance to meet requirements in {req.title}",
                priority="high",
                hours=24,
                skills=["performance"],
                now=now,
            ))

        if _mentions_security(req.description):
            tasks.append(_ad_hoc_task(
                project_id, req,
                title="Security Implementation",
                description=f"Implement security measures for {req.title}",
                priority="critical",
                hours=20,
                skills=["security"],
                now=now,
            ))

    return tasks


def generate_tasks(
    templates: list[TaskTemplate],
    requirements: list[Requirement],
    project_id: str,
    warnings: list[str] | None = None,
    now: datetime | None = None,
) -> list[Task]:
    """Instantiate templates in order, then append requirement-driven tasks.

    A template may only depend on templates listed before it; names that
    don't resolve are dropped and reported through warnings.
    """
    warnings = warnings if warnings is not None else []
    now = now or datetime.now()
    tasks = []
    title_to_id: dict[str, str] = {}

    for template in templates:
        task = task_from_template(
            template,
            project_id,
            description=enrich_description(template, requirements),
            now=now,
        )
        resolve_dependencies(task, template.dependencies, title_to_id, warnings)
        tasks.append(task)
        title_to_id[template.title] = task.id

    extra = generate_requirement_tasks(requirements, project_id, now=now)
    tasks.extend(extra)

    logger.debug(f"Generated {len(templates)} template tasks and {len(extra)} ad hoc tasks")
    return tasks
