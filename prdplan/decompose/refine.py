"""
Incremental refinement of a decomposition.

Applies a RefinementDelta to a copy of a prior result, then rebuilds the
dependency map and duration. Requirements, milestones, risk factors and
project type are carried over as-is and may no longer match the edited
task list.

Edits that reference unknown ids are skipped and reported in the new
result's warnings. Edges that would self-reference, duplicate, or close a
cycle are rejected the same way.
"""

import copy
import logging

from prdplan.decompose.graph import build_dependency_map, estimate_duration, would_create_cycle
from prdplan.decompose.models import DecompositionResult, RefinementDelta, Task
from prdplan.decompose.tasks import resolve_dependencies, task_from_template
from prdplan.lib.config import DecomposerConfig

logger = logging.getLogger(__name__)


def _warn(warnings: list[str], message: str) -> None:
    logger.warning(message)
    warnings.append(message)


def _add_tasks(tasks: list[Task], delta: RefinementDelta, warnings: list[str]) -> None:
    project_id = tasks[0].project_id if tasks else ""
    for template in delta.tasks_to_add:
        title_to_id = {}
        for t in tasks:
            title_to_id.setdefault(t.title, t.id)  # First match wins
        task = task_from_template(template, project_id)
        resolve_dependencies(task, template.dependencies, title_to_id, warnings)
        tasks.append(task)
        logger.debug(f"Added task '{task.title}' ({task.id})")


def _remove_tasks(tasks: list[Task], delta: RefinementDelta, warnings: list[str]) -> list[Task]:
    to_remove = set(delta.tasks_to_remove)
    known = {t.id for t in tasks}
    for task_id in delta.tasks_to_remove:
        if task_id not in known:
            _warn(warnings, f"Cannot remove task {task_id}: not found")

    remaining = [t for t in tasks if t.id not in to_remove]
    for task in remaining:
        task.dependencies = [d for d in task.dependencies if d not in to_remove]
    return remaining


def _add_edges(tasks: list[Task], delta: RefinementDelta, warnings: list[str]) -> None:
    by_id = {t.id: t for t in tasks}
    for edge in delta.dependencies_to_add:
        target = by_id.get(edge.to_id)
        if target is None or edge.from_id not in by_id:
            _warn(warnings, f"Cannot add dependency {edge.from_id} -> {edge.to_id}: task not found")
            continue
        if edge.from_id in target.dependencies:
            _warn(warnings, f"Dependency {edge.from_id} -> {edge.to_id} already exists")
            continue
        if would_create_cycle(build_dependency_map(tasks), edge.from_id, edge.to_id):
            _warn(warnings, f"Rejected dependency {edge.from_id} -> {edge.to_id}: would create a cycle")
            continue
        target.add_dependency(edge.from_id)


def _remove_edges(tasks: list[Task], delta: RefinementDelta, warnings: list[str]) -> None:
    by_id = {t.id: t for t in tasks}
    for edge in delta.dependencies_to_remove:
        target = by_id.get(edge.to_id)
        if target is None or edge.from_id not in target.dependencies:
            _warn(warnings, f"Cannot remove dependency {edge.from_id} -> {edge.to_id}: not found")
            continue
        target.dependencies = [d for d in target.dependencies if d != edge.from_id]


def apply_refinement(
    result: DecompositionResult,
    delta: RefinementDelta,
    config: DecomposerConfig | None = None,
) -> DecompositionResult:
    """Return a new result with delta applied and graph/duration recomputed.

    Order: add tasks, remove tasks, add edges, remove edges. The input
    result is not modified.
    """
    config = config or DecomposerConfig()
    warnings: list[str] = []
    tasks = copy.deepcopy(result.tasks)

    _add_tasks(tasks, delta, warnings)
    tasks = _remove_tasks(tasks, delta, warnings)
    _add_edges(tasks, delta, warnings)
    _remove_edges(tasks, delta, warnings)

    dependencies = build_dependency_map(tasks)
    duration = estimate_duration(
        tasks,
        dependencies,
        hours_per_day=config.hours_per_day,
        default_task_hours=config.default_task_hours,
        buffer=config.coordination_buffer,
    )

    return DecompositionResult(
        requirements=copy.deepcopy(result.requirements),
        tasks=tasks,
        milestones=copy.deepcopy(result.milestones),
        dependencies=dependencies,
        estimated_duration=duration,
        risk_factors=list(result.risk_factors),
        project_type=result.project_type,
        warnings=warnings,
    )
