"""
Dependency graph and critical-path estimation.

The dependency map is task id -> ids it depends on. Duration is the longest
duration-weighted chain from any root task (one with no dependencies),
scaled by a coordination buffer. Generation never produces cycles, but
refinement inserts arbitrary edges, so the walk still guards against them:
a task already on the current path contributes nothing.
"""

import math

from prdplan.decompose.models import Task

# Digits kept before rounding up; float noise must not add a day
_DURATION_PRECISION = 9


def build_dependency_map(tasks: list[Task]) -> dict[str, list[str]]:
    """Map each task with dependencies to its dependency ids."""
    return {task.id: list(task.dependencies) for task in tasks if task.dependencies}


def _dependents_index(dependency_map: dict[str, list[str]]) -> dict[str, list[str]]:
    """Reverse the dependency map: task id -> tasks that depend on it."""
    dependents: dict[str, list[str]] = {}
    for task_id, deps in dependency_map.items():
        for dep in deps:
            dependents.setdefault(dep, []).append(task_id)
    return dependents


def would_create_cycle(dependency_map: dict[str, list[str]], from_id: str, to_id: str) -> bool:
    """Would making to_id depend on from_id close a cycle?

    True when from_id already (transitively) depends on to_id, or when the
    edge is a self reference.
    """
    if from_id == to_id:
        return True

    stack = [from_id]
    seen = set()
    while stack:
        current = stack.pop()
        if current == to_id:
            return True
        if current in seen:
            continue
        seen.add(current)
        stack.extend(dependency_map.get(current, ()))
    return False


def task_durations(tasks: list[Task], hours_per_day: float = 8, default_task_hours: float = 16) -> dict[str, float]:
    """Per-task duration in days."""
    return {t.id: t.estimated_hours(default_task_hours) / hours_per_day for t in tasks}


def _longest_paths(tasks, dependency_map, durations) -> tuple[dict[str, float], dict[str, str | None]]:
    """Longest path length starting at each reachable task, plus the next hop on it."""
    dependents = _dependents_index(dependency_map)
    lengths: dict[str, float] = {}
    next_hop: dict[str, str | None] = {}
    on_path: set[str] = set()

    def walk(task_id: str) -> float:
        if task_id in on_path:
            return 0.0
        if task_id in lengths:
            return lengths[task_id]

        on_path.add(task_id)
        best, best_id = 0.0, None
        for dependent in dependents.get(task_id, ()):
            length = walk(dependent)
            if length > best:
                best, best_id = length, dependent
        on_path.discard(task_id)

        lengths[task_id] = durations.get(task_id, 0.0) + best
        next_hop[task_id] = best_id
        return lengths[task_id]

    for task in tasks:
        if not task.dependencies:
            walk(task.id)

    return lengths, next_hop


def _roots(tasks: list[Task]) -> list[Task]:
    return [t for t in tasks if not t.dependencies]


def estimate_duration(
    tasks: list[Task],
    dependency_map: dict[str, list[str]],
    hours_per_day: float = 8,
    default_task_hours: float = 16,
    buffer: float = 1.2,
) -> int:
    """Project duration in whole days: longest root chain times buffer, rounded up.

    An empty plan (no tasks, or no root task) is 0 days; any other plan
    with a root is a positive number of days.
    """
    durations = task_durations(tasks, hours_per_day, default_task_hours)
    lengths, _ = _longest_paths(tasks, dependency_map, durations)

    longest = max((lengths[t.id] for t in _roots(tasks)), default=0.0)
    return math.ceil(round(longest * buffer, _DURATION_PRECISION))


def critical_path(
    tasks: list[Task],
    dependency_map: dict[str, list[str]],
    hours_per_day: float = 8,
    default_task_hours: float = 16,
) -> list[str]:
    """Task ids along one longest chain, root first."""
    durations = task_durations(tasks, hours_per_day, default_task_hours)
    lengths, next_hop = _longest_paths(tasks, dependency_map, durations)

    roots = _roots(tasks)
    if not roots:
        return []

    start = max(roots, key=lambda t: lengths[t.id]).id
    path = []
    current = start
    while current is not None and current not in path:
        path.append(current)
        current = next_hop.get(current)
    return path
