"""
Decomposition entry points.

decompose() turns a project's PRD into requirements, tasks, milestones, a
dependency map, a duration estimate and risk factors. refine() applies a
batch of task/edge edits to a prior result.

Both either return a complete result or raise before returning anything.
Mapping input is validated against the project/delta JSON Schemas first.
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Optional

from prdplan.decompose.graph import build_dependency_map, estimate_duration
from prdplan.decompose.milestones import generate_milestones
from prdplan.decompose.models import (
    DecompositionResult,
    InvalidInputError,
    Project,
    RefinementDelta,
)
from prdplan.decompose.project_type import detect_project_type
from prdplan.decompose.refine import apply_refinement
from prdplan.decompose.requirements import extract_requirements
from prdplan.decompose.risks import identify_risks
from prdplan.decompose.sections import parse_sections
from prdplan.decompose.tasks import generate_tasks
from prdplan.lib.config import DecomposerConfig
from prdplan.lib.telemetry import PatternSink, build_pattern, emit_pattern
from prdplan.lib.templates import DEFAULT_TASK_TEMPLATES, templates_for
from prdplan.lib.validate import ValidationError, validate

logger = logging.getLogger(__name__)


def coerce_project(project) -> Project:
    """Accept a Project or a mapping; raise InvalidInputError if ill-typed."""
    if isinstance(project, Mapping):
        data = dict(project)
        try:
            validate(data, "project")
        except ValidationError as e:
            raise InvalidInputError(f"Invalid project: {e.message}", e.path) from None
        return Project.from_dict(data)

    if not isinstance(project, Project):
        raise InvalidInputError(f"Expected Project or mapping, got {type(project).__name__}")

    for field_name in ("id", "name", "description"):
        if not isinstance(getattr(project, field_name), str):
            raise InvalidInputError(f"Project {field_name} must be a string", field_name)
    if project.prd is not None and not isinstance(project.prd, str):
        raise InvalidInputError("Project prd must be a string or None", "prd")
    return project


def coerce_delta(delta) -> RefinementDelta:
    """Accept a RefinementDelta, a mapping or None (empty delta)."""
    if delta is None:
        return RefinementDelta()
    if isinstance(delta, RefinementDelta):
        return delta
    if isinstance(delta, Mapping):
        data = dict(delta)
        try:
            validate(data, "delta")
        except ValidationError as e:
            raise InvalidInputError(f"Invalid refinement delta: {e.message}", e.path) from None
        return RefinementDelta.from_dict(data)
    raise InvalidInputError(f"Expected RefinementDelta or mapping, got {type(delta).__name__}")


def decompose(
    project,
    config: Optional[DecomposerConfig] = None,
    templates: Optional[dict] = None,
    pattern_sink: Optional[PatternSink] = None,
    now: Optional[datetime] = None,
) -> DecompositionResult:
    """Decompose a project's PRD into a schedulable work breakdown.

    Args:
        project: Project, or mapping with id, name, description and optional prd
        config: Scheduling and risk tunables (defaults if None)
        templates: Template lists by project type, layered over the built-in defaults
        pattern_sink: Optional callable receiving one DecompositionPattern
        now: Reference time for timestamps and milestone due dates

    Raises:
        InvalidInputError: If project is not well-typed
    """
    project = coerce_project(project)
    config = config or DecomposerConfig()
    catalog = {**DEFAULT_TASK_TEMPLATES, **templates} if templates else DEFAULT_TASK_TEMPLATES
    now = now or datetime.now()
    warnings: list[str] = []

    logger.info(f"Starting PRD decomposition for project: {project.name}")

    sections = parse_sections(project.body_text())
    requirements = extract_requirements(sections, project.id, now=now)
    project_type = detect_project_type(sections, project)
    logger.debug(f"{project.name}: {len(sections)} sections, project type {project_type}")

    tasks = generate_tasks(
        templates_for(catalog, project_type),
        requirements,
        project.id,
        warnings=warnings,
        now=now,
    )
    milestones = generate_milestones(
        tasks,
        now=now,
        days_per_task=config.milestone_days_per_task,
        phase_slots=config.milestone_phase_slots,
    )
    dependencies = build_dependency_map(tasks)
    duration = estimate_duration(
        tasks,
        dependencies,
        hours_per_day=config.hours_per_day,
        default_task_hours=config.default_task_hours,
        buffer=config.coordination_buffer,
    )
    risks = identify_risks(
        project,
        requirements,
        tasks,
        critical_ratio=config.critical_task_ratio,
        max_direct_dependencies=config.max_direct_dependencies,
    )

    result = DecompositionResult(
        requirements=requirements,
        tasks=tasks,
        milestones=milestones,
        dependencies=dependencies,
        estimated_duration=duration,
        risk_factors=risks,
        project_type=project_type,
        warnings=warnings,
    )

    logger.info(
        f"Decomposed {project.name}: {len(requirements)} requirements, "
        f"{len(tasks)} tasks, {duration} days, {len(risks)} risks"
    )

    emit_pattern(pattern_sink, build_pattern(project.name, project_type, tasks, now=now))
    return result


def refine(
    result: DecompositionResult,
    delta=None,
    config: Optional[DecomposerConfig] = None,
) -> DecompositionResult:
    """Apply delta to result and return a recomputed result.

    Raises:
        InvalidInputError: If result or delta is not well-typed
    """
    if not isinstance(result, DecompositionResult):
        raise InvalidInputError(f"Expected DecompositionResult, got {type(result).__name__}")
    delta = coerce_delta(delta)

    refined = apply_refinement(result, delta, config=config)
    logger.info(
        f"Refined decomposition: {len(result.tasks)} -> {len(refined.tasks)} tasks, "
        f"{result.estimated_duration} -> {refined.estimated_duration} days"
    )
    return refined
