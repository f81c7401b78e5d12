"""
prdplan: turn a product requirements document into a schedulable plan.

Usage:
    from prdplan import decompose, refine

    result = decompose({"id": "p1", "name": "Shop", "description": "...", "prd": text})
    result = refine(result, {"tasks_to_remove": [result.tasks[-1].id]})
"""

from prdplan.decompose.models import (
    DecompositionResult,
    DependencyEdge,
    InvalidInputError,
    Milestone,
    Project,
    RefinementDelta,
    Requirement,
    Section,
    Task,
    TaskTemplate,
)
from prdplan.decompose.report import render_markdown
from prdplan.decompose.service import decompose, refine
from prdplan.lib.config import DecomposerConfig, load_config
from prdplan.lib.telemetry import DecompositionPattern, JsonlPatternSink
from prdplan.lib.templates import load_task_templates

__all__ = [
    "DecompositionPattern",
    "DecompositionResult",
    "DecomposerConfig",
    "DependencyEdge",
    "InvalidInputError",
    "JsonlPatternSink",
    "Milestone",
    "Project",
    "RefinementDelta",
    "Requirement",
    "Section",
    "Task",
    "TaskTemplate",
    "decompose",
    "load_config",
    "load_task_templates",
    "refine",
    "render_markdown",
]
