"""
Human-readable rendering of a decomposition.
"""

from prdplan.decompose.graph import critical_path
from prdplan.decompose.models import DecompositionResult
from prdplan.lib.config import DecomposerConfig


def render_markdown(result: DecompositionResult, title: str = "Decomposition", config: DecomposerConfig | None = None) -> str:
    """Render result as markdown: summary, critical path, milestones, tasks, risks."""
    config = config or DecomposerConfig()
    by_id = {t.id: t for t in result.tasks}

    lines = [
        f"# {title}",
        "",
        f"**Project type:** {result.project_type or 'unknown'}",
        f"**Estimated duration:** {result.estimated_duration} days",
        f"**Requirements:** {len(result.requirements)}",
        f"**Tasks:** {len(result.tasks)}",
        "",
    ]

    path = critical_path(
        result.tasks,
        result.dependencies,
        hours_per_day=config.hours_per_day,
        default_task_hours=config.default_task_hours,
    )
    if path:
        lines.extend([
            "## Critical Path",
            "",
            " -> ".join(by_id[task_id].title for task_id in path if task_id in by_id),
            "",
        ])

    if result.requirements:
        lines.extend(["## Requirements", ""])
        for req in result.requirements:
            lines.append(f"- [{req.priority}] {req.title}")
        lines.append("")

    if result.milestones:
        lines.extend(["## Milestones", ""])
        for ms in result.milestones:
            lines.append(f"- **{ms.name}** (due {ms.due_date.date().isoformat()}, {len(ms.tasks)} tasks)")
        lines.append("")

    if result.tasks:
        lines.extend(["## Tasks", ""])
        for task in result.tasks:
            hours = task.metadata.get("estimated_hours")
            hours_display = f", {hours}h" if hours else ""
            lines.append(f"### {task.title}")
            lines.append("")
            lines.append(f"*{task.type}, {task.priority}{hours_display}*")
            if task.dependencies:
                dep_titles = [by_id[d].title if d in by_id else d for d in task.dependencies]
                lines.append(f"Depends on: {', '.join(dep_titles)}")
            lines.append("")

    if result.risk_factors:
        lines.extend(["## Risks", ""])
        for risk in result.risk_factors:
            lines.append(f"- {risk}")
        lines.append("")

    if result.warnings:
        lines.extend(["## Warnings", ""])
        for warning in result.warnings:
            lines.append(f"- {warning}")
        lines.append("")

    return "\n".join(lines)
