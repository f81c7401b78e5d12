"""
Milestone synthesis.

One milestone per development phase that has tasks, plus a closing
"Project Complete". Due dates follow a flat schedule (days per task spread
across phase slots) and are a rough sketch, independent of the
critical-path estimate.
"""

import math
import uuid
from datetime import datetime, timedelta

from prdplan.decompose.models import Milestone, Task

# (task type, milestone name, phase order)
PHASES = [
    ("requirement", "Requirements Complete", 1),
    ("design", "Design Complete", 2),
    ("implementation", "Implementation Complete", 3),
    ("test", "Testing Complete", 4),
    ("deployment", "Deployment Complete", 5),
]
FINAL_PHASE_ORDER = 6


def milestone_due_date(
    phase_order: int,
    total_tasks: int,
    now: datetime,
    days_per_task: float = 2,
    phase_slots: int = 6,
) -> datetime:
    days_per_phase = math.ceil(total_tasks * days_per_task / phase_slots)
    return now + timedelta(days=days_per_phase * phase_order)


def generate_milestones(
    tasks: list[Task],
    now: datetime | None = None,
    days_per_task: float = 2,
    phase_slots: int = 6,
) -> list[Milestone]:
    now = now or datetime.now()
    total = len(tasks)
    milestones = []

    for task_type, name, order in PHASES:
        phase_tasks = [t.id for t in tasks if t.type == task_type]
        if not phase_tasks:
            continue
        milestones.append(Milestone(
            id=str(uuid.uuid4()),
            name=name,
            description=f"All {task_type} tasks completed",
            due_date=milestone_due_date(order, total, now, days_per_task, phase_slots),
            tasks=phase_tasks,
        ))

    milestones.append(Milestone(
        id=str(uuid.uuid4()),
        name="Project Complete",
        description="All project tasks completed and delivered",
        due_date=milestone_due_date(FINAL_PHASE_ORDER, total, now, days_per_task, phase_slots),
        tasks=[t.id for t in tasks],
    ))

    return milestones
