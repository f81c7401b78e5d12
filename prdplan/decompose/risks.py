"""
Risk identification.

Risk rules are (predicate, message) pairs over a RiskContext. Every rule
that fires contributes its message, in rule order.
"""

from dataclasses import dataclass

from prdplan.decompose.models import Project, Requirement, Task
from prdplan.decompose.rules import all_matches, contains_any


@dataclass
class RiskContext:
    text: str  # Lower-cased PRD, description and requirement descriptions
    tasks: list[Task]
    critical_ratio: float = 0.3
    max_direct_dependencies: int = 3


def _text_rule(*needles):
    predicate = contains_any(*needles)
    return lambda ctx: predicate(ctx.text)


def _many_integrations(ctx: RiskContext) -> bool:
    integration_tasks = [t for t in ctx.tasks if "Integration" in t.title]
    return "integration" in ctx.text and len(integration_tasks) > 2


def _mostly_critical(ctx: RiskContext) -> bool:
    critical = [t for t in ctx.tasks if t.priority == "critical"]
    return len(critical) > len(ctx.tasks) * ctx.critical_ratio


def _dependency_heavy(ctx: RiskContext) -> bool:
    return any(len(t.dependencies) > ctx.max_direct_dependencies for t in ctx.tasks)


RISK_RULES = [
    (_text_rule("real-time", "realtime"),
     "Real-time requirements may add complexity and require specialized expertise"),
    (_text_rule("scale", "high volume", "million"),
     "Scalability requirements may require additional architecture considerations"),
    (_many_integrations,
     "Multiple third-party integrations increase complexity and potential points of failure"),
    (_text_rule("compliance", "regulatory"),
     "Compliance requirements may extend timeline and require specialized knowledge"),
    (_text_rule("machine learning", " ai ", " ml "),
     "ML/AI components add uncertainty to timeline and require specialized skills"),
    (_mostly_critical,
     "High percentage of critical tasks indicates limited flexibility in prioritization"),
    (_dependency_heavy,
     "Complex task dependencies may create bottlenecks and delay project completion"),
]


def identify_risks(
    project: Project,
    requirements: list[Requirement],
    tasks: list[Task],
    critical_ratio: float = 0.3,
    max_direct_dependencies: int = 3,
) -> list[str]:
    req_text = " ".join(r.description for r in requirements)
    text = f"{project.prd or ''} {project.description} {req_text}".lower()
    ctx = RiskContext(
        text=text,
        tasks=tasks,
        critical_ratio=critical_ratio,
        max_direct_dependencies=max_direct_dependencies,
    )
    return all_matches(RISK_RULES, ctx)
