"""
Data models for PRD decomposition.

All records are created in one decomposition pass and live only in memory
unless the caller persists them. DecompositionResult is the only artifact
handed back to callers; refinement returns a new one rather than editing
the old.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


class InvalidInputError(ValueError):
    """Input to decompose/refine is not well-typed.

    Distinct from the degraded-success case where the PRD simply has no
    extractable structure.
    """

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message + (f" at {path}" if path else ""))


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_dt(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


@dataclass
class Project:
    """Project metadata plus the PRD body to decompose."""
    id: str
    name: str
    description: str
    prd: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def body_text(self) -> str:
        """PRD text, falling back to description when the PRD is absent or empty."""
        return self.prd if self.prd else self.description

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "prd": self.prd,
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        return cls(
            id=data["id"],
            name=data["name"],
            description=data["description"],
            prd=data.get("prd"),
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass
class Section:
    """A typed slice of the PRD delimited by a recognised heading."""
    title: str
    content: str
    type: str  # overview, requirements, user-stories, technical, timeline, acceptance-criteria


@dataclass
class Requirement:
    """An atomic need extracted from one PRD list item."""
    id: str
    project_id: str
    type: str          # functional, user-story, technical
    title: str         # REQ-<n>: / TECH-<n>: prefixed
    description: str   # Full list item text
    priority: str      # critical, high, medium, low
    status: str = "pending"
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "status": self.status,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Requirement":
        return cls(
            id=data["id"],
            project_id=data["project_id"],
            type=data["type"],
            title=data["title"],
            description=data["description"],
            priority=data["priority"],
            status=data.get("status", "pending"),
            created_at=_parse_dt(data.get("created_at")) or datetime.now(),
            updated_at=_parse_dt(data.get("updated_at")) or datetime.now(),
        )


@dataclass
class TaskTemplate:
    """Blueprint for a task. Dependencies name other templates by title."""
    title: str
    description: str
    type: str
    priority: str
    estimated_hours: Optional[float] = None
    skills: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "type": self.type,
            "priority": self.priority,
            "estimated_hours": self.estimated_hours,
            "skills": list(self.skills),
            "dependencies": list(self.dependencies),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TaskTemplate":
        return cls(
            title=data["title"],
            description=data["description"],
            type=data["type"],
            priority=data["priority"],
            estimated_hours=data.get("estimated_hours"),
            skills=list(data.get("skills") or []),
            dependencies=list(data.get("dependencies") or []),
        )


@dataclass
class Task:
    """A schedulable unit of work.

    dependencies holds ids of tasks materialized in the same run, without
    duplicates or self references. metadata carries estimated_hours and
    required_skills; ad hoc tasks also carry requirement_id.
    """
    id: str
    project_id: str
    type: str          # requirement, design, implementation, test, deployment, review
    title: str
    description: str
    priority: str
    dependencies: list[str] = field(default_factory=list)
    status: str = "pending"
    assigned_agent: Optional[str] = None  # Left unset; agent assignment is external
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=datetime.now)

    def estimated_hours(self, default: float) -> float:
        hours = self.metadata.get("estimated_hours")
        return hours if hours else default

    def add_dependency(self, task_id: str) -> bool:
        """Append a dependency id. Returns False for duplicates and self references."""
        if task_id == self.id or task_id in self.dependencies:
            return False
        self.dependencies.append(task_id)
        return True

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
            "dependencies": list(self.dependencies),
            "status": self.status,
            "assigned_agent": self.assigned_agent,
            "metadata": dict(self.metadata),
            "created_at": _iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        return cls(
            id=data["id"],
            project_id=data["project_id"],
            type=data["type"],
            title=data["title"],
            description=data["description"],
            priority=data["priority"],
            dependencies=list(data.get("dependencies") or []),
            status=data.get("status", "pending"),
            assigned_agent=data.get("assigned_agent"),
            metadata=dict(data.get("metadata") or {}),
            created_at=_parse_dt(data.get("created_at")) or datetime.now(),
        )


@dataclass
class Milestone:
    """Named group of tasks for one development phase."""
    id: str
    name: str
    description: str
    due_date: datetime
    tasks: list[str] = field(default_factory=list)
    status: str = "pending"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "due_date": _iso(self.due_date),
            "status": self.status,
            "tasks": list(self.tasks),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Milestone":
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description", ""),
            due_date=_parse_dt(data["due_date"]),
            tasks=list(data.get("tasks") or []),
            status=data.get("status", "pending"),
        )


@dataclass(frozen=True)
class DependencyEdge:
    """to_id depends on from_id."""
    from_id: str
    to_id: str

    def to_dict(self) -> dict:
        return {"from": self.from_id, "to": self.to_id}

    @classmethod
    def from_dict(cls, data: dict) -> "DependencyEdge":
        return cls(from_id=data["from"], to_id=data["to"])


@dataclass
class RefinementDelta:
    """Batch of edits applied by refine()."""
    tasks_to_add: list[TaskTemplate] = field(default_factory=list)
    tasks_to_remove: list[str] = field(default_factory=list)
    dependencies_to_add: list[DependencyEdge] = field(default_factory=list)
    dependencies_to_remove: list[DependencyEdge] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.tasks_to_add or self.tasks_to_remove or
            self.dependencies_to_add or self.dependencies_to_remove
        )

    def to_dict(self) -> dict:
        return {
            "tasks_to_add": [t.to_dict() for t in self.tasks_to_add],
            "tasks_to_remove": list(self.tasks_to_remove),
            "dependencies_to_add": [e.to_dict() for e in self.dependencies_to_add],
            "dependencies_to_remove": [e.to_dict() for e in self.dependencies_to_remove],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RefinementDelta":
        return cls(
            tasks_to_add=[TaskTemplate.from_dict(t) for t in data.get("tasks_to_add", [])],
            tasks_to_remove=list(data.get("tasks_to_remove", [])),
            dependencies_to_add=[DependencyEdge.from_dict(e) for e in data.get("dependencies_to_add", [])],
            dependencies_to_remove=[DependencyEdge.from_dict(e) for e in data.get("dependencies_to_remove", [])],
        )


@dataclass
class DecompositionResult:
    """Everything one decomposition (or refinement) produces.

    warnings lists data silently tolerated during this generation:
    dropped template dependencies, no-op refinement edits, rejected edges.
    """
    requirements: list[Requirement]
    tasks: list[Task]
    milestones: list[Milestone]
    dependencies: dict[str, list[str]]
    estimated_duration: int  # Days, critical path plus coordination buffer
    risk_factors: list[str]
    project_type: Optional[str] = None
    warnings: list[str] = field(default_factory=list)

    def task_by_id(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def to_dict(self) -> dict:
        return {
            "project_type": self.project_type,
            "requirements": [r.to_dict() for r in self.requirements],
            "tasks": [t.to_dict() for t in self.tasks],
            "milestones": [m.to_dict() for m in self.milestones],
            "dependencies": {k: list(v) for k, v in self.dependencies.items()},
            "estimated_duration": self.estimated_duration,
            "risk_factors": list(self.risk_factors),
            "warnings": list(self.warnings),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DecompositionResult":
        return cls(
            requirements=[Requirement.from_dict(r) for r in data.get("requirements", [])],
            tasks=[Task.from_dict(t) for t in data.get("tasks", [])],
            milestones=[Milestone.from_dict(m) for m in data.get("milestones", [])],
            dependencies={k: list(v) for k, v in data.get("dependencies", {}).items()},
            estimated_duration=data.get("estimated_duration", 0),
            risk_factors=list(data.get("risk_factors", [])),
            project_type=data.get("project_type"),
            warnings=list(data.get("warnings", [])),
        )
