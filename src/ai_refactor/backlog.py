"""Task backlog generation from a finished analysis.

Rules run in a fixed order against the machine context; every rule that
fires emits one task with the next sequential id. The backlog is rebuilt
from scratch on each run, so status edits made between runs are discarded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

from .context import ANALYSIS_VERSION, MachineContext
from .prompts import COMPLEXITY_REFACTOR_PROMPT, TESTING_SETUP_PROMPT
from .report import high_complexity_files

PROJECT_COMPLEXITY_THRESHOLD = 100


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Status(str, Enum):
    PENDING = "pending"
    DONE = "done"


class Effort(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


@dataclass
class Task:
    """One improvement task, ready to be turned into an AI prompt."""

    id: str
    title: str
    priority: Priority
    description: str
    estimated_effort: Effort
    prompt: str
    status: Status = Status.PENDING
    tags: list[str] = field(default_factory=list)
    source_files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "priority": self.priority.value,
            "status": self.status.value,
            "description": self.description,
            "estimatedEffort": self.estimated_effort.value,
            "tags": self.tags,
            "sourceFiles": self.source_files,
            "prompt": self.prompt,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            priority=Priority(data.get("priority", Priority.MEDIUM.value)),
            status=Status(data.get("status", Status.PENDING.value)),
            description=data.get("description", ""),
            estimated_effort=Effort(data.get("estimatedEffort", Effort.MEDIUM.value)),
            tags=list(data.get("tags") or []),
            source_files=list(data.get("sourceFiles") or []),
            prompt=data.get("prompt", ""),
        )


@dataclass
class Backlog:
    """Ordered tasks from one analysis run."""

    generated: str
    tasks: list[Task] = field(default_factory=list)
    version: str = ANALYSIS_VERSION

    def pending(self) -> list[Task]:
        return [t for t in self.tasks if t.status == Status.PENDING]

    def find(self, task_id: str) -> Optional[Task]:
        """Look a task up by id, ignoring case."""
        wanted = task_id.lower()
        return next((t for t in self.tasks if t.id.lower() == wanted), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "generated": self.generated,
            "totalTasks": len(self.tasks),
            "tasks": [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Backlog:
        return cls(
            generated=data.get("generated", ""),
            tasks=[Task.from_dict(t) for t in data.get("tasks", [])],
            version=data.get("version", ANALYSIS_VERSION),
        )


def task_id(n: int) -> str:
    """1 -> "T-001"."""
    return f"T-{n:03d}"


def _testing_rule(context: MachineContext) -> Optional[dict[str, Any]]:
    if context.has_tests:
        return None
    return {
        "title": "Add Testing Framework Setup",
        "priority": Priority.HIGH,
        "description": "Set up a testing framework and create initial test structure",
        "estimated_effort": Effort.MEDIUM,
        "tags": ["testing", "setup"],
        "source_files": ["package.json"],
        "prompt": TESTING_SETUP_PROMPT,
    }


def _complexity_rule(context: MachineContext) -> Optional[dict[str, Any]]:
    if context.complexity <= PROJECT_COMPLEXITY_THRESHOLD:
        return None
    return {
        "title": "Refactor High Complexity Functions",
        "priority": Priority.MEDIUM,
        "description": "Identify and refactor functions with high cyclomatic complexity",
        "estimated_effort": Effort.LARGE,
        "tags": ["refactoring", "complexity"],
        "source_files": high_complexity_files(context.analyses),
        "prompt": COMPLEXITY_REFACTOR_PROMPT,
    }


# Evaluated in this order; new rules go at the end.
TASK_RULES: list[Callable[[MachineContext], Optional[dict[str, Any]]]] = [
    _testing_rule,
    _complexity_rule,
]


def generate_task_backlog(context: MachineContext, generated_at: str) -> Backlog:
    """Run every rule against the context and number the tasks that fire."""
    backlog = Backlog(generated=generated_at)
    for rule in TASK_RULES:
        fields = rule(context)
        if fields is not None:
            backlog.tasks.append(Task(id=task_id(len(backlog.tasks) + 1), **fields))
    return backlog
