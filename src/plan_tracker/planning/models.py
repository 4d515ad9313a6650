"""Task model for tracked plans.

A plan is an ordered list of tasks. Task identity is positional: two
tasks may share a name, and an index is the only way to address one.
An empty list is the "no active plan" state.

Example:
    >>> tasks = [Task("Write tests"), Task("Implement", TaskStatus.IN_PROGRESS)]
    >>> tasks[1].with_status(TaskStatus.COMPLETE)
    Task(name='Implement', status=<TaskStatus.COMPLETE: 'complete'>)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TaskStatus(str, Enum):
    """Status values for tasks in a plan."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class PlanAction(str, Enum):
    """Actions accepted by the plan tracker tool."""

    INIT = "init"
    UPDATE = "update"
    STATUS = "status"
    CLEAR = "clear"


# Status icons for display
STATUS_ICONS = {
    TaskStatus.COMPLETE: "✓",
    TaskStatus.IN_PROGRESS: "→",
    TaskStatus.PENDING: "○",
}


@dataclass(frozen=True)
class Task:
    """A named unit of work with a three-valued status."""

    name: str
    status: TaskStatus = TaskStatus.PENDING

    @property
    def icon(self) -> str:
        return STATUS_ICONS[self.status]

    def with_status(self, status: TaskStatus) -> "Task":
        """Return a copy of this task with a different status."""
        return Task(name=self.name, status=status)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "status": self.status.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """Create a Task from a dictionary.

        Raises:
            KeyError: If ``name`` is missing.
            ValueError: If ``status`` is not a known status value.
        """
        return cls(
            name=data["name"],
            status=TaskStatus(data.get("status", TaskStatus.PENDING.value)),
        )


@dataclass
class PlanTrackerDetails:
    """Structured payload persisted with every plan tracker tool result.

    The host stores this alongside the tool result message. Replaying
    these payloads in branch order rebuilds the plan.

    Attributes:
        action: The action that produced this payload.
        tasks: The task list after the action (or the preserved list on error).
        error: Machine-readable error tag, None on success.
    """

    action: PlanAction
    tasks: list[Task] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "action": self.action.value,
            "tasks": [task.to_dict() for task in self.tasks],
        }
        if self.error:
            data["error"] = self.error
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlanTrackerDetails":
        return cls(
            action=PlanAction(data["action"]),
            tasks=[Task.from_dict(t) for t in data.get("tasks", [])],
            error=data.get("error") or None,
        )
