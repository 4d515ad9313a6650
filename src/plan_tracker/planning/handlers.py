"""State-transition handlers for the plan tracker.

Each handler takes the current plan (plus action arguments) and returns
an ActionResult holding the user-facing text, the resulting plan and an
optional error tag. Handlers never raise and never mutate their input;
the returned task list is always a fresh list.

Example:
    >>> result = handle_init(["Write tests", "Implement"])
    >>> result = handle_update(result.tasks, 0, TaskStatus.IN_PROGRESS)
    >>> result.tasks[0].status
    <TaskStatus.IN_PROGRESS: 'in_progress'>
"""

from dataclasses import dataclass, field
from typing import Sequence

from plan_tracker.planning.formatting import format_status_report
from plan_tracker.planning.models import Task, TaskStatus


@dataclass
class ActionResult:
    """Outcome of a plan tracker action.

    Attributes:
        text: Human-readable result (starts with "Error: " on failure).
        tasks: The plan after the action.
        error: Machine-readable error tag, None on success.
    """

    text: str
    tasks: list[Task] = field(default_factory=list)
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None


def handle_init(task_names: Sequence[str] | None) -> ActionResult:
    """Create a new plan with every task pending.

    Args:
        task_names: Task names in plan order.

    Returns:
        ActionResult with the new plan, or a "tasks required" error.
    """
    if not task_names:
        return ActionResult(
            text="Error: tasks array required for init",
            tasks=[],
            error="tasks required",
        )
    tasks = [Task(name=name) for name in task_names]
    return ActionResult(
        text=f"Plan initialized with {len(tasks)} tasks.\n{format_status_report(tasks)}",
        tasks=tasks,
    )


def handle_update(
    tasks: Sequence[Task],
    index: int | None,
    status: TaskStatus | None,
) -> ActionResult:
    """Change the status of one task.

    Validation runs in order: missing arguments, empty plan, index range.

    Args:
        tasks: The current plan.
        index: 0-based position of the task to update.
        status: The new status.

    Returns:
        ActionResult with the updated plan, or an error result carrying
        the unchanged plan.
    """
    # index 0 is valid, so absence must be checked explicitly
    if index is None or status is None:
        return ActionResult(
            text="Error: index and status required for update",
            tasks=list(tasks),
            error="index and status required",
        )
    if not tasks:
        return ActionResult(
            text="Error: no plan active. Use init first.",
            tasks=[],
            error="no plan active",
        )
    if index < 0 or index >= len(tasks):
        return ActionResult(
            text=f"Error: index {index} out of range (0-{len(tasks) - 1})",
            tasks=list(tasks),
            error=f"index {index} out of range",
        )

    status = TaskStatus(status)
    updated = [task.with_status(status) if i == index else task for i, task in enumerate(tasks)]
    return ActionResult(
        text=(
            f'Task {index} "{updated[index].name}" → {status.value}\n'
            f"{format_status_report(updated)}"
        ),
        tasks=updated,
    )


def handle_status(tasks: Sequence[Task]) -> ActionResult:
    """Report the current plan without changing it."""
    return ActionResult(text=format_status_report(tasks), tasks=list(tasks))


def handle_clear(tasks: Sequence[Task]) -> ActionResult:
    """Remove the current plan."""
    count = len(tasks)
    text = f"Plan cleared ({count} tasks removed)." if count > 0 else "No plan was active."
    return ActionResult(text=text, tasks=[])
