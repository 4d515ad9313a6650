"""Text and widget projections of a task list.

Pure functions: they read a task list and never modify it.
"""

from dataclasses import dataclass, field
from typing import Sequence

from plan_tracker.planning.models import STATUS_ICONS, Task, TaskStatus


@dataclass
class WidgetData:
    """Compact projection of a plan for the live progress widget.

    Attributes:
        icons: One status icon per task, in plan order.
        complete: Number of complete tasks.
        total: Number of tasks.
        current_name: Name of the task to work on next, or "" if none.
    """

    icons: list[str] = field(default_factory=list)
    complete: int = 0
    total: int = 0
    current_name: str = ""


def count_by_status(tasks: Sequence[Task]) -> dict[str, int]:
    """Return task counts keyed by status value, plus "total"."""
    counts = {"total": 0, **{status.value: 0 for status in TaskStatus}}
    for task in tasks:
        counts["total"] += 1
        counts[task.status.value] += 1
    return counts


def format_status_report(tasks: Sequence[Task]) -> str:
    """Format a multi-line status report for a plan.

    Args:
        tasks: The plan, in order.

    Returns:
        "No plan active." for an empty plan, otherwise a summary line,
        a blank line and one indexed line per task.
    """
    if not tasks:
        return "No plan active."

    counts = count_by_status(tasks)
    lines = [
        f"Plan: {counts['complete']}/{counts['total']} complete "
        f"({counts['in_progress']} in progress, {counts['pending']} pending)",
        "",
    ]
    for i, task in enumerate(tasks):
        lines.append(f"  {STATUS_ICONS[task.status]} [{i}] {task.name}")
    return "\n".join(lines)


def current_task(tasks: Sequence[Task]) -> Task | None:
    """Return the task to work on next.

    The first in-progress task wins; otherwise the first pending task.
    Returns None when every task is complete or the plan is empty.
    """
    for wanted in (TaskStatus.IN_PROGRESS, TaskStatus.PENDING):
        for task in tasks:
            if task.status == wanted:
                return task
    return None


def format_widget_data(tasks: Sequence[Task]) -> WidgetData:
    """Project a plan onto the data shown by the progress widget."""
    if not tasks:
        return WidgetData()

    current = current_task(tasks)
    return WidgetData(
        icons=[STATUS_ICONS[task.status] for task in tasks],
        complete=sum(1 for task in tasks if task.status == TaskStatus.COMPLETE),
        total=len(tasks),
        current_name=current.name if current else "",
    )
