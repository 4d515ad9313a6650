"""Planning module for tracking plan progress.

Provides the task model, pure action handlers, formatters and the
history replay that rebuilds a plan from session branch entries.

Example:
    >>> from plan_tracker.planning import handle_init, handle_update, TaskStatus
    >>> result = handle_init(["Gather requirements", "Implement feature"])
    >>> result = handle_update(result.tasks, 0, TaskStatus.COMPLETE)
    >>> print(result.text.splitlines()[1])
    Plan: 1/2 complete (0 in progress, 1 pending)
"""

from plan_tracker.planning.models import (
    PlanAction,
    PlanTrackerDetails,
    STATUS_ICONS,
    Task,
    TaskStatus,
)
from plan_tracker.planning.formatting import (
    WidgetData,
    count_by_status,
    current_task,
    format_status_report,
    format_widget_data,
)
from plan_tracker.planning.handlers import (
    ActionResult,
    handle_clear,
    handle_init,
    handle_status,
    handle_update,
)
from plan_tracker.planning.history import (
    BranchEntry,
    ToolMessage,
    apply_details,
    is_plan_tracker_result,
    reconstruct_from_history,
)

__all__ = [
    # Model
    "PlanAction",
    "PlanTrackerDetails",
    "STATUS_ICONS",
    "Task",
    "TaskStatus",
    # Formatting
    "WidgetData",
    "count_by_status",
    "current_task",
    "format_status_report",
    "format_widget_data",
    # Handlers
    "ActionResult",
    "handle_clear",
    "handle_init",
    "handle_status",
    "handle_update",
    # History
    "BranchEntry",
    "ToolMessage",
    "apply_details",
    "is_plan_tracker_result",
    "reconstruct_from_history",
]
