"""Plan Tracker - progress tracking for multi-step plans in agent sessions.

The package provides:

- A task model and pure action handlers (init, update, status, clear)
- Formatters for status reports and the live progress widget
- History replay that rebuilds the plan from a session branch
- A tool adapter that wires all of the above to a host session

Plan state is recomputed from branch history on every session event,
so forks and tree navigation always show the plan of the active branch.
"""

from plan_tracker.config import (
    PlanTrackerSettings,
    SettingsContext,
    get_context_settings,
    get_settings,
    reload_settings,
    set_context_settings,
    set_settings,
)
from plan_tracker.planning import (
    ActionResult,
    BranchEntry,
    PlanAction,
    PlanTrackerDetails,
    Task,
    TaskStatus,
    ToolMessage,
    WidgetData,
    format_status_report,
    format_widget_data,
    handle_clear,
    handle_init,
    handle_status,
    handle_update,
    reconstruct_from_history,
)
from plan_tracker.tools import PlanTracker, register_plan_tracker
from plan_tracker.workflow import ExtensionContext, SessionEvent, ToolExecutionResult

__version__ = "0.1.0"

__all__ = [
    # Settings
    "PlanTrackerSettings",
    "SettingsContext",
    "get_context_settings",
    "get_settings",
    "reload_settings",
    "set_context_settings",
    "set_settings",
    # Planning core
    "ActionResult",
    "BranchEntry",
    "PlanAction",
    "PlanTrackerDetails",
    "Task",
    "TaskStatus",
    "ToolMessage",
    "WidgetData",
    "format_status_report",
    "format_widget_data",
    "handle_clear",
    "handle_init",
    "handle_status",
    "handle_update",
    "reconstruct_from_history",
    # Host integration
    "ExtensionContext",
    "PlanTracker",
    "SessionEvent",
    "ToolExecutionResult",
    "register_plan_tracker",
]
