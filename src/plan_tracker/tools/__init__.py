"""Tools module for the plan tracker.

Tool System:
    - ToolDefinition: Metadata-rich tool definitions handed to the host
    - ToolError: Standard error class for consistent error handling

Plan Tracker:
    - PlanTracker: Owns a session's live plan and serves tool calls
    - register_plan_tracker: Register the tool and its session event handlers
"""

from plan_tracker.tools.registry import (
    ErrorCode,
    ToolCategory,
    ToolDefinition,
    ToolError,
)
from plan_tracker.tools.plan_tracker import (
    PlanTracker,
    PlanTrackerParams,
    register_plan_tracker,
    render_call,
    render_result,
    render_widget_text,
)

__all__ = [
    # Tool definitions
    "ErrorCode",
    "ToolCategory",
    "ToolDefinition",
    "ToolError",
    # Plan tracker
    "PlanTracker",
    "PlanTrackerParams",
    "register_plan_tracker",
    "render_call",
    "render_result",
    "render_widget_text",
]
