"""Shared constants for plan-tracker."""

# Tool identity as seen by the host and recorded in branch history
TOOL_NAME = "plan_tracker"
TOOL_LABEL = "Plan Tracker"

# Key of the live progress widget
WIDGET_KEY = "plan_tracker"
