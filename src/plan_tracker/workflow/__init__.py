"""Host session integration: lifecycle events, results and collaborator protocols."""

from plan_tracker.workflow.events import SessionEvent, TextContent, ToolExecutionResult
from plan_tracker.workflow.host import (
    ExtensionContext,
    ExtensionHost,
    MarkupTheme,
    PlainTheme,
    SessionManager,
    Theme,
    UIContext,
)

__all__ = [
    "SessionEvent",
    "TextContent",
    "ToolExecutionResult",
    "ExtensionContext",
    "ExtensionHost",
    "MarkupTheme",
    "PlainTheme",
    "SessionManager",
    "Theme",
    "UIContext",
]
