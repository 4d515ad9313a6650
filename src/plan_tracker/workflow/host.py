"""Collaborator interfaces supplied by the host session.

The plan tracker only depends on these protocols: a session manager that
returns the active branch, a UI that can show or hide a widget, a theme
that colors text, and an extension host to register with.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Literal, Protocol, Sequence

from plan_tracker.planning.history import BranchEntry
from plan_tracker.tools.registry import ToolDefinition
from plan_tracker.workflow.events import SessionEvent

ThemeColor = Literal["success", "warning", "error", "dim", "muted", "accent", "toolTitle"]

# A widget renderer produces the widget text for the given theme.
WidgetRenderer = Callable[["Theme"], str]
SessionEventHandler = Callable[[SessionEvent, "ExtensionContext"], Awaitable[None]]


class Theme(Protocol):
    """Applies color tags to text."""

    def fg(self, color: ThemeColor, text: str) -> str: ...

    def bold(self, text: str) -> str: ...


class PlainTheme:
    """Theme that leaves text unstyled."""

    def fg(self, color: ThemeColor, text: str) -> str:
        return text

    def bold(self, text: str) -> str:
        return text


class MarkupTheme:
    """Theme that wraps text in ``[style]...[/style]`` markup tags.

    Args:
        styles: Mapping of theme colors to markup style names. Colors not
            in the mapping are used as style names verbatim.
    """

    DEFAULT_STYLES: dict[str, str] = {
        "success": "green",
        "warning": "yellow",
        "error": "red",
        "dim": "dim",
        "muted": "bright_black",
        "accent": "cyan",
        "toolTitle": "bold",
    }

    def __init__(self, styles: dict[str, str] | None = None) -> None:
        self._styles = {**self.DEFAULT_STYLES, **(styles or {})}

    def fg(self, color: ThemeColor, text: str) -> str:
        style = self._styles.get(color, color)
        return f"[{style}]{text}[/{style}]"

    def bold(self, text: str) -> str:
        return f"[bold]{text}[/bold]"


class SessionManager(Protocol):
    """Source of the active branch's history."""

    def get_branch(self) -> Sequence[BranchEntry]: ...


class UIContext(Protocol):
    """Display surface for persistent widgets."""

    def set_widget(self, key: str, renderer: WidgetRenderer | None) -> None: ...


@dataclass
class ExtensionContext:
    """Per-call context handed to event handlers and tools.

    Attributes:
        session_manager: Source of the active branch
        ui: Display surface (ignored when has_ui is False)
        has_ui: Whether an interactive display is attached
    """

    session_manager: SessionManager
    ui: UIContext | None = None
    has_ui: bool = True

    def __post_init__(self) -> None:
        if self.ui is None:
            self.has_ui = False


class ExtensionHost(Protocol):
    """Host that dispatches session events and tool calls."""

    def on(self, event: SessionEvent, handler: SessionEventHandler) -> Any: ...

    def register_tool(self, definition: ToolDefinition) -> Any: ...
