"""Shared test fixtures and utilities for plan-tracker tests.

Provides:
- MockContext for isolating tests from global settings
- In-memory fakes for the host session, UI and extension host
"""

import os
from collections import defaultdict
from typing import Any, Generator

import pytest

from plan_tracker.config import (
    PlanTrackerSettings,
    reload_settings,
    set_context_settings,
    set_settings,
)
from plan_tracker.planning import BranchEntry, Task, TaskStatus
from plan_tracker.tools.registry import ToolDefinition
from plan_tracker.workflow import ExtensionContext, PlainTheme, SessionEvent, ToolExecutionResult


class MockContext:
    """Context manager for isolating tests from global settings.

    Usage:
        with MockContext(show_widget=False) as ctx:
            settings = ctx.settings
    """

    def __init__(self, **settings_kwargs):
        self._settings_kwargs = settings_kwargs
        self._settings: PlanTrackerSettings | None = None
        self._original_env: dict[str, str | None] = {}

    def __enter__(self) -> "MockContext":
        # Clear PLAN_TRACKER_* variables so the environment can't leak in
        for var in list(os.environ):
            if var.startswith("PLAN_TRACKER_"):
                self._original_env[var] = os.environ.pop(var)

        self._settings = PlanTrackerSettings(**self._settings_kwargs)
        set_settings(self._settings)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        set_context_settings(None)
        for var, value in self._original_env.items():
            if value is not None:
                os.environ[var] = value
        reload_settings()

    @property
    def settings(self) -> PlanTrackerSettings:
        if self._settings is None:
            raise RuntimeError("MockContext not entered")
        return self._settings


class FakeSession:
    """In-memory session branch.

    ``append`` records a tool result the way a host persists it;
    ``fork`` returns a new session holding the first ``at`` entries.
    """

    def __init__(self, entries: list[BranchEntry] | None = None):
        self.entries: list[BranchEntry] = list(entries or [])

    def get_branch(self) -> list[BranchEntry]:
        return list(self.entries)

    def append(self, result: ToolExecutionResult, tool_name: str = "plan_tracker") -> None:
        self.entries.append(BranchEntry.tool_result(tool_name, result.details))

    def fork(self, at: int) -> "FakeSession":
        return FakeSession(self.entries[:at])


class FakeUI:
    """Display surface recording the widgets it was given."""

    def __init__(self):
        self.widgets: dict[str, Any] = {}
        self.calls: list[tuple[str, Any]] = []

    def set_widget(self, key: str, renderer) -> None:
        self.calls.append((key, renderer))
        if renderer is None:
            self.widgets.pop(key, None)
        else:
            self.widgets[key] = renderer

    def render(self, key: str = "plan_tracker") -> str | None:
        renderer = self.widgets.get(key)
        return renderer(PlainTheme()) if renderer else None


class FakeHost:
    """Extension host collecting event handlers and tool definitions."""

    def __init__(self):
        self.handlers: dict[SessionEvent, list] = defaultdict(list)
        self.tools: dict[str, ToolDefinition] = {}

    def on(self, event: SessionEvent, handler) -> None:
        self.handlers[event].append(handler)

    def register_tool(self, definition: ToolDefinition) -> None:
        self.tools[definition.name] = definition

    async def emit(self, event: SessionEvent, ctx: ExtensionContext) -> None:
        for handler in self.handlers[event]:
            await handler(event, ctx)


def make_tasks(*statuses: str) -> list[Task]:
    """Build tasks named A, B, C... with the given status values."""
    return [Task(name=chr(ord("A") + i), status=TaskStatus(s)) for i, s in enumerate(statuses)]


@pytest.fixture
def mock_context() -> Generator[MockContext, None, None]:
    """Fixture providing an isolated settings context."""
    with MockContext() as ctx:
        yield ctx


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def ui() -> FakeUI:
    return FakeUI()


@pytest.fixture
def ext_ctx(session: FakeSession, ui: FakeUI) -> ExtensionContext:
    return ExtensionContext(session_manager=session, ui=ui)


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()
