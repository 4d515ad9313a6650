#!/usr/bin/env python
"""Standalone demo for the plan tracker.

This demo drives the plan tracker through a tiny in-memory host:
1. Plan initialization and status updates
2. Error results that leave the plan untouched
3. Widget rendering with color markup
4. Forking the session and rebuilding the plan from branch history

Usage:
    python examples/plan_tracker_demo.py
"""

import asyncio

from plan_tracker import (
    BranchEntry,
    ExtensionContext,
    SessionEvent,
    ToolExecutionResult,
    register_plan_tracker,
)
from plan_tracker.tools import ToolDefinition, render_result
from plan_tracker.workflow import MarkupTheme, PlainTheme


# =============================================================================
# Minimal host
# =============================================================================


class DemoSession:
    """Session holding a single linear branch."""

    def __init__(self, entries: list[BranchEntry] | None = None):
        self.entries = list(entries or [])

    def get_branch(self) -> list[BranchEntry]:
        return list(self.entries)

    def fork(self, at: int) -> "DemoSession":
        return DemoSession(self.entries[:at])


class DemoUI:
    """Prints the widget whenever it changes."""

    def set_widget(self, key, renderer) -> None:
        if renderer is None:
            print(f"  [widget {key} hidden]")
        else:
            print(f"  [widget] {renderer(MarkupTheme())}")


class DemoHost:
    def __init__(self):
        self.handlers: dict[SessionEvent, list] = {}
        self.tools: dict[str, ToolDefinition] = {}

    def on(self, event, handler) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def register_tool(self, definition: ToolDefinition) -> None:
        self.tools[definition.name] = definition

    async def emit(self, event: SessionEvent, ctx: ExtensionContext) -> None:
        for handler in self.handlers.get(event, []):
            await handler(event, ctx)

    async def call(self, ctx: ExtensionContext, session: DemoSession, **params) -> ToolExecutionResult:
        definition = self.tools["plan_tracker"]
        print(f"\n> {definition.render_call(params, PlainTheme())}")
        result = await definition.func(f"call-{len(session.entries)}", params, ctx)
        session.entries.append(BranchEntry.tool_result(definition.name, result.details))
        print(f"  {render_result(result, PlainTheme())}")
        return result


# =============================================================================
# Demo
# =============================================================================


async def main():
    """Run the demo."""
    print("\n" + "#" * 60)
    print("#  Plan Tracker Demo")
    print("#" * 60)

    host = DemoHost()
    tracker = register_plan_tracker(host)
    session = DemoSession()
    ctx = ExtensionContext(session_manager=session, ui=DemoUI())
    await host.emit(SessionEvent.SESSION_START, ctx)

    result = await host.call(ctx, session, action="init", tasks=["Write tests", "Implement", "Document"])
    print(result.text)

    await host.call(ctx, session, action="update", index=0, status="complete")
    await host.call(ctx, session, action="update", index=1, status="in_progress")
    fork_point = len(session.entries)

    result = await host.call(ctx, session, action="update", index=9, status="complete")
    print(f"  {result.text}")

    await host.call(ctx, session, action="update", index=1, status="complete")
    result = await host.call(ctx, session, action="status")
    print(result.text)

    print("\n" + "=" * 60)
    print(f"Forking the session after entry {fork_point}")
    print("=" * 60)
    forked = session.fork(fork_point)
    await host.emit(SessionEvent.SESSION_FORK, ExtensionContext(session_manager=forked, ui=DemoUI()))
    for i, task in enumerate(tracker.tasks):
        print(f"  {task.icon} [{i}] {task.name}")

    print("\n" + "#" * 60)
    print("#  Demo Complete!")
    print("#" * 60 + "\n")


if __name__ == "__main__":
    asyncio.run(main())
