"""Tests for tool definitions and tool errors."""

from plan_tracker.tools.registry import (
    ErrorCode,
    ToolCategory,
    ToolDefinition,
    ToolError,
)


def sync_tool(query: str) -> dict:
    return {"query": query}


async def async_tool(query: str) -> dict:
    return {"query": query}


class TestToolDefinition:
    def test_label_defaults_to_name(self):
        definition = ToolDefinition(name="sync_tool", description="Sync", func=sync_tool)
        assert definition.label == "sync_tool"
        assert definition.category == ToolCategory.OTHER
        assert not definition.is_async

    def test_explicit_label_kept(self):
        definition = ToolDefinition(name="p", description="P", func=sync_tool, label="Plan")
        assert definition.label == "Plan"

    def test_detects_async(self):
        definition = ToolDefinition(name="async_tool", description="Async", func=async_tool)
        assert definition.is_async


class TestToolError:
    def test_attributes(self):
        error = ToolError(
            "bad input",
            error_code=ErrorCode.INVALID_INPUT,
            details={"field": "status"},
            tool_name="plan_tracker",
        )
        assert str(error) == "bad input"
        assert error.error_code == "INVALID_INPUT"
        assert error.details == {"field": "status"}
        assert error.tool_name == "plan_tracker"
        assert not error.recoverable

    def test_defaults(self):
        error = ToolError("boom")
        assert error.error_code == "TOOL_ERROR"
        assert error.details == {}
        assert error.tool_name is None
