"""Tool definitions and errors handed to the host.

Provides:
- ToolDefinition: Metadata-rich tool definition handed to the host
- ToolError: Standard error class for tool failures
- ErrorCode: Machine-readable codes carried by ToolError
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
import inspect


class ToolCategory(Enum):
    """Categories for organizing tools."""

    PLANNING = "planning"
    OTHER = "other"


@dataclass
class ToolDefinition:
    """Metadata-rich tool definition.

    Attributes:
        name: Tool name (defaults to function name)
        description: Human-readable description
        func: The tool entry point
        label: Display label for the host UI
        parameters: JSON schema of the tool parameters
        category: Tool category for organization
        render_call: Optional renderer for a pending call
        render_result: Optional renderer for a finished call
        is_async: Whether the tool is async
    """

    name: str
    description: str
    func: Callable[..., Any]
    label: str = ""
    parameters: dict[str, Any] = field(default_factory=dict)
    category: ToolCategory = ToolCategory.OTHER
    render_call: Callable[..., str] | None = None
    render_result: Callable[..., str] | None = None
    is_async: bool = False
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Infer is_async and label from the function and name."""
        if inspect.iscoroutinefunction(self.func):
            self.is_async = True
        if not self.label:
            self.label = self.name


class ToolError(Exception):
    """Standard error for tool failures.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        recoverable: Whether the error might be recoverable
        details: Additional error details
        tool_name: Name of the tool that failed
    """

    def __init__(
        self,
        message: str,
        error_code: str = "TOOL_ERROR",
        recoverable: bool = False,
        details: dict[str, Any] | None = None,
        tool_name: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.recoverable = recoverable
        self.details = details or {}
        self.tool_name = tool_name


class ErrorCode:
    """Standard error codes for tool failures."""

    INVALID_INPUT = "INVALID_INPUT"

