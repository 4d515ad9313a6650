"""Event and result types exchanged with the host session.

Session Events:
    - SESSION_START: A session was opened
    - SESSION_SWITCH: The host switched to another session
    - SESSION_FORK: The current branch was forked
    - SESSION_TREE: The user navigated to another point of the session tree

Each of these may change the active branch, so the plan tracker rebuilds
its state on all of them.

Example:
    result = await tracker.execute("call-1", {"action": "status"}, ctx)
    print(result.text)
    session.append(BranchEntry.tool_result("plan_tracker", result.details))
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from plan_tracker.planning.models import PlanTrackerDetails


class SessionEvent(str, Enum):
    """Session lifecycle events that may change the active branch."""

    SESSION_START = "session_start"
    SESSION_SWITCH = "session_switch"
    SESSION_FORK = "session_fork"
    SESSION_TREE = "session_tree"


@dataclass
class TextContent:
    """A text content block of a tool result."""

    text: str
    type: Literal["text"] = "text"


@dataclass
class ToolExecutionResult:
    """Result returned to the host for one tool invocation.

    Attributes:
        content: Content blocks shown to the model and the user
        details: Structured payload the host persists in the branch
    """

    content: list[TextContent] = field(default_factory=list)
    details: PlanTrackerDetails | None = None

    @classmethod
    def text_result(cls, text: str, details: PlanTrackerDetails | None = None) -> "ToolExecutionResult":
        """Create a result with a single text block."""
        return cls(content=[TextContent(text=text)], details=details)

    @property
    def text(self) -> str:
        """Text of the first content block, or "" if there is none."""
        return self.content[0].text if self.content else ""
