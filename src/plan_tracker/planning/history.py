"""Plan reconstruction from session branch history.

The plan is never kept across session forks. Every plan tracker tool
result stores its PlanTrackerDetails in the branch, and the current plan
is rebuilt by folding those payloads in order:

- entries that are not plan tracker tool results are skipped
- payloads carrying an error are skipped (their task list is never applied)
- every other payload replaces the plan outright (last write wins)

Example:
    >>> entries = [
    ...     BranchEntry.tool_result("plan_tracker", PlanTrackerDetails(
    ...         action=PlanAction.INIT, tasks=[Task("A")])),
    ... ]
    >>> reconstruct_from_history(entries)
    [Task(name='A', status=<TaskStatus.PENDING: 'pending'>)]
"""

from dataclasses import dataclass
from functools import reduce
from typing import Any, Iterable

from plan_tracker.constants import TOOL_NAME
from plan_tracker.planning.models import PlanTrackerDetails, Task

MESSAGE_ENTRY = "message"
TOOL_RESULT_ROLE = "toolResult"


@dataclass
class ToolMessage:
    """The message part of a branch entry.

    ``details`` is either a PlanTrackerDetails or the dict a host
    persisted it as.
    """

    role: str
    tool_name: str | None = None
    details: PlanTrackerDetails | dict[str, Any] | None = None


@dataclass
class BranchEntry:
    """One entry of a session branch, as supplied by the host."""

    type: str
    message: ToolMessage | None = None

    @classmethod
    def tool_result(
        cls,
        tool_name: str,
        details: PlanTrackerDetails | dict[str, Any] | None,
    ) -> "BranchEntry":
        """Create a tool result entry."""
        return cls(
            type=MESSAGE_ENTRY,
            message=ToolMessage(role=TOOL_RESULT_ROLE, tool_name=tool_name, details=details),
        )


def is_plan_tracker_result(entry: BranchEntry, tool_name: str = TOOL_NAME) -> bool:
    """Check whether a branch entry is a result of the plan tracker tool."""
    if entry.type != MESSAGE_ENTRY:
        return False
    message = entry.message
    return (
        message is not None
        and message.role == TOOL_RESULT_ROLE
        and message.tool_name == tool_name
    )


def _carries_error(details: PlanTrackerDetails | dict[str, Any]) -> bool:
    if isinstance(details, PlanTrackerDetails):
        return bool(details.error)
    return bool(details.get("error"))


def apply_details(
    tasks: list[Task],
    details: PlanTrackerDetails | dict[str, Any] | None,
) -> list[Task]:
    """Reduce one recorded payload into the plan.

    Args:
        tasks: The plan reconstructed so far.
        details: The recorded payload.

    Returns:
        ``tasks`` unchanged if the payload is missing or carries an error,
        otherwise a copy of the payload's task list.
    """
    if details is None or _carries_error(details):
        return tasks
    if isinstance(details, dict):
        # only successful records are parsed
        details = PlanTrackerDetails.from_dict(details)
    return list(details.tasks)


def reconstruct_from_history(
    entries: Iterable[BranchEntry],
    tool_name: str = TOOL_NAME,
) -> list[Task]:
    """Rebuild the plan by replaying a branch's plan tracker results.

    Args:
        entries: Branch entries in chronological order.
        tool_name: Tool name identifying plan tracker results.

    Returns:
        The reconstructed plan (empty if no successful result exists).
    """
    payloads = [
        entry.message.details
        for entry in entries
        if is_plan_tracker_result(entry, tool_name)
    ]
    return reduce(apply_details, payloads, [])
