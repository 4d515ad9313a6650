"""Plan tracker tool for agent sessions.

Wires the pure planning handlers to a host session:
- session lifecycle events rebuild the plan from the active branch
- tool calls dispatch to a handler and swap in the resulting plan
- a persistent widget shows progress while a plan is active

State lives in the ``details`` of each tool result, which the host
persists in the branch. Forking or navigating the session tree therefore
yields the plan as it was on that branch.

Example:
    tracker = register_plan_tracker(host)
    result = await tracker.execute("call-1", {"action": "init", "tasks": ["A", "B"]}, ctx)
    result = await tracker.execute("call-2", {"action": "update", "index": 0, "status": "complete"}, ctx)
"""

from dataclasses import replace
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from plan_tracker.config import PlanTrackerSettings, get_settings
from plan_tracker.constants import TOOL_LABEL
from plan_tracker.logging import Loggers, configure_logging
from plan_tracker.planning import (
    STATUS_ICONS,
    ActionResult,
    PlanAction,
    PlanTrackerDetails,
    Task,
    TaskStatus,
    count_by_status,
    format_widget_data,
    handle_clear,
    handle_init,
    handle_status,
    handle_update,
    reconstruct_from_history,
)
from plan_tracker.tools.registry import ErrorCode, ToolCategory, ToolDefinition, ToolError
from plan_tracker.workflow.events import SessionEvent, ToolExecutionResult
from plan_tracker.workflow.host import ExtensionContext, ExtensionHost, Theme, ThemeColor

logger = Loggers.tools()
plan_logger = Loggers.planning()

TOOL_DESCRIPTION = (
    "Track implementation plan progress. Actions: init (set task list), "
    "update (change task status), status (show current state), clear (remove plan)."
)

ICON_COLORS: dict[TaskStatus, ThemeColor] = {
    TaskStatus.COMPLETE: "success",
    TaskStatus.IN_PROGRESS: "warning",
    TaskStatus.PENDING: "dim",
}


class PlanTrackerParams(BaseModel):
    """Parameters accepted by the plan tracker tool."""

    model_config = ConfigDict(extra="ignore")

    action: PlanAction = Field(description="Action to perform")
    tasks: list[str] | None = Field(default=None, description="Task names (for init)")
    index: int | None = Field(default=None, ge=0, description="Task index, 0-based (for update)")
    status: TaskStatus | None = Field(default=None, description="New status (for update)")


def _themed_icon(status: TaskStatus, theme: Theme) -> str:
    return theme.fg(ICON_COLORS[status], STATUS_ICONS[status])


def render_widget_text(tasks: list[Task], theme: Theme) -> str:
    """Render the one-line progress widget, or "" for an empty plan."""
    data = format_widget_data(tasks)
    if data.total == 0:
        return ""

    icon_status = {icon: status for status, icon in STATUS_ICONS.items()}
    icons = "".join(_themed_icon(icon_status[icon], theme) for icon in data.icons)
    current = f"  {data.current_name}" if data.current_name else ""
    return (
        f"{theme.fg('muted', 'Tasks:')} {icons} "
        f"{theme.fg('muted', f'({data.complete}/{data.total})')}{current}"
    )


def render_call(args: dict[str, Any], theme: Theme) -> str:
    """Render a pending tool call from its raw arguments."""
    action = args.get("action", "")
    text = theme.fg("toolTitle", theme.bold("plan_tracker "))
    text += theme.fg("muted", str(action))
    index = args.get("index")
    if action == PlanAction.UPDATE.value and index is not None:
        text += " " + theme.fg("accent", f"[{index}]")
        if args.get("status"):
            text += " → " + theme.fg("dim", str(args["status"]))
    task_names = args.get("tasks")
    if action == PlanAction.INIT.value and task_names:
        text += " " + theme.fg("dim", f"({len(task_names)} tasks)")
    return text


def render_result(result: ToolExecutionResult, theme: Theme) -> str:
    """Render a finished tool call from its persisted details."""
    details = result.details
    if details is None:
        return result.text

    if details.error:
        return theme.fg("error", f"Error: {details.error}")

    tasks = details.tasks
    done = theme.fg("success", "✓ ")
    match details.action:
        case PlanAction.INIT:
            return done + theme.fg("muted", f"Plan initialized with {len(tasks)} tasks")
        case PlanAction.UPDATE:
            complete = count_by_status(tasks)["complete"]
            return done + theme.fg("muted", f"Updated ({complete}/{len(tasks)} complete)")
        case PlanAction.STATUS:
            if not tasks:
                return theme.fg("dim", "No plan active")
            complete = count_by_status(tasks)["complete"]
            lines = [theme.fg("muted", f"{complete}/{len(tasks)} complete")]
            for task in tasks:
                lines.append(f"{_themed_icon(task.status, theme)} {theme.fg('muted', task.name)}")
            return "\n".join(lines)
        case PlanAction.CLEAR:
            return done + theme.fg("muted", "Plan cleared")
        case _:
            return theme.fg("dim", "Done")


class PlanTracker:
    """Owns the live plan of one session and serves the plan tracker tool.

    The plan is replaced, never mutated: every handler returns a fresh
    task list which the tracker swaps in.

    Example:
        tracker = PlanTracker()
        await tracker.on_session_event(SessionEvent.SESSION_START, ctx)
        result = await tracker.execute("call-1", {"action": "status"}, ctx)
    """

    def __init__(self, settings: PlanTrackerSettings | None = None) -> None:
        self._settings = settings or get_settings()
        self._tasks: list[Task] = []

    @property
    def settings(self) -> PlanTrackerSettings:
        return self._settings

    @property
    def tasks(self) -> list[Task]:
        """A copy of the live plan."""
        return list(self._tasks)

    def reconstruct_state(self, ctx: ExtensionContext) -> None:
        """Rebuild the live plan from the active branch."""
        branch = ctx.session_manager.get_branch()
        self._tasks = reconstruct_from_history(branch, self._settings.tool_name)
        plan_logger.debug(
            "plan_reconstructed",
            entries=len(branch),
            tasks=len(self._tasks),
        )

    def update_widget(self, ctx: ExtensionContext) -> None:
        """Show, refresh or hide the progress widget."""
        if not ctx.has_ui or ctx.ui is None or not self._settings.show_widget:
            return
        if not self._tasks:
            ctx.ui.set_widget(self._settings.widget_key, None)
            return
        tasks = list(self._tasks)
        ctx.ui.set_widget(self._settings.widget_key, lambda theme: render_widget_text(tasks, theme))

    async def on_session_event(self, event: SessionEvent, ctx: ExtensionContext) -> None:
        """Handle a session lifecycle event."""
        logger.debug("session_event", session_event=SessionEvent(event).value)
        self.reconstruct_state(ctx)
        self.update_widget(ctx)

    async def execute(
        self,
        tool_call_id: str,
        params: dict[str, Any] | PlanTrackerParams,
        ctx: ExtensionContext,
    ) -> ToolExecutionResult:
        """Run one plan tracker action.

        Args:
            tool_call_id: Host identifier of the tool call.
            params: Raw or validated tool parameters.
            ctx: Context of the calling session.

        Returns:
            The result text plus the details to persist in the branch.

        Raises:
            ToolError: If parameters other than ``action`` fail validation.
        """
        if isinstance(params, PlanTrackerParams):
            parsed = params
        else:
            try:
                parsed = PlanTrackerParams.model_validate(params)
            except ValidationError as e:
                if any(err["loc"] == ("action",) for err in e.errors()):
                    return self._unknown_action(params.get("action"))
                raise ToolError(
                    f"Invalid parameters: {e.error_count()} validation error(s)",
                    error_code=ErrorCode.INVALID_INPUT,
                    details={"errors": e.errors(include_url=False, include_context=False)},
                    tool_name=self._settings.tool_name,
                ) from e

        result: ActionResult
        match parsed.action:
            case PlanAction.INIT:
                result = handle_init(parsed.tasks)
                if result.success:
                    self._tasks = result.tasks
                    self.update_widget(ctx)
                else:
                    # keep the active plan; the record still carries the error
                    result = replace(result, tasks=list(self._tasks))
            case PlanAction.UPDATE:
                result = handle_update(self._tasks, parsed.index, parsed.status)
                self._tasks = result.tasks
                self.update_widget(ctx)
            case PlanAction.STATUS:
                result = handle_status(self._tasks)
            case PlanAction.CLEAR:
                result = handle_clear(self._tasks)
                self._tasks = result.tasks
                self.update_widget(ctx)
            case _:
                return self._unknown_action(parsed.action)

        if result.error:
            logger.info(
                "plan_action_failed",
                tool_call_id=tool_call_id,
                action=parsed.action.value,
                error=result.error,
            )
        else:
            logger.info(
                "plan_action",
                tool_call_id=tool_call_id,
                action=parsed.action.value,
                tasks=len(result.tasks),
            )

        details = PlanTrackerDetails(
            action=parsed.action,
            tasks=list(result.tasks),
            error=result.error,
        )
        return ToolExecutionResult.text_result(result.text, details)

    def _unknown_action(self, action: Any) -> ToolExecutionResult:
        logger.info("plan_action_failed", action=str(action), error="unknown action")
        return ToolExecutionResult.text_result(
            f"Unknown action: {action}",
            PlanTrackerDetails(
                action=PlanAction.STATUS,
                tasks=list(self._tasks),
                error="unknown action",
            ),
        )

    def tool_definition(self) -> ToolDefinition:
        """Build the definition the host registers for this tool."""
        return ToolDefinition(
            name=self._settings.tool_name,
            label=TOOL_LABEL,
            description=TOOL_DESCRIPTION,
            func=self.execute,
            parameters=PlanTrackerParams.model_json_schema(),
            category=ToolCategory.PLANNING,
            render_call=render_call,
            render_result=render_result,
        )


def register_plan_tracker(
    host: ExtensionHost,
    settings: PlanTrackerSettings | None = None,
) -> PlanTracker:
    """Register the plan tracker tool and its session event handlers.

    Also configures logging from the tracker's settings, so ``log_level``
    and ``log_format`` apply to every log line the tracker emits.

    Args:
        host: The extension host to register with.
        settings: Optional settings (defaults to get_settings()).

    Returns:
        The PlanTracker owning the session's live plan.
    """
    tracker = PlanTracker(settings)
    configure_logging(tracker.settings)
    for event in SessionEvent:
        host.on(event, tracker.on_session_event)
    host.register_tool(tracker.tool_definition())
    return tracker
