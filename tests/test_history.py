"""Tests for plan reconstruction from branch history."""

from plan_tracker.planning import (
    BranchEntry,
    PlanAction,
    PlanTrackerDetails,
    Task,
    TaskStatus,
    ToolMessage,
    apply_details,
    handle_init,
    is_plan_tracker_result,
    reconstruct_from_history,
)
from tests.conftest import make_tasks


def _record(action: PlanAction, tasks: list[Task], error: str | None = None) -> BranchEntry:
    return BranchEntry.tool_result(
        "plan_tracker",
        PlanTrackerDetails(action=action, tasks=tasks, error=error),
    )


class TestIsPlanTrackerResult:
    def test_matches_tool_result(self):
        assert is_plan_tracker_result(_record(PlanAction.STATUS, []))

    def test_rejects_other_entry_types(self):
        entry = BranchEntry(type="compaction", message=ToolMessage(role="toolResult", tool_name="plan_tracker"))
        assert not is_plan_tracker_result(entry)

    def test_rejects_other_roles(self):
        assert not is_plan_tracker_result(BranchEntry(type="message", message=ToolMessage(role="user")))

    def test_rejects_other_tools(self):
        assert not is_plan_tracker_result(BranchEntry.tool_result("read_file", None))

    def test_rejects_missing_message(self):
        assert not is_plan_tracker_result(BranchEntry(type="message"))

    def test_custom_tool_name(self):
        entry = BranchEntry.tool_result("todo", None)
        assert is_plan_tracker_result(entry, tool_name="todo")
        assert not is_plan_tracker_result(entry)


class TestApplyDetails:
    def test_replaces_plan(self):
        current = make_tasks("pending")
        new = make_tasks("complete", "pending")
        result = apply_details(current, PlanTrackerDetails(action=PlanAction.INIT, tasks=new))
        assert result == new
        assert result is not new

    def test_skips_error(self):
        current = make_tasks("pending")
        details = PlanTrackerDetails(action=PlanAction.UPDATE, tasks=[], error="no plan active")
        assert apply_details(current, details) is current

    def test_skips_missing_details(self):
        current = make_tasks("pending")
        assert apply_details(current, None) is current

    def test_accepts_serialized_details(self):
        result = apply_details([], {"action": "init", "tasks": [{"name": "A", "status": "pending"}]})
        assert result == [Task("A")]

    def test_skips_serialized_error_without_parsing(self):
        current = make_tasks("pending")
        details = {"action": "bogus", "tasks": [{"name": "A", "status": "done"}], "error": "unknown action"}
        assert apply_details(current, details) is current


class TestReconstructFromHistory:
    def test_no_plan_tracker_entries(self):
        entries = [
            BranchEntry(type="message", message=ToolMessage(role="user")),
            BranchEntry(type="message", message=ToolMessage(role="assistant")),
        ]
        assert reconstruct_from_history(entries) == []

    def test_empty_history(self):
        assert reconstruct_from_history([]) == []

    def test_last_write_wins(self):
        entries = [
            _record(PlanAction.INIT, make_tasks("pending", "pending")),
            _record(PlanAction.UPDATE, make_tasks("complete", "pending")),
            _record(PlanAction.UPDATE, make_tasks("complete", "in_progress")),
        ]
        tasks = reconstruct_from_history(entries)
        assert tasks == make_tasks("complete", "in_progress")

    def test_ignores_error_records(self):
        entries = [
            _record(PlanAction.INIT, [Task("A")]),
            _record(PlanAction.UPDATE, [Task("A", TaskStatus.COMPLETE)], error="index 3 out of range"),
        ]
        assert reconstruct_from_history(entries) == [Task("A")]

    def test_error_records_are_invisible(self):
        with_error = [
            _record(PlanAction.INIT, make_tasks("pending", "pending")),
            _record(PlanAction.INIT, [], error="tasks required"),
            _record(PlanAction.UPDATE, make_tasks("pending", "complete")),
            _record(PlanAction.UPDATE, [], error="no plan active"),
        ]
        without_error = [with_error[0], with_error[2]]
        assert reconstruct_from_history(with_error) == reconstruct_from_history(without_error)

    def test_ignores_other_tools(self):
        entries = [
            _record(PlanAction.INIT, [Task("A")]),
            BranchEntry.tool_result("other_tool", PlanTrackerDetails(action=PlanAction.INIT, tasks=[Task("X")])),
        ]
        assert reconstruct_from_history(entries) == [Task("A")]

    def test_clear_empties_plan(self):
        entries = [
            _record(PlanAction.INIT, [Task("A")]),
            _record(PlanAction.CLEAR, []),
        ]
        assert reconstruct_from_history(entries) == []

    def test_status_records_echo_plan(self):
        entries = [
            _record(PlanAction.INIT, [Task("A")]),
            _record(PlanAction.STATUS, [Task("A")]),
        ]
        assert reconstruct_from_history(entries) == [Task("A")]

    def test_serialized_records(self):
        entries = [
            BranchEntry.tool_result("plan_tracker", {
                "action": "init",
                "tasks": [{"name": "A", "status": "pending"}, {"name": "B", "status": "pending"}],
            }),
            BranchEntry.tool_result("plan_tracker", {
                "action": "update",
                "tasks": [{"name": "A", "status": "pending"}],
                "error": "index 4 out of range",
            }),
        ]
        assert reconstruct_from_history(entries) == [Task("A"), Task("B")]

    def test_malformed_error_records_are_not_parsed(self):
        entries = [
            BranchEntry.tool_result("plan_tracker", {
                "action": "init",
                "tasks": [{"name": "A", "status": "pending"}],
            }),
            BranchEntry.tool_result("plan_tracker", {
                "action": "update",
                "error": "index 9 out of range",
                "tasks": [{"name": "A", "status": "done"}],
            }),
            BranchEntry.tool_result("plan_tracker", {"error": "unknown action"}),
        ]
        assert reconstruct_from_history(entries) == [Task("A")]

    def test_deterministic(self):
        entries = [
            _record(PlanAction.INIT, make_tasks("pending", "pending")),
            _record(PlanAction.UPDATE, make_tasks("in_progress", "pending")),
        ]
        first = reconstruct_from_history(entries)
        second = reconstruct_from_history(entries)
        assert first == second
        assert first is not second

    def test_accepts_iterator(self):
        entries = iter([_record(PlanAction.INIT, [Task("A")])])
        assert reconstruct_from_history(entries) == [Task("A")]

    def test_round_trip_from_init(self):
        result = handle_init(["Design", "Build", "Ship"])
        entries = [_record(PlanAction.INIT, result.tasks)]
        assert reconstruct_from_history(entries) == result.tasks
