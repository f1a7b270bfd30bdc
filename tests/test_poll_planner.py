"""
Tests for poll planning: creating polls, editing their match sets and
removing matches.
"""

import pytest

from umpire_planner.models import Match, PollSlot, PollMatch, PollStatus, TimeSlot
from umpire_planner.services.poll_planner import (
    PollPlanningError, plan_new_poll, plan_poll_update, merge_match_ids,
    plan_match_removal, check_bulk_delete
)

MATCHES = [
    Match(id="m1", date="2026-03-15", start_time="2026-03-15T11:00:00Z"),
    Match(id="m2", date="2026-03-15", start_time="2026-03-15T11:15:00Z"),
    Match(id="m3", date="2026-03-15", start_time="2026-03-15T15:00:00Z"),
    Match(id="m4", date="2026-03-16", start_time=None),
]


def test_plan_new_poll_trims_title_and_groups_slots():
    plan = plan_new_poll("  Weekend 12  ", ["m1", "m2", "m3", "m1"], MATCHES)
    assert plan.title == "Weekend 12"
    assert plan.match_ids == ["m1", "m2", "m3"]
    assert plan.slots == [
        TimeSlot.from_instants("2026-03-15T10:30:00Z", "2026-03-15T12:45:00Z"),
        TimeSlot.from_instants("2026-03-15T14:30:00Z", "2026-03-15T16:30:00Z"),
    ]


def test_plan_new_poll_ignores_matches_without_start_time_for_slots():
    plan = plan_new_poll("Poll", ["m4"], MATCHES)
    assert plan.match_ids == ["m4"]
    assert plan.slots == []


def test_plan_new_poll_rejects_invalid_requests():
    with pytest.raises(PollPlanningError, match="Title is required"):
        plan_new_poll("   ", ["m1"], MATCHES)
    with pytest.raises(PollPlanningError, match="At least one match"):
        plan_new_poll("Poll", [], MATCHES)
    with pytest.raises(PollPlanningError, match="no longer exist"):
        plan_new_poll("Poll", ["m1", "gone"], MATCHES)


def test_plan_poll_update_keeps_unchanged_slots():
    existing = [
        PollSlot(id="s1", poll_id="p1", start_time="2026-03-15T10:30:00Z", end_time="2026-03-15T12:45:00Z"),
        PollSlot(id="s2", poll_id="p1", start_time="2026-03-15T14:30:00Z", end_time="2026-03-15T16:30:00Z"),
    ]
    plan = plan_poll_update(existing, ["m1", "m2"], MATCHES)

    assert plan.match_ids == ["m1", "m2"]
    assert [s.id for s in plan.slot_diff.to_keep] == ["s1"]
    assert [s.id for s in plan.slot_diff.to_remove] == ["s2"]
    assert plan.slot_diff.to_add == []


def test_plan_poll_update_requires_matches():
    with pytest.raises(PollPlanningError):
        plan_poll_update([], [], MATCHES)


def test_merge_match_ids():
    assert merge_match_ids(["m1", "m2"], ["m2", "m3"]) == ["m1", "m2", "m3"]
    assert merge_match_ids([], ["m1"], "open") == ["m1"]


def test_merge_match_ids_rejects_closed_poll_and_empty_input():
    with pytest.raises(PollPlanningError, match="closed"):
        merge_match_ids(["m1"], ["m2"], PollStatus.CLOSED)
    with pytest.raises(PollPlanningError, match="No matches"):
        merge_match_ids(["m1"], [])


def test_merge_match_ids_bulk_limit():
    with pytest.raises(PollPlanningError, match="500"):
        merge_match_ids([], [f"m{i}" for i in range(501)])


def test_plan_match_removal():
    links = [
        PollMatch("p1", "m1"), PollMatch("p1", "m2"),
        PollMatch("p2", "m3"),
        PollMatch("p3", "m4"),
    ]
    actions = plan_match_removal(links, ["m2", "m3"])

    assert [(a.poll_id, a.action) for a in actions] == [("p1", "update"), ("p2", "delete")]
    assert actions[0].remaining_match_ids == ["m1"]


def test_plan_match_removal_keeps_empty_polls():
    actions = plan_match_removal([PollMatch("p1", "m1")], ["m1"], keep_empty_polls=True)
    assert [(a.poll_id, a.action) for a in actions] == [("p1", "clear")]


def test_plan_match_removal_without_ids():
    assert plan_match_removal([PollMatch("p1", "m1")], []) == []


def test_check_bulk_delete():
    assert check_bulk_delete([]) is None
    assert check_bulk_delete(["p1", "p2", "p1"]) == ["p1", "p2"]
    with pytest.raises(PollPlanningError):
        check_bulk_delete([str(i) for i in range(501)])


def test_plan_match_removal_bulk_limit():
    with pytest.raises(PollPlanningError, match="Cannot remove more than 500"):
        plan_match_removal([PollMatch("p1", "m1")], [f"m{i}" for i in range(501)])
    assert plan_match_removal([PollMatch("p1", "m1")], [f"m{i}" for i in range(500)])[0].action == "delete"
