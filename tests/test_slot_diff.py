"""
Tests for reconciling persisted poll slots with calculated slots.
"""

from umpire_planner.models import PollSlot, TimeSlot
from umpire_planner.services.slot_diff import diff_slots


def poll_slot(slot_id, start, end):
    return PollSlot(id=slot_id, poll_id="poll-1", start_time=start, end_time=end)


def time_slot(start, end):
    return TimeSlot.from_instants(start, end)


def test_empty_inputs():
    diff = diff_slots([], [])
    assert diff.to_add == [] and diff.to_remove == [] and diff.to_keep == []
    assert not diff.has_changes


def test_all_new_when_nothing_persisted():
    desired = [time_slot("2026-03-15T10:30:00Z", "2026-03-15T12:30:00Z")]
    diff = diff_slots([], desired)
    assert diff.to_add == desired
    assert diff.to_keep == [] and diff.to_remove == []


def test_all_removed_when_nothing_desired():
    existing = [poll_slot("s1", "2026-03-15T10:30:00Z", "2026-03-15T12:30:00Z")]
    diff = diff_slots(existing, [])
    assert diff.to_remove == existing


def test_keeps_identical_slot_with_its_id():
    existing = [
        poll_slot("s1", "2026-03-15T10:30:00+00:00", "2026-03-15T12:30:00+00:00"),
        poll_slot("s2", "2026-03-15T14:00:00+00:00", "2026-03-15T16:00:00+00:00"),
    ]
    desired = [
        time_slot("2026-03-15T10:30:00Z", "2026-03-15T12:30:00Z"),
        time_slot("2026-03-15T17:00:00Z", "2026-03-15T19:00:00Z"),
    ]
    diff = diff_slots(existing, desired)

    assert [s.id for s in diff.to_keep] == ["s1"]
    assert [s.id for s in diff.to_remove] == ["s2"]
    assert diff.to_add == [desired[1]]


def test_changed_end_is_a_different_slot():
    existing = [poll_slot("s1", "2026-03-15T10:30:00Z", "2026-03-15T12:30:00Z")]
    desired = [time_slot("2026-03-15T10:30:00Z", "2026-03-15T12:45:00Z")]
    diff = diff_slots(existing, desired)
    assert diff.to_keep == []
    assert diff.to_add == desired
    assert diff.to_remove == existing


def test_duplicate_desired_slot_matches_existing_once():
    existing = [poll_slot("s1", "2026-03-15T10:30:00Z", "2026-03-15T12:30:00Z")]
    desired = [
        time_slot("2026-03-15T10:30:00Z", "2026-03-15T12:30:00Z"),
        time_slot("2026-03-15T10:30:00Z", "2026-03-15T12:30:00Z"),
    ]
    diff = diff_slots(existing, desired)
    assert [s.id for s in diff.to_keep] == ["s1"]
    assert len(diff.to_add) == 1
    assert diff.to_remove == []


def test_partition_is_exhaustive():
    existing = [
        poll_slot("s1", "2026-03-15T09:00:00Z", "2026-03-15T11:00:00Z"),
        poll_slot("s2", "2026-03-15T12:00:00Z", "2026-03-15T14:00:00Z"),
        poll_slot("s3", "2026-03-16T09:00:00Z", "2026-03-16T11:00:00Z"),
    ]
    desired = [
        time_slot("2026-03-15T12:00:00Z", "2026-03-15T14:00:00Z"),
        time_slot("2026-03-16T09:00:00Z", "2026-03-16T11:00:00Z"),
        time_slot("2026-03-17T09:00:00Z", "2026-03-17T11:00:00Z"),
    ]
    diff = diff_slots(existing, desired)
    assert len(diff.to_keep) + len(diff.to_remove) == len(existing)
    assert len(diff.to_keep) + len(diff.to_add) == len(desired)
    kept = {s.id for s in diff.to_keep}
    removed = {s.id for s in diff.to_remove}
    assert kept.isdisjoint(removed)
    assert kept | removed == {"s1", "s2", "s3"}


def test_persisted_duplicates_are_removed():
    existing = [
        poll_slot("s1", "2026-03-15T10:30:00Z", "2026-03-15T12:30:00Z"),
        poll_slot("s2", "2026-03-15T10:30:00Z", "2026-03-15T12:30:00Z"),
    ]
    diff = diff_slots(existing, [])
    assert sorted(s.id for s in diff.to_remove) == ["s1", "s2"]
    assert diff.to_keep == []


def test_only_first_persisted_duplicate_is_kept():
    existing = [
        poll_slot("s1", "2026-03-15T10:30:00Z", "2026-03-15T12:30:00Z"),
        poll_slot("s2", "2026-03-15T10:30:00Z", "2026-03-15T12:30:00Z"),
    ]
    diff = diff_slots(existing, [time_slot("2026-03-15T10:30:00Z", "2026-03-15T12:30:00Z")])
    assert [s.id for s in diff.to_keep] == ["s1"]
    assert [s.id for s in diff.to_remove] == ["s2"]
    assert diff.to_add == []
    assert len(diff.to_keep) + len(diff.to_remove) == len(existing)
