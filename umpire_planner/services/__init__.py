"""
Services for slot calculation, reconciliation, conflict detection and poll planning.
"""

from .slots import calculate_slot, group_matches_into_slots
from .slot_diff import diff_slots
from .match_slot_mapping import map_matches_to_slots
from .conflicts import find_conflicts
from .action_items import ActionItem, find_action_items
from .poll_planner import (
    PollPlanningError,
    PollPlan,
    PollUpdatePlan,
    PollRemovalAction,
    plan_new_poll,
    plan_poll_update,
    merge_match_ids,
    plan_match_removal,
    check_bulk_delete
)

__all__ = [
    "calculate_slot",
    "group_matches_into_slots",
    "diff_slots",
    "map_matches_to_slots",
    "find_conflicts",
    "ActionItem",
    "find_action_items",
    "PollPlanningError",
    "PollPlan",
    "PollUpdatePlan",
    "PollRemovalAction",
    "plan_new_poll",
    "plan_poll_update",
    "merge_match_ids",
    "plan_match_removal",
    "check_bulk_delete"
]
