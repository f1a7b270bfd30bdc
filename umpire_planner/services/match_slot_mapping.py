"""
Mapping of matches onto the poll slots that contain them.
"""

from typing import Dict, List

from umpire_planner.models import Match, PollSlot


def map_matches_to_slots(matches: List[Match], slots: List[PollSlot]) -> Dict[str, str]:
    """
    Map each match to the slot containing its start time.

    The first slot (in the given order) whose half-open [start, end) interval
    contains the start time wins. Matches without a start time, or outside
    every slot, get no entry.

    Returns:
        Dict of match id -> slot id
    """
    bounds = [(slot.id, slot.start_ms, slot.end_ms) for slot in slots]
    result: Dict[str, str] = {}

    for match in matches:
        match_ms = match.start_ms
        if match_ms is None:
            continue

        for slot_id, start_ms, end_ms in bounds:
            if start_ms <= match_ms < end_ms:
                result[match.id] = slot_id
                break

    return result
