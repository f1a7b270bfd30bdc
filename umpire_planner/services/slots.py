"""
Slot calculation for availability polls.
Turns match start times into availability windows and merges nearby windows
into the slots presented to umpires.
"""

from typing import Iterable, List, Union

from umpire_planner.models import Instant, Match, TimeSlot, to_epoch_ms
from umpire_planner.core.config import (
    SLOT_BUFFER_MS, SLOT_ROUNDING_MS, SLOT_DURATION_MS, SLOT_MERGE_THRESHOLD_MS
)
from umpire_planner.core.logging_config import get_logger

logger = get_logger(__name__)


def calculate_slot(match_time: Instant) -> TimeSlot:
    """
    Compute the availability window for a single match.

    The window opens SLOT_BUFFER_MINUTES before the match, floored to the
    previous SLOT_ROUNDING_MINUTES boundary, and lasts SLOT_DURATION_MINUTES.

    Args:
        match_time: Match start as a datetime, ISO-8601 string or epoch ms

    Returns:
        The TimeSlot for the match
    """
    shifted = to_epoch_ms(match_time) - SLOT_BUFFER_MS
    start = shifted - (shifted % SLOT_ROUNDING_MS)
    return TimeSlot(start, start + SLOT_DURATION_MS)


def _start_time_of(match: Union[Match, dict]) -> Instant:
    if isinstance(match, dict):
        return match["start_time"]
    return match.start_time


def group_matches_into_slots(matches: Iterable[Union[Match, dict]]) -> List[TimeSlot]:
    """
    Merge the windows of many matches into the slots of a poll.

    A window joins the current group when it starts no more than
    SLOT_MERGE_THRESHOLD_MINUTES after the group's first window. The group's
    start never moves; its end grows to the latest end folded into it.

    Args:
        matches: Matches (or mappings with a ``start_time`` key), all with a start time

    Returns:
        Merged slots in ascending start order
    """
    slots = sorted(
        (calculate_slot(_start_time_of(m)) for m in matches),
        key=lambda s: s.start_ms
    )
    if not slots:
        return []

    groups = [[slots[0].start_ms, slots[0].end_ms]]
    for slot in slots[1:]:
        group = groups[-1]
        if slot.start_ms - group[0] <= SLOT_MERGE_THRESHOLD_MS:
            if slot.end_ms > group[1]:
                group[1] = slot.end_ms
        else:
            groups.append([slot.start_ms, slot.end_ms])

    merged = [TimeSlot(start, end) for start, end in groups]
    logger.debug(f"Grouped {len(slots)} match windows into {len(merged)} slots")
    return merged
