"""
Reconciliation of persisted poll slots against a freshly calculated set.
"""

from typing import Dict, List, Tuple

from umpire_planner.models import PollSlot, TimeSlot, SlotDiff
from umpire_planner.core.logging_config import get_logger

logger = get_logger(__name__)


def diff_slots(existing: List[PollSlot], desired: List[TimeSlot]) -> SlotDiff:
    """
    Classify slots as kept, added or removed.

    Slots are "the same" only when both endpoints are equal to the
    millisecond. Each existing slot is matched at most once, so a repeated
    desired slot lands in ``to_add`` the second time. Kept slots retain their
    ids, and with them any responses that reference them. Of several persisted
    slots sharing a window only the first can be kept; the others are removed.

    Args:
        existing: Slots currently persisted for the poll
        desired: Slots the poll should have

    Returns:
        SlotDiff partitioning both inputs
    """
    diff = SlotDiff()

    existing_by_key: Dict[Tuple[int, int], PollSlot] = {}
    for slot in existing:
        if slot.key in existing_by_key:
            # Persisted duplicate of an earlier slot
            diff.to_remove.append(slot)
        else:
            existing_by_key[slot.key] = slot

    for slot in desired:
        match = existing_by_key.pop(slot.key, None)
        if match is not None:
            diff.to_keep.append(match)
        else:
            diff.to_add.append(slot)

    diff.to_remove.extend(existing_by_key.values())

    logger.debug(f"Slot diff: {diff.get_summary()}")
    return diff
