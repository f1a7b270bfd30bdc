"""
Poll planning for the Umpire Planner.
Validates poll edits and works out the slot changes they imply. Applying the
resulting plans (in one transaction) is up to the persistence layer.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Iterable, Optional, Union

from umpire_planner.models import (
    Match, PollSlot, PollMatch, PollStatus, TimeSlot, SlotDiff
)
from umpire_planner.services.slots import group_matches_into_slots
from umpire_planner.services.slot_diff import diff_slots
from umpire_planner.core.config import MAX_BULK_ITEMS
from umpire_planner.core.logging_config import get_logger

logger = get_logger(__name__)


class PollPlanningError(ValueError):
    """Raised when a requested poll change is not allowed."""


@dataclass
class PollPlan:
    title: str
    match_ids: List[str]
    slots: List[TimeSlot] = field(default_factory=list)


@dataclass
class PollUpdatePlan:
    match_ids: List[str]
    slot_diff: SlotDiff


@dataclass
class PollRemovalAction:
    """
    What to do with one poll after matches were taken out of it.

    action is one of "delete", "clear" or "update"; remaining_match_ids is
    only populated for "update".
    """
    poll_id: str
    action: str
    remaining_match_ids: List[str] = field(default_factory=list)


def _unique(ids: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(ids))


def _check_bulk_limit(count: int, verb: str):
    if count > MAX_BULK_ITEMS:
        raise PollPlanningError(f"Cannot {verb} more than {MAX_BULK_ITEMS} items at once")


def _select_matches(match_ids: List[str], matches: List[Match]) -> List[Match]:
    match_map = {match.id: match for match in matches}
    missing = [match_id for match_id in match_ids if match_id not in match_map]
    if missing:
        logger.warning(f"Requested matches not found: {', '.join(missing)}")
        raise PollPlanningError("One or more selected matches no longer exist")
    return [match_map[match_id] for match_id in match_ids]


def _slots_for(matches: List[Match]) -> List[TimeSlot]:
    return group_matches_into_slots(m for m in matches if m.has_start_time)


def plan_new_poll(title: str, match_ids: List[str], matches: List[Match]) -> PollPlan:
    """
    Validate a new poll and calculate its slots.

    Args:
        title: Poll title, trimmed before use
        match_ids: Matches to include; duplicates are dropped
        matches: Known matches to resolve the ids against

    Returns:
        PollPlan with the trimmed title, unique match ids and merged slots

    Raises:
        PollPlanningError: If the title is blank, no matches were given, or a
            requested match is unknown
    """
    title = (title or "").strip()
    if not title:
        raise PollPlanningError("Title is required")
    if not match_ids:
        raise PollPlanningError("At least one match is required")

    unique_ids = _unique(match_ids)
    selected = _select_matches(unique_ids, matches)
    slots = _slots_for(selected)

    logger.info(f"Planned poll '{title}' with {len(unique_ids)} matches and {len(slots)} slots")
    return PollPlan(title=title, match_ids=unique_ids, slots=slots)


def plan_poll_update(existing_slots: List[PollSlot], match_ids: List[str],
                     matches: List[Match]) -> PollUpdatePlan:
    """
    Recalculate a poll's slots after its match set changed.

    Unchanged slots are kept so the responses attached to them survive.

    Raises:
        PollPlanningError: If no matches were given or a requested match is unknown
    """
    if not match_ids:
        raise PollPlanningError("At least one match is required")

    unique_ids = _unique(match_ids)
    selected = _select_matches(unique_ids, matches)
    slot_diff = diff_slots(existing_slots, _slots_for(selected))

    logger.info(f"Planned poll update with {len(unique_ids)} matches: {slot_diff.get_summary()}")
    return PollUpdatePlan(match_ids=unique_ids, slot_diff=slot_diff)


def merge_match_ids(existing_ids: List[str], new_ids: List[str],
                    poll_status: Union[PollStatus, str] = PollStatus.OPEN) -> List[str]:
    """
    Add matches to an open poll.

    Returns:
        The ordered union of the existing and new match ids

    Raises:
        PollPlanningError: If nothing was given, too many ids were given, or
            the poll is closed
    """
    if not new_ids:
        raise PollPlanningError("No matches provided")
    if len(new_ids) > MAX_BULK_ITEMS:
        raise PollPlanningError(f"Cannot add more than {MAX_BULK_ITEMS} matches at once")
    if PollStatus(poll_status) is not PollStatus.OPEN:
        raise PollPlanningError("Poll is closed")

    return _unique(list(existing_ids) + list(new_ids))


def plan_match_removal(poll_matches: List[PollMatch], match_ids: List[str],
                       keep_empty_polls: bool = False) -> List[PollRemovalAction]:
    """
    Work out what happens to each poll when matches are removed from it.

    A poll left without matches is deleted, or cleared of its matches and
    slots when keep_empty_polls is set. Any other affected poll gets its
    remaining match ids, to be fed to plan_poll_update.

    Args:
        poll_matches: Poll-match links of every poll that may be affected
        match_ids: Matches being removed
        keep_empty_polls: Keep polls that end up empty

    Returns:
        One action per affected poll, in order of first appearance
    """
    if not match_ids:
        return []
    _check_bulk_limit(len(match_ids), "remove")

    to_remove = set(match_ids)
    by_poll: Dict[str, List[str]] = {}
    for link in poll_matches:
        by_poll.setdefault(link.poll_id, []).append(link.match_id)

    actions: List[PollRemovalAction] = []
    for poll_id, current_ids in by_poll.items():
        if not to_remove.intersection(current_ids):
            continue

        remaining = [match_id for match_id in current_ids if match_id not in to_remove]
        if remaining:
            actions.append(PollRemovalAction(poll_id, "update", remaining))
        elif keep_empty_polls:
            actions.append(PollRemovalAction(poll_id, "clear"))
        else:
            actions.append(PollRemovalAction(poll_id, "delete"))

    logger.debug(f"Removing {len(to_remove)} matches affects {len(actions)} polls")
    return actions


def check_bulk_delete(ids: List[str]) -> Optional[List[str]]:
    """
    Validate a bulk delete request.

    Returns:
        The unique ids to delete, or None when there is nothing to do

    Raises:
        PollPlanningError: If more than MAX_BULK_ITEMS ids were given
    """
    if not ids:
        return None
    _check_bulk_limit(len(ids), "delete")
    return _unique(ids)
