"""
Assignment conflict detection.
Finds umpires booked on two matches whose availability windows overlap (hard)
or that fall on the same day (soft).
"""

from typing import List, Dict
from collections import defaultdict

from umpire_planner.models import (
    Assignment, Match, AssignmentConflict, ConflictSeverity
)
from umpire_planner.services.slots import calculate_slot
from umpire_planner.core.logging_config import get_logger

logger = get_logger(__name__)


def find_conflicts(assignments: List[Assignment], matches: List[Match]) -> List[AssignmentConflict]:
    """
    Detect double-bookings per umpire.

    Windows are re-derived from the match start times with calculate_slot,
    independent of any poll's persisted slots. Each conflicting pair is
    reported twice, once from each match's point of view. Assignments that
    reference unknown matches, or matches without a start time, are skipped.

    Args:
        assignments: Umpire-to-match assignments
        matches: Matches referenced by the assignments

    Returns:
        List of AssignmentConflict, ordered by umpire then pair
    """
    match_map = {match.id: match for match in matches}

    # Group assignments by umpire
    by_umpire: Dict[str, List[Assignment]] = defaultdict(list)
    for assignment in assignments:
        by_umpire[assignment.umpire_id].append(assignment)

    conflicts: List[AssignmentConflict] = []

    for umpire_id, umpire_assignments in by_umpire.items():
        if len(umpire_assignments) < 2:
            continue

        for i in range(len(umpire_assignments)):
            for j in range(i):
                match_a = match_map.get(umpire_assignments[i].match_id)
                match_b = match_map.get(umpire_assignments[j].match_id)
                if match_a is None or match_b is None:
                    continue
                if not match_a.has_start_time or not match_b.has_start_time:
                    continue

                slot_a = calculate_slot(match_a.start_time)
                slot_b = calculate_slot(match_b.start_time)

                if slot_a.overlaps_with(slot_b):
                    severity = ConflictSeverity.HARD
                elif match_a.date == match_b.date:
                    severity = ConflictSeverity.SOFT
                else:
                    continue

                conflict = AssignmentConflict(
                    umpire_id=umpire_id,
                    match_id=match_a.id,
                    conflicting_match_id=match_b.id,
                    severity=severity
                )
                conflicts.append(conflict)
                conflicts.append(conflict.reversed())

    if conflicts:
        logger.info(f"Found {len(conflicts)} assignment conflicts")
    return conflicts
