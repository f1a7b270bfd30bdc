"""
Data models for the umpire planner.
"""

from .models import (
    Instant,
    to_epoch_ms,
    from_epoch_ms,
    ConflictSeverity,
    PollStatus,
    ResponseValue,
    Match,
    TimeSlot,
    PollSlot,
    Assignment,
    AssignmentConflict,
    SlotDiff,
    AvailabilityResponse,
    Umpire,
    PollMatch,
    Poll
)

__all__ = [
    "Instant",
    "to_epoch_ms",
    "from_epoch_ms",
    "ConflictSeverity",
    "PollStatus",
    "ResponseValue",
    "Match",
    "TimeSlot",
    "PollSlot",
    "Assignment",
    "AssignmentConflict",
    "SlotDiff",
    "AvailabilityResponse",
    "Umpire",
    "PollMatch",
    "Poll"
]
