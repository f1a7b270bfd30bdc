"""
Data models for the Umpire Planner.
Defines the records handed over by the persistence layer and the values
derived from them by the scheduling services.
"""

from dataclasses import dataclass, field
from datetime import datetime, date, timezone, timedelta
from typing import List, Optional, Union
from enum import Enum


Instant = Union[datetime, str, int]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_epoch_ms(value: Instant) -> int:
    """
    Convert an instant to integer milliseconds since the Unix epoch.

    Accepts ISO-8601 strings as read by ``datetime.fromisoformat`` (a trailing
    ``Z`` is understood), ``datetime`` values and plain integers. Integers are
    epoch milliseconds, not seconds. Naive datetimes are taken to be UTC.

    Raises:
        ValueError: If a string cannot be parsed as ISO-8601
        TypeError: If the value is of an unsupported type
    """
    if isinstance(value, bool):
        raise TypeError(f"Unsupported instant type: {type(value).__name__}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return (value - _EPOCH) // timedelta(milliseconds=1)
    raise TypeError(f"Unsupported instant type: {type(value).__name__}")


def from_epoch_ms(ms: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return _EPOCH + timedelta(milliseconds=ms)


class ConflictSeverity(Enum):
    HARD = "hard"
    SOFT = "soft"


class PollStatus(Enum):
    OPEN = "open"
    CLOSED = "closed"


class ResponseValue(Enum):
    YES = "yes"
    IF_NEED_BE = "if_need_be"
    NO = "no"


@dataclass
class Match:
    id: str
    date: str  # Calendar date, YYYY-MM-DD
    start_time: Optional[Instant] = None
    home_team: str = ""
    away_team: str = ""
    competition: Optional[str] = None
    venue: Optional[str] = None
    field: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.date, datetime):
            self.date = self.date.date().isoformat()
        elif isinstance(self.date, date):
            self.date = self.date.isoformat()

    @property
    def has_start_time(self) -> bool:
        return self.start_time is not None and self.start_time != ""

    @property
    def start_ms(self) -> Optional[int]:
        if not self.has_start_time:
            return None
        return to_epoch_ms(self.start_time)

    def __str__(self):
        return f"{self.home_team} - {self.away_team} on {self.date}"


@dataclass(frozen=True)
class TimeSlot:
    """An availability window. Equality is structural on both endpoints."""
    start_ms: int
    end_ms: int

    def __post_init__(self):
        if self.end_ms <= self.start_ms:
            raise ValueError(
                f"Slot end ({self.end_ms}) must be after start ({self.start_ms})"
            )

    @classmethod
    def from_instants(cls, start: Instant, end: Instant) -> "TimeSlot":
        return cls(to_epoch_ms(start), to_epoch_ms(end))

    @property
    def start(self) -> datetime:
        return from_epoch_ms(self.start_ms)

    @property
    def end(self) -> datetime:
        return from_epoch_ms(self.end_ms)

    @property
    def key(self):
        return (self.start_ms, self.end_ms)

    def overlaps_with(self, other: "TimeSlot") -> bool:
        return self.start_ms < other.end_ms and other.start_ms < self.end_ms

    def contains(self, instant_ms: int) -> bool:
        return self.start_ms <= instant_ms < self.end_ms

    def __str__(self):
        return f"{self.start.isoformat()} - {self.end.isoformat()}"


@dataclass
class PollSlot:
    id: str
    poll_id: str
    start_time: Instant
    end_time: Instant

    @property
    def start_ms(self) -> int:
        return to_epoch_ms(self.start_time)

    @property
    def end_ms(self) -> int:
        return to_epoch_ms(self.end_time)

    @property
    def key(self):
        return (self.start_ms, self.end_ms)

    def to_time_slot(self) -> TimeSlot:
        return TimeSlot(self.start_ms, self.end_ms)


@dataclass
class Assignment:
    umpire_id: str
    match_id: str
    id: Optional[str] = None
    poll_id: Optional[str] = None
    created_at: Optional[str] = None


@dataclass(frozen=True)
class AssignmentConflict:
    umpire_id: str
    match_id: str
    conflicting_match_id: str
    severity: ConflictSeverity

    def reversed(self) -> "AssignmentConflict":
        return AssignmentConflict(
            umpire_id=self.umpire_id,
            match_id=self.conflicting_match_id,
            conflicting_match_id=self.match_id,
            severity=self.severity,
        )


@dataclass
class SlotDiff:
    to_add: List[TimeSlot] = field(default_factory=list)
    to_remove: List[PollSlot] = field(default_factory=list)
    to_keep: List[PollSlot] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.to_add or self.to_remove)

    def get_summary(self) -> str:
        return (
            f"keep={len(self.to_keep)} add={len(self.to_add)} "
            f"remove={len(self.to_remove)}"
        )


@dataclass
class AvailabilityResponse:
    poll_id: str
    slot_id: str
    participant_name: str
    response: ResponseValue
    umpire_id: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.response, ResponseValue):
            self.response = ResponseValue(self.response)


@dataclass
class Umpire:
    id: str
    name: str
    email: str = ""
    level: int = 1


@dataclass
class PollMatch:
    """Junction record linking a poll to one of its matches."""
    poll_id: str
    match_id: str


@dataclass
class Poll:
    id: str
    title: Optional[str] = None
    status: PollStatus = PollStatus.OPEN

    def __post_init__(self):
        if not isinstance(self.status, PollStatus):
            self.status = PollStatus(self.status)

    @property
    def is_open(self) -> bool:
        return self.status is PollStatus.OPEN
