"""
Response and assignment exports for polls.
Builds the availability matrix and the assignment overview of a poll and
renders them as Markdown tables.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from umpire_planner.models import (
    Match, PollSlot, AvailabilityResponse, Assignment, Umpire, ResponseValue,
    from_epoch_ms, to_epoch_ms
)
from umpire_planner.core.config import REQUIRED_UMPIRES_PER_MATCH


def default_format_date(value) -> str:
    if isinstance(value, str) and len(value) == 10:
        return value
    return from_epoch_ms(to_epoch_ms(value)).strftime("%Y-%m-%d")


def default_format_time(value) -> str:
    return from_epoch_ms(to_epoch_ms(value)).strftime("%H:%M")


@dataclass
class ExportSlotHeader:
    date: str
    time_range: str
    slot_id: str


@dataclass
class ResponseExportRow:
    umpire_name: str
    cells: List[Optional[ResponseValue]] = field(default_factory=list)


@dataclass
class ResponseExportData:
    poll_title: str
    headers: List[ExportSlotHeader] = field(default_factory=list)
    rows: List[ResponseExportRow] = field(default_factory=list)


@dataclass
class AssignmentExportRow:
    date: str
    time: str
    home_team: str
    away_team: str
    venue: str
    field: str
    competition: str
    assigned_umpires: List[str]
    assignment_count: str


@dataclass
class AssignmentExportData:
    poll_title: str
    rows: List[AssignmentExportRow]


def prepare_response_export(poll_title: str, slots: List[PollSlot],
                            responses: List[AvailabilityResponse],
                            format_date: Callable = default_format_date,
                            format_time: Callable = default_format_time) -> ResponseExportData:
    """
    Build the umpire x slot availability matrix of a poll.

    Only responses linked to an umpire count. The first name seen for an
    umpire is used; rows are sorted by name and columns chronologically.
    """
    sorted_slots = sorted(slots, key=lambda s: s.start_ms)

    headers = [
        ExportSlotHeader(
            date=format_date(slot.start_time),
            time_range=f"{format_time(slot.start_time)} - {format_time(slot.end_time)}",
            slot_id=slot.id
        )
        for slot in sorted_slots
    ]

    participants: Dict[str, str] = {}
    response_map: Dict[tuple, ResponseValue] = {}
    for response in responses:
        if not response.umpire_id:
            continue
        participants.setdefault(response.umpire_id, response.participant_name)
        response_map[(response.slot_id, response.umpire_id)] = response.response

    ordered = sorted(participants.items(), key=lambda item: item[1].lower())
    rows = [
        ResponseExportRow(
            umpire_name=name,
            cells=[response_map.get((slot.id, umpire_id)) for slot in sorted_slots]
        )
        for umpire_id, name in ordered
    ]

    return ResponseExportData(poll_title=poll_title, headers=headers, rows=rows)


def prepare_assignment_export(poll_title: str, matches: List[Match],
                              assignments: List[Assignment], umpires: List[Umpire],
                              format_date: Callable = default_format_date,
                              format_time: Callable = default_format_time) -> AssignmentExportData:
    """Build one row per match with the umpires assigned to it."""
    sorted_matches = sorted(
        matches,
        key=lambda m: (m.date, m.start_ms if m.start_ms is not None else -1)
    )

    umpire_names = {umpire.id: umpire.name for umpire in umpires}

    names_by_match: Dict[str, List[str]] = {}
    for assignment in assignments:
        names_by_match.setdefault(assignment.match_id, []).append(
            umpire_names.get(assignment.umpire_id, "")
        )

    rows = []
    for match in sorted_matches:
        assigned = sorted(names_by_match.get(match.id, []), key=str.lower)
        rows.append(AssignmentExportRow(
            date=format_date(match.date),
            time=format_time(match.start_time) if match.has_start_time else "",
            home_team=match.home_team,
            away_team=match.away_team,
            venue=match.venue or "",
            field=match.field or "",
            competition=match.competition or "",
            assigned_umpires=assigned,
            assignment_count=f"{len(assigned)}/{REQUIRED_UMPIRES_PER_MATCH}"
        ))

    return AssignmentExportData(poll_title=poll_title, rows=rows)


# Markdown rendering

RESPONSE_SYMBOLS = {
    ResponseValue.YES: "✓",
    ResponseValue.IF_NEED_BE: "?",
    ResponseValue.NO: "✗",
}

DEFAULT_RESPONSE_LABELS = {
    "yes": "Available",
    "if_need_be": "If need be",
    "no": "Not available",
    "no_response": "No response",
}

DEFAULT_ASSIGNMENT_LABELS = [
    "Date", "Time", "Home", "Away", "Venue", "Field", "Competition", "Umpires", "Count"
]


def _escape_cell(value: str) -> str:
    return value.replace("|", "\\|")


def _render_table(headers: List[str], body: List[List[str]]) -> List[str]:
    widths = [
        max([len(header), 3] + [len(row[i]) for row in body])
        for i, header in enumerate(headers)
    ]
    lines = [
        "| " + " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers)) + " |",
        "| " + " | ".join("-" * w for w in widths) + " |",
    ]
    for row in body:
        lines.append("| " + " | ".join(c.ljust(widths[i]) for i, c in enumerate(row)) + " |")
    return lines


def generate_response_markdown(data: ResponseExportData, labels: Optional[Dict[str, str]] = None) -> str:
    labels = {**DEFAULT_RESPONSE_LABELS, **(labels or {})}
    lines = [f"# {data.poll_title}", ""]

    if not data.rows:
        return "\n".join(lines)

    headers = [""] + [_escape_cell(f"{h.date} {h.time_range}") for h in data.headers]
    body = [
        [_escape_cell(row.umpire_name)]
        + [RESPONSE_SYMBOLS[cell] if cell else "-" for cell in row.cells]
        for row in data.rows
    ]
    lines.extend(_render_table(headers, body))
    lines.append("")
    lines.append(
        f"{RESPONSE_SYMBOLS[ResponseValue.YES]} = {labels['yes']}, "
        f"? = {labels['if_need_be']}, "
        f"{RESPONSE_SYMBOLS[ResponseValue.NO]} = {labels['no']}, "
        f"- = {labels['no_response']}"
    )
    return "\n".join(lines)


def generate_assignment_markdown(data: AssignmentExportData,
                                 column_labels: Optional[List[str]] = None) -> str:
    column_labels = column_labels or DEFAULT_ASSIGNMENT_LABELS
    lines = [f"# {data.poll_title}", ""]

    if not data.rows:
        return "\n".join(lines)

    headers = [_escape_cell(label) for label in column_labels]
    body = [
        [
            _escape_cell(value) for value in (
                row.date, row.time, row.home_team, row.away_team, row.venue,
                row.field, row.competition, ", ".join(row.assigned_umpires),
                row.assignment_count
            )
        ]
        for row in data.rows
    ]
    lines.extend(_render_table(headers, body))
    return "\n".join(lines)
