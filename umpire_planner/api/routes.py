"""
API routes for slot calculation, reconciliation and conflict detection.
Every endpoint is stateless: requests carry the records to work on.
"""

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, BeforeValidator
from typing import Annotated, List, Dict, Optional
from datetime import datetime, date

from umpire_planner.models import (
    Match, PollSlot, Assignment, AvailabilityResponse, Umpire, TimeSlot,
    Poll, PollMatch
)
from umpire_planner.services import (
    calculate_slot, group_matches_into_slots, diff_slots, map_matches_to_slots,
    find_conflicts, find_action_items, plan_new_poll, plan_poll_update,
    PollPlanningError
)
from umpire_planner.services.exports import (
    prepare_response_export, prepare_assignment_export,
    generate_response_markdown, generate_assignment_markdown
)
from umpire_planner.core.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["scheduling"])


def _iso_only(value):
    # pydantic would read numbers as epoch seconds; models use milliseconds
    if isinstance(value, (int, float)):
        raise ValueError("Timestamps must be ISO-8601 strings")
    return value


IsoDatetime = Annotated[datetime, BeforeValidator(_iso_only)]


class MatchIn(BaseModel):
    """Request model for a single match."""
    id: str
    date: str
    start_time: Optional[IsoDatetime] = None
    home_team: str = ""
    away_team: str = ""
    competition: Optional[str] = None
    venue: Optional[str] = None
    field: Optional[str] = None

    def to_model(self) -> Match:
        return Match(**self.model_dump())


class PollSlotIn(BaseModel):
    id: str
    poll_id: str
    start_time: IsoDatetime
    end_time: IsoDatetime

    def to_model(self) -> PollSlot:
        return PollSlot(**self.model_dump())


class AssignmentIn(BaseModel):
    umpire_id: str
    match_id: str
    id: Optional[str] = None
    poll_id: Optional[str] = None

    def to_model(self) -> Assignment:
        return Assignment(**self.model_dump())


class ResponseIn(BaseModel):
    poll_id: str
    slot_id: str
    participant_name: str
    response: str
    umpire_id: Optional[str] = None

    def to_model(self) -> AvailabilityResponse:
        return AvailabilityResponse(**self.model_dump())


class UmpireIn(BaseModel):
    id: str
    name: str

    def to_model(self) -> Umpire:
        return Umpire(id=self.id, name=self.name)


class TimeSlotOut(BaseModel):
    """Response model for an availability window."""
    start: IsoDatetime
    end: IsoDatetime

    @classmethod
    def from_slot(cls, slot: TimeSlot) -> "TimeSlotOut":
        return cls(start=slot.start, end=slot.end)


class CalculateSlotRequest(BaseModel):
    match_time: IsoDatetime


class GroupSlotsRequest(BaseModel):
    matches: List[MatchIn]


class DiffSlotsRequest(BaseModel):
    existing: List[PollSlotIn]
    desired: List[TimeSlotOut]


class DiffSlotsResponse(BaseModel):
    to_add: List[TimeSlotOut]
    to_remove: List[PollSlotIn]
    to_keep: List[PollSlotIn]


class SlotMappingRequest(BaseModel):
    matches: List[MatchIn]
    slots: List[PollSlotIn]


class ConflictsRequest(BaseModel):
    assignments: List[AssignmentIn]
    matches: List[MatchIn]


class ConflictOut(BaseModel):
    umpire_id: str
    match_id: str
    conflicting_match_id: str
    severity: str


class PollPlanRequest(BaseModel):
    title: str
    match_ids: List[str]
    matches: List[MatchIn]


class PollPlanResponse(BaseModel):
    title: str
    match_ids: List[str]
    slots: List[TimeSlotOut]


class PollUpdateRequest(BaseModel):
    existing_slots: List[PollSlotIn]
    match_ids: List[str]
    matches: List[MatchIn]


class PollUpdateResponse(BaseModel):
    match_ids: List[str]
    slot_diff: DiffSlotsResponse


class ResponseExportRequest(BaseModel):
    poll_title: str
    slots: List[PollSlotIn]
    responses: List[ResponseIn]


class AssignmentExportRequest(BaseModel):
    poll_title: str
    matches: List[MatchIn]
    assignments: List[AssignmentIn]
    umpires: List[UmpireIn]


def _poll_slot_out(slot: PollSlot) -> PollSlotIn:
    return PollSlotIn(
        id=slot.id, poll_id=slot.poll_id,
        start_time=slot.start_time, end_time=slot.end_time
    )


def _diff_out(diff) -> DiffSlotsResponse:
    return DiffSlotsResponse(
        to_add=[TimeSlotOut.from_slot(s) for s in diff.to_add],
        to_remove=[_poll_slot_out(s) for s in diff.to_remove],
        to_keep=[_poll_slot_out(s) for s in diff.to_keep]
    )


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@router.post("/slots/calculate", response_model=TimeSlotOut)
async def calculate_slot_endpoint(request: CalculateSlotRequest):
    """Availability window for a single match start time."""
    return TimeSlotOut.from_slot(calculate_slot(request.match_time))


@router.post("/slots/group", response_model=List[TimeSlotOut])
async def group_slots_endpoint(request: GroupSlotsRequest):
    """
    Merged poll slots for a set of matches.

    Matches without a start time are ignored.
    """
    matches = [m.to_model() for m in request.matches if m.start_time is not None]
    return [TimeSlotOut.from_slot(s) for s in group_matches_into_slots(matches)]


@router.post("/slots/diff", response_model=DiffSlotsResponse)
async def diff_slots_endpoint(request: DiffSlotsRequest):
    """Reconcile persisted slots with the desired set."""
    try:
        desired = [TimeSlot.from_instants(s.start, s.end) for s in request.desired]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    diff = diff_slots([s.to_model() for s in request.existing], desired)
    return _diff_out(diff)


@router.post("/matches/slot-mapping", response_model=Dict[str, str])
async def slot_mapping_endpoint(request: SlotMappingRequest):
    """Map matches to the slot containing their start time."""
    return map_matches_to_slots(
        [m.to_model() for m in request.matches],
        [s.to_model() for s in request.slots]
    )


@router.post("/conflicts", response_model=List[ConflictOut])
async def conflicts_endpoint(request: ConflictsRequest):
    """Hard and soft double-bookings per umpire."""
    conflicts = find_conflicts(
        [a.to_model() for a in request.assignments],
        [m.to_model() for m in request.matches]
    )
    return [
        ConflictOut(
            umpire_id=c.umpire_id,
            match_id=c.match_id,
            conflicting_match_id=c.conflicting_match_id,
            severity=c.severity.value
        )
        for c in conflicts
    ]


@router.post("/polls/plan", response_model=PollPlanResponse)
async def plan_poll_endpoint(request: PollPlanRequest):
    """Validate a new poll and calculate its slots."""
    try:
        plan = plan_new_poll(
            request.title, request.match_ids, [m.to_model() for m in request.matches]
        )
    except PollPlanningError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return PollPlanResponse(
        title=plan.title,
        match_ids=plan.match_ids,
        slots=[TimeSlotOut.from_slot(s) for s in plan.slots]
    )


@router.post("/polls/plan-update", response_model=PollUpdateResponse)
async def plan_poll_update_endpoint(request: PollUpdateRequest):
    """Slot changes for a poll whose match set was edited."""
    try:
        plan = plan_poll_update(
            [s.to_model() for s in request.existing_slots],
            request.match_ids,
            [m.to_model() for m in request.matches]
        )
    except PollPlanningError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return PollUpdateResponse(match_ids=plan.match_ids, slot_diff=_diff_out(plan.slot_diff))


@router.post("/exports/responses", response_class=PlainTextResponse)
async def export_responses_endpoint(request: ResponseExportRequest):
    """Availability matrix of a poll as Markdown."""
    try:
        responses = [r.to_model() for r in request.responses]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid response value: {str(e)}")

    try:
        data = prepare_response_export(
            request.poll_title, [s.to_model() for s in request.slots], responses
        )
        return generate_response_markdown(data)
    except Exception as e:
        logger.exception("Response export failed")
        raise HTTPException(status_code=500, detail=f"Export failed: {str(e)}")


@router.post("/exports/assignments", response_class=PlainTextResponse)
async def export_assignments_endpoint(request: AssignmentExportRequest):
    """Assignment overview of a poll as Markdown."""
    try:
        data = prepare_assignment_export(
            request.poll_title,
            [m.to_model() for m in request.matches],
            [a.to_model() for a in request.assignments],
            [u.to_model() for u in request.umpires]
        )
        return generate_assignment_markdown(data)
    except Exception as e:
        logger.exception("Assignment export failed")
        raise HTTPException(status_code=500, detail=f"Export failed: {str(e)}")


class PollIn(BaseModel):
    id: str
    title: Optional[str] = None
    status: str = "open"


class PollMatchIn(BaseModel):
    poll_id: str
    match_id: str


class ActionItemsRequest(BaseModel):
    polls: List[PollIn]
    poll_matches: List[PollMatchIn]
    assignments: List[AssignmentIn]
    responses: List[ResponseIn]
    total_umpires: int
    matches: List[MatchIn]
    today: Optional[date] = None


class ActionItemOut(BaseModel):
    type: str
    label: str
    poll_id: Optional[str] = None
    match_id: Optional[str] = None


@router.post("/dashboard/action-items", response_model=List[ActionItemOut])
async def action_items_endpoint(request: ActionItemsRequest):
    """Open work for the planner: unassigned matches, quiet polls, unpolled matches."""
    try:
        polls = [Poll(id=p.id, title=p.title, status=p.status) for p in request.polls]
        responses = [r.to_model() for r in request.responses]
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    items = find_action_items(
        polls,
        [PollMatch(poll_id=pm.poll_id, match_id=pm.match_id) for pm in request.poll_matches],
        [a.to_model() for a in request.assignments],
        responses,
        request.total_umpires,
        [m.to_model() for m in request.matches],
        today=request.today
    )
    return [
        ActionItemOut(type=i.type, label=i.label, poll_id=i.poll_id, match_id=i.match_id)
        for i in items
    ]
