"""
Dashboard action items.
Points planners at open polls that still need umpires or responses, and at
upcoming matches that no poll covers yet.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional, Set

from umpire_planner.models import (
    Poll, PollMatch, Assignment, AvailabilityResponse, Match
)
from umpire_planner.core.config import (
    REQUIRED_UMPIRES_PER_MATCH, LOW_RESPONSE_RATE, UNPOLLED_LOOKAHEAD_DAYS
)
from umpire_planner.core.logging_config import get_logger

logger = get_logger(__name__)

UNASSIGNED_MATCH = "unassigned_match"
LOW_RESPONSE_POLL = "low_response_poll"
UNPOLLED_MATCH = "unpolled_match"


@dataclass
class ActionItem:
    type: str
    label: str
    poll_id: Optional[str] = None
    match_id: Optional[str] = None


def find_action_items(polls: List[Poll], poll_matches: List[PollMatch],
                      assignments: List[Assignment], responses: List[AvailabilityResponse],
                      total_umpires: int, matches: List[Match],
                      today: Optional[date] = None) -> List[ActionItem]:
    """
    Collect the action items for an organisation's dashboard.

    Items come in three groups, in this order:
    - per open poll, the number of its matches with fewer than
      REQUIRED_UMPIRES_PER_MATCH assignments (assignments of open polls only)
    - open polls where fewer than LOW_RESPONSE_RATE of the organisation's
      umpires responded; skipped entirely when total_umpires is 0
    - matches dated today up to UNPOLLED_LOOKAHEAD_DAYS ahead that belong
      to no poll at all, open or closed

    Args:
        polls: The organisation's polls
        poll_matches: Poll-match links of all polls
        assignments: Assignments, each carrying its poll_id
        responses: Availability responses
        total_umpires: Number of umpires in the organisation
        matches: Matches to check for missing polls
        today: Reference day, defaults to date.today()

    Returns:
        List of ActionItem
    """
    today = today or date.today()
    items: List[ActionItem] = []

    open_polls = {poll.id: poll for poll in polls if poll.is_open}

    # Count assignments per match across open polls
    assignment_counts: Dict[str, int] = {}
    for assignment in assignments:
        if assignment.poll_id in open_polls:
            assignment_counts[assignment.match_id] = assignment_counts.get(assignment.match_id, 0) + 1

    unassigned_by_poll: Dict[str, int] = {}
    for link in poll_matches:
        if link.poll_id not in open_polls:
            continue
        if assignment_counts.get(link.match_id, 0) < REQUIRED_UMPIRES_PER_MATCH:
            unassigned_by_poll[link.poll_id] = unassigned_by_poll.get(link.poll_id, 0) + 1

    for poll_id, count in unassigned_by_poll.items():
        title = open_polls[poll_id].title or "poll"
        noun = "match" if count == 1 else "matches"
        items.append(ActionItem(
            UNASSIGNED_MATCH, f"{count} unassigned {noun} in {title}", poll_id=poll_id
        ))

    # Low response polls
    if total_umpires > 0:
        respondents: Dict[str, Set[str]] = {}
        for response in responses:
            if response.poll_id in open_polls and response.umpire_id:
                respondents.setdefault(response.poll_id, set()).add(response.umpire_id)

        for poll_id, poll in open_polls.items():
            count = len(respondents.get(poll_id, ()))
            if count / total_umpires < LOW_RESPONSE_RATE:
                items.append(ActionItem(
                    LOW_RESPONSE_POLL,
                    f"Low response rate for {poll.title or 'poll'} ({count}/{total_umpires})",
                    poll_id=poll_id
                ))

    # Upcoming matches that are in no poll
    last_day = (today + timedelta(days=UNPOLLED_LOOKAHEAD_DAYS)).isoformat()
    first_day = today.isoformat()
    polled = {link.match_id for link in poll_matches}
    for match in matches:
        if first_day <= match.date <= last_day and match.id not in polled:
            items.append(ActionItem(
                UNPOLLED_MATCH,
                f"{match.home_team} vs {match.away_team} ({match.date}) not in any poll",
                match_id=match.id
            ))

    logger.debug(f"Found {len(items)} action items")
    return items
