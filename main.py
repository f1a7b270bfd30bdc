"""
Command line entry point for the Umpire Planner.
Reads matches, slots and assignments from a JSON file and prints poll slots,
the match-to-slot mapping or assignment conflicts.
"""

import sys
import json
import argparse
import logging
from datetime import datetime

from umpire_planner.models import Match, PollSlot, Assignment
from umpire_planner.services import (
    group_matches_into_slots, map_matches_to_slots, find_conflicts
)
from umpire_planner.core.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def load_records(path: str):
    """
    Load records from a JSON file with optional "matches", "slots" and
    "assignments" lists.
    """
    with open(path, encoding="utf-8") as handle:
        data = json.load(handle)

    matches = [Match(**m) for m in data.get("matches", [])]
    slots = [PollSlot(**s) for s in data.get("slots", [])]
    assignments = [Assignment(**a) for a in data.get("assignments", [])]
    return matches, slots, assignments


def print_slots(matches):
    slots = group_matches_into_slots(m for m in matches if m.has_start_time)
    print(f"\n{len(slots)} slot(s) for {len(matches)} match(es):")
    for index, slot in enumerate(slots, start=1):
        print(f"  {index:>3}. {slot}")


def print_mapping(matches, slots):
    mapping = map_matches_to_slots(matches, slots)
    print(f"\nMapped {len(mapping)} of {len(matches)} match(es):")
    for match in matches:
        print(f"  {match.id}: {mapping.get(match.id, '-')}")


def print_conflicts(assignments, matches):
    conflicts = find_conflicts(assignments, matches)
    if not conflicts:
        print("\n[PASS] No conflicts found")
        return

    print(f"\n{len(conflicts)} conflict(s):")
    for conflict in conflicts:
        print(
            f"  [{conflict.severity.value.upper()}] umpire {conflict.umpire_id}: "
            f"{conflict.match_id} <-> {conflict.conflicting_match_id}"
        )


def main():
    parser = argparse.ArgumentParser(
        description='Umpire Planner - poll slots and assignment conflicts'
    )
    parser.add_argument(
        'command',
        choices=['slots', 'mapping', 'conflicts'],
        help='What to compute'
    )
    parser.add_argument(
        'input',
        help='JSON file with "matches", "slots" and/or "assignments"'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    args = parser.parse_args()
    setup_logging(logging.DEBUG if args.verbose else None)

    print("=" * 60)
    print("UMPIRE PLANNER")
    print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 60)

    try:
        matches, slots, assignments = load_records(args.input)
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Could not load {args.input}: {e}")
        return 1

    if args.command == 'slots':
        print_slots(matches)
    elif args.command == 'mapping':
        print_mapping(matches, slots)
    else:
        print_conflicts(assignments, matches)

    return 0


if __name__ == "__main__":
    sys.exit(main())
