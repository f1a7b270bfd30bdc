"""
Umpire Planner.
Slot calculation, slot reconciliation and assignment conflict detection for
hockey umpire availability polls.
"""

__version__ = "1.0.0"
