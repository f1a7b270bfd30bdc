"""
Configuration constants for the Umpire Planner.
All configurable settings are defined here.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Slot Rules
SLOT_BUFFER_MINUTES = 30           # Umpires arrive this long before the push-back
SLOT_ROUNDING_MINUTES = 15         # Slot starts are floored to this boundary
SLOT_DURATION_MINUTES = 120        # Fixed window length before merging
SLOT_MERGE_THRESHOLD_MINUTES = 15  # Measured from the first slot of a merge group

MINUTE_MS = 60 * 1000
SLOT_BUFFER_MS = SLOT_BUFFER_MINUTES * MINUTE_MS
SLOT_ROUNDING_MS = SLOT_ROUNDING_MINUTES * MINUTE_MS
SLOT_DURATION_MS = SLOT_DURATION_MINUTES * MINUTE_MS
SLOT_MERGE_THRESHOLD_MS = SLOT_MERGE_THRESHOLD_MINUTES * MINUTE_MS

# Poll Rules
MAX_BULK_ITEMS = 500
REQUIRED_UMPIRES_PER_MATCH = 2
LOW_RESPONSE_RATE = 0.5           # Share of umpires below which a poll needs a nudge
UNPOLLED_LOOKAHEAD_DAYS = 7

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# API Server
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
