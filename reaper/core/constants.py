"""Reaper constants shared by the scheduler, quota and manual triggers."""

from datetime import timedelta

# Hard ceiling on records reaped per tick or per manual request.
MAX_BATCH = 1000

DEFAULT_INTERVAL = timedelta(minutes=15)
QUOTA_WINDOW = timedelta(days=7)

PAUSE_SENTINEL_KEY = "PAUSED"
REAPER_ACTOR = "reaper"

# Page size when scanning the index for eligible records.
SELECTION_PAGE_SIZE = 500
