"""
Analytics router for event tracking endpoints.

This router provides endpoints for querying the JSONL event log written by
cookbook.events:
- GET /analytics/events/recent - Get recent events
- GET /analytics/events/counts - Get event type counts

All endpoints fail gracefully: a missing or unreadable log yields empty data
rather than an error.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Query

from cookbook.events import get_event_counts as count_events
from cookbook.events import get_recent_events as recent_events

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get(
    "/events/recent",
    summary="Get recent events",
    description="Retrieve the most recent analytics events, newest first.",
)
def get_recent_events(
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of events to return")
) -> Dict[str, Any]:
    """
    Get the most recent analytics events.

    Example response:
    {
        "events": [
            {
                "ts": "2024-01-15T10:30:00.123456+00:00",
                "event": "recipe_search_performed",
                "session_id": "abc123",
                "payload": {"ingredients": ["chicken", "rice"], "result_count": 20, ...}
            }
        ]
    }
    """
    return {"events": recent_events(limit=limit)}


@router.get(
    "/events/counts",
    summary="Get event type counts",
    description="Get counts of events by type over the last N hours.",
)
def get_event_counts(
    since_hours: int = Query(24, ge=1, le=168, description="Number of hours to look back (default: 24, max: 168)")
) -> Dict[str, Any]:
    """
    Get event type counts over the last N hours.

    Example response:
    {
        "since_hours": 24,
        "counts": {"recipe_search_performed": 12, "recipe_viewed": 7, "recipe_remixed": 2}
    }
    """
    return {"since_hours": since_hours, "counts": count_events(since_hours=since_hours)}
