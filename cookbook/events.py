# cookbook/events.py
"""
Event logging for Recipe Transformer.

Responsibilities:
- Provide a single log_event(...) function that appends a JSONL record to
  events.log and never raises (analytics are strictly non-blocking).
- Provide small helper functions for the events the backend records:
  - log_recipe_search(...)
  - log_recipe_viewed(...)
  - log_recipe_remixed(...)
- Read events back for the /analytics endpoints.
"""

from __future__ import annotations

import json
import logging
import os
from collections import Counter
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


def get_event_log_file() -> Path:
    """Path of the JSONL event log (RECIPE_EVENTS_LOG overrides the default events.log)."""
    return Path(os.getenv("RECIPE_EVENTS_LOG", "events.log"))


def _write_to_file(record: Dict[str, Any]) -> None:
    """
    Append a single JSON record to the event log as JSONL.
    Never raise exceptions.
    """
    path = get_event_log_file()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
    except Exception as exc:
        logger.debug("Failed to write event to %s: %s", path, exc)


def log_event(
    event: str,
    session_id: Optional[str],
    payload: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Core event logger.

    Builds a record with keys ts, event, session_id, payload and appends it to
    the event log. Never raises.
    """
    record = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "event": event,
        "session_id": session_id,
        "payload": payload or {},
    }
    _write_to_file(record)


# ---------------------------------------------------------------------------
# Helper functions for common event types
# ---------------------------------------------------------------------------

def log_recipe_search(
    session_id: Optional[str],
    ingredients: List[str],
    filters: Dict[str, str],
    result_count: int,
    total_results: int,
) -> None:
    """
    Log a recipe_search_performed event.

    payload:
    {
        "ingredients": ["chicken", "rice"],
        "filters": {"diet": "vegan", ...},
        "result_count": 20,
        "total_results": 143
    }
    """
    log_event(
        "recipe_search_performed",
        session_id,
        {
            "ingredients": ingredients,
            "filters": filters,
            "result_count": result_count,
            "total_results": total_results,
        },
    )


def log_recipe_viewed(session_id: Optional[str], recipe_id: int, title: Optional[str] = None) -> None:
    """Log a recipe_viewed event."""
    payload: Dict[str, Any] = {"recipe_id": recipe_id}
    if title:
        payload["title"] = title
    log_event("recipe_viewed", session_id, payload)


def log_recipe_remixed(
    session_id: Optional[str],
    recipe_id: Optional[int],
    remix_type: str,
    source: str,
) -> None:
    """Log a recipe_remixed event (source is 'llm' or 'rules')."""
    log_event(
        "recipe_remixed",
        session_id,
        {"recipe_id": recipe_id, "type": remix_type, "source": source},
    )


# ---------------------------------------------------------------------------
# Read side (used by /analytics)
# ---------------------------------------------------------------------------

def _iter_records() -> List[Dict[str, Any]]:
    path = get_event_log_file()
    if not path.exists():
        return []
    records: List[Dict[str, Any]] = []
    try:
        with path.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    records.append(json.loads(line))
                except json.JSONDecodeError:
                    logger.debug("Skipping malformed event line: %s", line[:200])
    except OSError as exc:
        logger.warning("Could not read event log %s: %s", path, exc)
        return []
    return records


def get_recent_events(limit: int = 100) -> List[Dict[str, Any]]:
    """Return the most recent events, newest first."""
    records = _iter_records()
    return list(reversed(records[-limit:]))


def get_event_counts(since_hours: int = 24) -> Dict[str, int]:
    """Count events per event type over the last ``since_hours`` hours."""
    cutoff = datetime.now(timezone.utc) - timedelta(hours=since_hours)
    counts: Counter = Counter()
    for record in _iter_records():
        try:
            ts = datetime.fromisoformat(record.get("ts", ""))
        except (TypeError, ValueError):
            continue
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        if ts >= cutoff:
            counts[record.get("event", "unknown")] += 1
    return dict(counts)
