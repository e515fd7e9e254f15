"""Data models for audit logging."""

from dataclasses import dataclass
from typing import Any

__all__ = ["LogEvent", "LOG_LEVELS", "LOG_EVENT_SCHEMA"]

LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


@dataclass
class LogEvent:
    """Structured log event.

    Attributes
    ----------
    ts : str
        ISO8601 timestamp with microseconds (UTC).
    run_id : str
        Unique run identifier.
    level : str
        Log level ("DEBUG", "INFO", "WARN", "ERROR").
    event : str
        Event type identifier.
    data : dict[str, Any]
        Event-specific data payload.
    stage : str | None
        Operation the event belongs to (e.g., "scan_all_duplicates").
    rid : str | None
        Donor record id if the event concerns one record.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any]
    stage: str | None = None
    rid: str | None = None


# JSON schema of one serialized LogEvent line
LOG_EVENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "donordedupe audit event",
    "type": "object",
    "required": ["ts", "run_id", "level", "event", "data", "stage", "rid"],
    "additionalProperties": False,
    "properties": {
        "ts": {"type": "string", "pattern": "Z$"},
        "run_id": {"type": "string", "minLength": 1},
        "level": {"enum": list(LOG_LEVELS)},
        "event": {"type": "string", "minLength": 1},
        "data": {"type": "object"},
        "stage": {"type": ["string", "null"]},
        "rid": {"type": ["string", "null"]},
    },
}
