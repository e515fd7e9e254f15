"""Audit logging subsystem for donordedupe.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent: one structured event
"""

from donordedupe.audit.helpers import (
    generate_run_id,
    get_dependency_versions,
    get_package_version,
    get_python_version,
)
from donordedupe.audit.logger import AuditLogger
from donordedupe.audit.models import LOG_EVENT_SCHEMA, LOG_LEVELS, LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "LOG_LEVELS",
    "LOG_EVENT_SCHEMA",
    "generate_run_id",
    "get_package_version",
    "get_python_version",
    "get_dependency_versions",
]
