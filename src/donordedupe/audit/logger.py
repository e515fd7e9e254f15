"""Structured audit logger for JSONL event logging.

Provides append-only structured event logging to JSONL files with
a persistent file handle. The duplicate detector reports one
``stage_started``/``stage_finished`` pair per operation, plus warnings and
errors.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from donordedupe.audit.helpers import (
    generate_run_id,
    get_dependency_versions,
    get_package_version,
    get_python_version,
)
from donordedupe.audit.models import LOG_LEVELS, LogEvent
from donordedupe.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """JSONL audit logger with persistent file handle.

    Writes structured log events to a JSONL file (one JSON object per line).
    Events are append-only and flushed after each write.

    Attributes
    ----------
    run_id : str
        Unique run identifier.
    log_path : Path
        Path to JSONL log file.
    current_stage : str | None
        Operation in progress, attached to events that name none.
    """

    def __init__(self, log_path: Path, run_id: str | None = None) -> None:
        """Initialize audit logger and open file handle.

        Parameters
        ----------
        log_path : Path
            Path to JSONL log file. Parent directories are created.
        run_id : str | None, optional
            Run identifier; a fresh one is generated if omitted.
        """
        self.run_id = run_id or generate_run_id()
        self.log_path = Path(log_path)
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close file."""
        self.close()

    def close(self) -> None:
        """Flush and close the log file handle."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def set_stage(self, stage: str | None) -> None:
        """Set current operation context."""
        self.current_stage = stage

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        rid: str | None = None,
    ) -> None:
        """Write structured event to log.

        Parameters
        ----------
        event_type : str
            Event type identifier (e.g., "stage_started").
        data : dict[str, Any] | None, optional
            Event-specific data payload.
        level : str, optional
            Log level ("DEBUG", "INFO", "WARN", "ERROR").
        stage : str | None, optional
            Operation name, uses current_stage if not provided.
        rid : str | None, optional
            Donor record id if the event concerns one record.

        Raises
        ------
        ValueError
            If ``level`` is not a known log level.
        """
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {level!r}; expected one of {LOG_LEVELS}")

        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data if data is not None else {},
            stage=stage if stage is not None else self.current_stage,
            rid=rid,
        )

        self._write_event(log_event)

    def _write_event(self, event: LogEvent) -> None:
        json.dump(asdict(event), self._file, ensure_ascii=False, separators=(",", ":"))
        self._file.write("\n")
        self._file.flush()

    def run_started(self, command: list[str], parameters: dict[str, Any]) -> None:
        """Log run_started event with the runtime versions.

        Parameters
        ----------
        command : list[str]
            Command-line arguments.
        parameters : dict[str, Any]
            Configuration parameters.
        """
        environment = {
            "package_version": get_package_version(),
            "python_version": get_python_version(),
            "dependencies": get_dependency_versions(["click", "jsonschema"]),
        }
        self.event(
            "run_started",
            data={"command": command, "parameters": parameters, "environment": environment},
        )

    def run_finished(self, status: str, duration_seconds: float) -> None:
        """Log run_finished event with "success" or "failed" status."""
        self.event(
            "run_finished",
            data={"status": status, "duration_seconds": duration_seconds},
        )

    def stage_started(self, stage: str, expected_records: int | None = None) -> None:
        """Log stage_started event and make ``stage`` the current context.

        Parameters
        ----------
        stage : str
            Operation name.
        expected_records : int | None, optional
            Size of the record snapshot, when known.
        """
        self.set_stage(stage)

        data: dict[str, Any] = {}
        if expected_records is not None:
            data["expected_records"] = expected_records

        self.event("stage_started", data=data, stage=stage)

    def stage_finished(
        self,
        stage: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Log stage_finished event and clear the current context.

        Parameters
        ----------
        stage : str
            Operation name.
        duration_seconds : float
            Operation wall-clock time in seconds.
        counters : dict[str, int] | None, optional
            Operation counters (records scanned, pairs compared, ...).
        """
        data: dict[str, Any] = {"duration_seconds": duration_seconds}
        if counters:
            data["counters"] = counters

        self.event("stage_finished", data=data, stage=stage)
        self.set_stage(None)

    def artifact_written(
        self,
        path: str,
        sha256: str,
        bytes_written: int | None = None,
    ) -> None:
        """Log artifact_written event for a report file.

        Parameters
        ----------
        path : str
            Path to the artifact.
        sha256 : str
            SHA256 hash of the artifact.
        bytes_written : int | None, optional
            File size in bytes.
        """
        data: dict[str, Any] = {"path": path, "sha256": sha256}
        if bytes_written is not None:
            data["bytes"] = bytes_written

        self.event("artifact_written", data=data)

    def error(
        self,
        exception_class: str,
        message: str,
        kind: str,
        stage: str | None = None,
        rid: str | None = None,
        traceback: str | None = None,
    ) -> None:
        """Log error event.

        Parameters
        ----------
        exception_class : str
            Exception class name.
        message : str
            Error message.
        kind : str
            Error kind reported to the caller.
        stage : str | None, optional
            Operation where error occurred.
        rid : str | None, optional
            Donor record id if the error concerns one record.
        traceback : str | None, optional
            Stack trace for internal failures.
        """
        data: dict[str, Any] = {
            "exception_class": exception_class,
            "message": message,
            "kind": kind,
        }
        if traceback is not None:
            data["traceback"] = traceback

        self.event("error", data=data, stage=stage, rid=rid, level="ERROR")
