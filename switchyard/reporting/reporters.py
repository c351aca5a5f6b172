"""Reporters store the report of each request-response cycle.

Classes:
    Reporter: Protocol every reporter satisfies.
    NullReporter: Discards reports.
    InMemoryReporter: Keeps reports in a list; useful in tests.
    FileReporter: Appends reports to a JSONL file under a file lock.

The file reporter uses portalocker so that several processes can append to
the same file safely. Each line of the file is one report:

    {"request_id": "...", "request_text": "...", "response_status": "success", ...}
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

import portalocker

from switchyard.config.settings import SwitchyardSettings, get_settings
from switchyard.core.exceptions import ConfigurationError, ReportingError
from switchyard.reporting.report import Report

logger = logging.getLogger(__name__)


@runtime_checkable
class Reporter(Protocol):
    """Storage capability for reports."""

    def store(self, report: Report) -> None:
        ...


class NullReporter:
    """Reporter that ignores every report."""

    def store(self, report: Report) -> None:
        pass


class InMemoryReporter:
    """Reporter that keeps reports in process memory."""

    def __init__(self) -> None:
        self._reports: list[Report] = []
        self._lock = threading.Lock()

    def store(self, report: Report) -> None:
        with self._lock:
            self._reports.append(report)

    @property
    def reports(self) -> list[Report]:
        """Stored reports, oldest first."""
        with self._lock:
            return self._reports.copy()

    def clear(self) -> None:
        with self._lock:
            self._reports.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._reports)


class FileReporter:
    """Reporter that appends reports to a JSONL file.

    Attributes:
        path: The report file.
        lock_timeout: Seconds to wait for the file lock.
    """

    def __init__(self, path: Union[str, Path], lock_timeout: float = 10.0) -> None:
        """Initialize the reporter.

        Args:
            path: JSONL file to append to. Parent directories are created.
            lock_timeout: Seconds to wait for the file lock.
        """
        self.path = Path(path)
        self.lock_timeout = lock_timeout
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def store(self, report: Report) -> None:
        """Append a report as one JSON line.

        Raises:
            ReportingError: If the lock cannot be acquired or the write fails.
        """
        line = json.dumps(report.to_dict(), ensure_ascii=False)
        try:
            with portalocker.Lock(
                self.path,
                mode="a",
                timeout=self.lock_timeout,
                flags=portalocker.LOCK_EX | portalocker.LOCK_NB,
            ) as f:
                f.write(line + "\n")
        except portalocker.LockException as e:
            raise ReportingError(
                f"Failed to acquire lock for report file {self.path}: {e}",
                context={"path": str(self.path)},
            ) from e
        except OSError as e:
            raise ReportingError(
                f"Failed to write report to {self.path}: {e}",
                context={"path": str(self.path)},
            ) from e

    def read_reports(self) -> list[Report]:
        """Read back every stored report.

        Returns:
            Reports in the order they were stored; empty if the file does
            not exist yet.

        Raises:
            ReportingError: If the file is locked or a line is corrupted.
        """
        if not self.path.exists():
            return []
        try:
            with portalocker.Lock(
                self.path,
                mode="r",
                timeout=self.lock_timeout,
                flags=portalocker.LOCK_SH | portalocker.LOCK_NB,
            ) as f:
                lines = f.read().splitlines()
            return [Report.from_dict(json.loads(line)) for line in lines if line.strip()]
        except portalocker.LockException as e:
            raise ReportingError(f"Failed to acquire lock for report file {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ReportingError(f"Corrupted report file {self.path}: {e}") from e


def reporter_from_settings(settings: Optional[SwitchyardSettings] = None) -> Reporter:
    """Build the reporter selected by settings.reporting.backend.

    Raises:
        ConfigurationError: If the backend is unknown.
    """
    settings = settings or get_settings()
    backend = settings.reporting.backend
    if backend == "null":
        return NullReporter()
    if backend == "memory":
        return InMemoryReporter()
    if backend == "file":
        return FileReporter(
            settings.reporting.report_file,
            lock_timeout=settings.reporting.lock_timeout,
        )
    raise ConfigurationError(
        f"Unknown reporting backend '{backend}'", config_key="reporting.backend"
    )


__all__ = [
    "Reporter",
    "NullReporter",
    "InMemoryReporter",
    "FileReporter",
    "reporter_from_settings",
]
