"""Reporting for switchyard.

Every request-response cycle produces one Report (timing and outcome),
which the application hands to a Reporter.

Key Components:
    Report: Frozen record of one cycle.
    Reporter: Protocol for report storage.
    NullReporter: Discards reports (default).
    InMemoryReporter: Keeps reports in memory.
    FileReporter: Appends reports to a locked JSONL file.
    reporter_from_settings: Builds the configured reporter.
"""

from switchyard.reporting.report import Report
from switchyard.reporting.reporters import (
    Reporter,
    NullReporter,
    InMemoryReporter,
    FileReporter,
    reporter_from_settings,
)

__all__ = [
    "Report",
    "Reporter",
    "NullReporter",
    "InMemoryReporter",
    "FileReporter",
    "reporter_from_settings",
]
