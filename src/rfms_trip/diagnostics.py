"""Collection of non-fatal conditions found while processing one trip."""

from __future__ import annotations

import logging
from typing import Any

from rfms_trip.models.metrics import TripIssue

logger = logging.getLogger("rfms_trip.diagnostics")


class IssueCollector:
    """Logs data problems for one trip and keeps them for the result.

    Usage:
        issues = IssueCollector("T-1001")
        issues.warn(DataQualityWarning, "distance", "end odometer below start", start=10, end=5)
        metrics = metrics.model_copy(update={"issues": issues.issues})
    """

    def __init__(self, trip_id: str = "") -> None:
        self.trip_id = trip_id
        self._issues: list[TripIssue] = []

    def __len__(self) -> int:
        return len(self._issues)

    @property
    def issues(self) -> tuple[TripIssue, ...]:
        return tuple(self._issues)

    def warn(
        self,
        category: type[BaseException],
        metric: str,
        message: str,
        **context: Any,
    ) -> TripIssue:
        """Record a warning-level issue and log it with its context."""
        return self._record(logging.WARNING, category, metric, message, context)

    def error(
        self,
        category: type[BaseException],
        metric: str,
        message: str,
        **context: Any,
    ) -> TripIssue:
        """Record an issue for a metric whose computation failed."""
        return self._record(logging.ERROR, category, metric, message, context)

    def _record(
        self,
        level: int,
        category: type[BaseException],
        metric: str,
        message: str,
        context: dict[str, Any],
    ) -> TripIssue:
        issue = TripIssue(category=category.__name__, metric=metric, message=message)
        self._issues.append(issue)
        ctx = ", ".join(f"{k}={v!r}" for k, v in context.items())
        logger.log(
            level,
            "%s: trip=%s metric=%s: %s%s",
            issue.category, self.trip_id, metric, message, f" ({ctx})" if ctx else "",
        )
        return issue
