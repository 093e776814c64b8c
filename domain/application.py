"""
Domain: Applications and dashboard statistics.

An Application links an applicant profile to a Lead. Its status is written by
processes outside this service; here it is only read for aggregation.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Iterable, Mapping


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class DashboardStats:
    """
    Counters shown on the dashboard.

    total_leads counts the leads returned for display; the application
    counters are derived from the full (id, status) set, not the limited
    display fetch.
    """

    total_leads: int = 0
    total_applications: int = 0
    pending_applications: int = 0
    accepted_applications: int = 0

    def to_response(self) -> dict[str, int]:
        data = asdict(self)
        return {
            "totalLeads": data["total_leads"],
            "totalApplications": data["total_applications"],
            "pendingApplications": data["pending_applications"],
            "acceptedApplications": data["accepted_applications"],
        }


def summarize_applications(total_leads: int, statuses: Iterable[Mapping[str, Any]]) -> DashboardStats:
    """Count applications by status from `(id, status)` rows."""

    rows = list(statuses)
    return DashboardStats(
        total_leads=total_leads,
        total_applications=len(rows),
        pending_applications=sum(1 for row in rows if row.get("status") == ApplicationStatus.PENDING.value),
        accepted_applications=sum(1 for row in rows if row.get("status") == ApplicationStatus.ACCEPTED.value),
    )


__all__ = ["ApplicationStatus", "DashboardStats", "summarize_applications"]
