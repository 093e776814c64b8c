"""
Application repository (persistence).

Read-only access to the `applications` table. Applications are created and
their status changed outside this service.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from supabase import Client

from domain.application import ApplicationStatus
from repositories.client import execute_read, rows_of

_APPLICATIONS_TABLE: str = "applications"

# Joined selects used for dashboard display.
_WITH_LEAD = "*, leads(*)"
_WITH_LEAD_AND_APPLICANT = "*, leads(*), profiles!applications_applicant_id_fkey(*)"


def recent_for_leads(client: Client, lead_ids: Sequence[str], limit: int = 5) -> list[dict[str, Any]]:
    """Newest applications on any of `lead_ids`, joined with lead and applicant profile."""
    response = execute_read(
        client.table(_APPLICATIONS_TABLE)
        .select(_WITH_LEAD_AND_APPLICANT)
        .in_("lead_id", list(lead_ids))
        .order("created_at", desc=True)
        .limit(limit),
        "fetch applications for leads",
    )
    return rows_of(response)


def statuses_for_leads(client: Client, lead_ids: Sequence[str]) -> list[dict[str, Any]]:
    """Every `(id, status)` pair for applications on `lead_ids`."""
    response = execute_read(
        client.table(_APPLICATIONS_TABLE).select("id, status").in_("lead_id", list(lead_ids)),
        "fetch application statuses for leads",
    )
    return rows_of(response)


def recent_by_applicant(client: Client, user_id: str, limit: int = 5) -> list[dict[str, Any]]:
    """Newest applications submitted by `user_id`, joined with the lead."""
    response = execute_read(
        client.table(_APPLICATIONS_TABLE)
        .select(_WITH_LEAD)
        .eq("applicant_id", user_id)
        .order("created_at", desc=True)
        .limit(limit),
        "fetch applications",
    )
    return rows_of(response)


def statuses_by_applicant(client: Client, user_id: str) -> list[dict[str, Any]]:
    """Every `(id, status)` pair for applications submitted by `user_id`."""
    response = execute_read(
        client.table(_APPLICATIONS_TABLE).select("id, status").eq("applicant_id", user_id),
        "fetch application statuses",
    )
    return rows_of(response)


def status_updates_for_applicant(client: Client, user_id: str, limit: int = 5) -> list[dict[str, Any]]:
    """Applications by `user_id` that have left `pending`, most recently updated first."""
    response = execute_read(
        client.table(_APPLICATIONS_TABLE)
        .select(_WITH_LEAD)
        .eq("applicant_id", user_id)
        .neq("status", ApplicationStatus.PENDING.value)
        .order("updated_at", desc=True)
        .limit(limit),
        "fetch application notifications",
    )
    return rows_of(response)


def has_applied(client: Client, user_id: str) -> bool:
    """True if `user_id` has submitted at least one application."""
    response = execute_read(
        client.table(_APPLICATIONS_TABLE)
        .select("id", count="exact")
        .eq("applicant_id", user_id)
        .limit(1),
        "count applications",
    )
    count: Optional[int] = getattr(response, "count", None)
    if count is None:
        return bool(rows_of(response))
    return count > 0


def count_for_lead_rpc(client: Client, lead_id: str) -> Any:
    """Call the `count_lead_applications` RPC and return its raw result."""
    response = execute_read(
        client.rpc("count_lead_applications", {"lead_id_arg": lead_id}),
        "call count_lead_applications",
    )
    return getattr(response, "data", None)


def count_for_lead(client: Client, lead_id: str) -> Optional[int]:
    """Exact count of applications on a lead via a direct count query."""
    response = execute_read(
        client.table(_APPLICATIONS_TABLE).select("id", count="exact").eq("lead_id", lead_id),
        "count applications",
    )
    return getattr(response, "count", None)


__all__ = [
    "recent_for_leads",
    "statuses_for_leads",
    "recent_by_applicant",
    "statuses_by_applicant",
    "status_updates_for_applicant",
    "has_applied",
    "count_for_lead_rpc",
    "count_for_lead",
]
