"""
Lead repository (persistence).

This module provides *only* persistence operations for leads. Ownership rules
belong to the lead service.
"""

from __future__ import annotations

from typing import Any, Optional

from supabase import Client

from domain.lead import LeadStatus
from repositories.client import execute_read, execute_write, rows_of

# Supabase table name for Lead records.
# Keep this aligned with your database schema.
_LEADS_TABLE: str = "leads"


def list_leads_by_creator(client: Client, user_id: str, limit: int = 10) -> list[dict[str, Any]]:
    """Most recent leads posted by `user_id`, newest first."""
    response = execute_read(
        client.table(_LEADS_TABLE)
        .select("*")
        .eq("created_by", user_id)
        .order("created_at", desc=True)
        .limit(limit),
        "fetch leads",
    )
    return rows_of(response)


def list_active_leads(client: Client, limit: int = 10) -> list[dict[str, Any]]:
    """Most recent active leads from any poster, newest first."""
    response = execute_read(
        client.table(_LEADS_TABLE)
        .select("*")
        .eq("status", LeadStatus.ACTIVE.value)
        .order("created_at", desc=True)
        .limit(limit),
        "fetch active leads",
    )
    return rows_of(response)


def get_lead_owner(client: Client, lead_id: str) -> Optional[dict[str, Any]]:
    """
    Fetch the ownership column of a lead.

    Returns:
        ``{"created_by": ...}`` or None if the lead does not exist.
    """
    response = execute_read(
        client.table(_LEADS_TABLE).select("created_by").eq("id", lead_id).limit(1),
        "fetch lead",
    )
    rows = rows_of(response)
    return rows[0] if rows else None


def delete_lead(client: Client, lead_id: str) -> None:
    execute_write(client.table(_LEADS_TABLE).delete().eq("id", lead_id), "delete lead")


__all__ = [
    "list_leads_by_creator",
    "list_active_leads",
    "get_lead_owner",
    "delete_lead",
]
