"""
Profile repository (persistence).

Reads and writes rows in the `profiles` table. Rows are created by a database
trigger when the auth user is created; this module never inserts them.
"""

from __future__ import annotations

from typing import Any, Optional

from supabase import Client

from domain.profile import PROFILE_DETAIL_COLUMNS
from repositories.client import execute_read, execute_write, rows_of

# Supabase table name for profile records.
# Keep this aligned with your database schema.
_PROFILES_TABLE: str = "profiles"


def get_profile(client: Client, user_id: str) -> Optional[dict[str, Any]]:
    """
    Fetch the full profile row for a user.

    Returns:
        The row, or None if the user has no profile yet.
    """
    response = execute_read(
        client.table(_PROFILES_TABLE).select("*").eq("id", user_id).limit(1),
        "fetch user profile",
    )
    rows = rows_of(response)
    return rows[0] if rows else None


def get_profile_details(client: Client, user_id: str) -> Optional[dict[str, Any]]:
    """Fetch the public profile columns for a user (direct table lookup)."""
    response = execute_read(
        client.table(_PROFILES_TABLE).select(", ".join(PROFILE_DETAIL_COLUMNS)).eq("id", user_id).limit(1),
        "fetch profile details",
    )
    rows = rows_of(response)
    return rows[0] if rows else None


def get_profile_details_rpc(client: Client, user_id: str) -> Any:
    """Call the `get_direct_profile_data` RPC and return its raw result."""
    response = execute_read(
        client.rpc("get_direct_profile_data", {"p_user_id": user_id}),
        "call get_direct_profile_data",
    )
    return getattr(response, "data", None)


def update_credits(client: Client, user_id: str, credits: int) -> None:
    """Overwrite the credits balance on a profile."""
    execute_write(
        client.table(_PROFILES_TABLE).update({"credits": credits}).eq("id", user_id),
        "update credit balance",
    )


__all__ = [
    "get_profile",
    "get_profile_details",
    "get_profile_details_rpc",
    "update_credits",
]
