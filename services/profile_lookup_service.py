"""
Profile lookup service.

Fetches another user's profile by trying, in order:
1. the `get_direct_profile_data` RPC
2. a direct query on the `profiles` table
3. the auth user record, synthesized into a profile-shaped object

The first strategy that yields a usable record wins. A failing strategy is
logged and the next one is tried.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from supabase import AuthError, Client

from domain.errors import NotFound, ServiceError, ValidationError
from domain.profile import synthesize_profile
from repositories.identity_repository import get_user_by_id
from repositories.profile_repository import get_profile_details, get_profile_details_rpc

logger = logging.getLogger(__name__)

ProfileRecord = Dict[str, Any]
LookupStrategy = Callable[[Client, str], Optional[ProfileRecord]]


def from_rpc(client: Client, user_id: str) -> Optional[ProfileRecord]:
    """Usable when the RPC yields a record (first element of a list) with an id."""
    data = get_profile_details_rpc(client, user_id)
    if isinstance(data, list):
        data = data[0] if data else None
    if isinstance(data, dict) and data.get("id"):
        return data
    return None


def from_profiles_table(client: Client, user_id: str) -> Optional[ProfileRecord]:
    return get_profile_details(client, user_id)


def from_identity(client: Client, user_id: str) -> Optional[ProfileRecord]:
    identity = get_user_by_id(client, user_id)
    if identity is None:
        return None
    return synthesize_profile(identity)


LOOKUP_STRATEGIES: Tuple[Tuple[str, LookupStrategy], ...] = (
    ("rpc", from_rpc),
    ("profiles table", from_profiles_table),
    ("auth users", from_identity),
)


def lookup_profile(
    client: Client,
    target_user_id: Optional[str],
    strategies: Sequence[Tuple[str, LookupStrategy]] = LOOKUP_STRATEGIES,
) -> ProfileRecord:
    """
    Resolve a profile for `target_user_id`.

    Raises:
        ValidationError: no target user id given
        NotFound: every strategy failed or found nothing
    """

    if not target_user_id:
        raise ValidationError("Target User ID (targetUserId) is required.")

    for name, strategy in strategies:
        try:
            profile = strategy(client, target_user_id)
        except (ServiceError, AuthError) as e:
            logger.warning("Profile lookup via %s failed for %s: %s", name, target_user_id, e)
            continue

        if profile is not None:
            logger.info("Profile for %s found via %s", target_user_id, name)
            return profile

        logger.info("No profile for %s via %s; trying next source", target_user_id, name)

    logger.warning("No profile or auth user found for %s", target_user_id)
    raise NotFound("Profile not found.")


__all__ = ["LOOKUP_STRATEGIES", "lookup_profile", "from_rpc", "from_profiles_table", "from_identity"]
