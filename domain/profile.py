"""
Domain: Profile.

Profiles are rows in the `profiles` table, keyed by the Identity id and created
by a database trigger when the auth user is created. This service reads them as
plain mappings and writes only explicit fields (credits).

Contract excerpts implemented here:
- Every profile carries a business role: "lead-finder" or "lead-applier".
- A lead-applier posts leads; a lead-finder applies to them.
- When no profile row exists, a profile-shaped record can be synthesized from
  the Identity's signup metadata with explicit defaults.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from .identity import Identity


class UserRole(str, Enum):
    LEAD_FINDER = "lead-finder"
    LEAD_APPLIER = "lead-applier"


ALLOWED_SIGNUP_ROLES: tuple[str, ...] = tuple(role.value for role in UserRole)

# Columns returned by the direct profile-details lookup.
PROFILE_DETAIL_COLUMNS: tuple[str, ...] = (
    "id",
    "email",
    "first_name",
    "last_name",
    "username",
    "avatar_url",
    "phone_number",
    "company",
    "website",
    "bio",
    "role",
    "created_at",
    "updated_at",
)


def is_lead_applier(profile: Mapping[str, Any]) -> bool:
    return profile.get("role") == UserRole.LEAD_APPLIER.value


def credit_balance(profile: Mapping[str, Any]) -> int:
    """Current credits on a profile; a missing or null balance counts as 0."""
    return int(profile.get("credits") or 0)


def synthesize_profile(identity: Identity) -> Dict[str, Any]:
    """
    Build a profile-shaped record from an Identity when no profile row exists.

    Defaults:
    - first_name: metadata, else email local part, else "User"
    - last_name: metadata, else ""
    - username: metadata, else email local part
    - avatar_url: metadata, else ""
    - phone_number: identity phone, else None
    - company, website, bio: metadata, else None
    - role: the provider's role claim, else "user"
    """
    local_part: Optional[str] = identity.email_local_part

    return {
        "id": identity.id,
        "email": identity.email,
        "first_name": identity.metadata("first_name") or local_part or "User",
        "last_name": identity.metadata("last_name") or "",
        "username": identity.metadata("username") or local_part,
        "avatar_url": identity.metadata("avatar_url") or "",
        "phone_number": identity.phone or None,
        "company": identity.metadata("company") or None,
        "website": identity.metadata("website") or None,
        "bio": identity.metadata("bio") or None,
        "role": identity.role or "user",
        "created_at": identity.created_at.isoformat() if identity.created_at else None,
        "updated_at": identity.updated_at.isoformat() if identity.updated_at else None,
    }


__all__ = [
    "UserRole",
    "ALLOWED_SIGNUP_ROLES",
    "PROFILE_DETAIL_COLUMNS",
    "is_lead_applier",
    "credit_balance",
    "synthesize_profile",
]
