"""
Domain: Identity (authenticated principal).

An Identity is resolved from a bearer token by the auth provider once per
request. It is never cached across requests and never persisted by this
service; profile data lives separately in the `profiles` table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional

from .time import parse_utc_datetime


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Authenticated user as reported by the auth provider.

    Notes:
    - `id` is opaque and immutable.
    - `user_metadata` holds the attributes supplied at signup
      (first_name, last_name, username, role) and may be edited by the user.
    - `role` is the provider's own role claim (e.g. "authenticated"), not the
      business role; that lives in `user_metadata["role"]` and on the profile.
    """

    id: str
    email: Optional[str] = None
    user_metadata: Mapping[str, Any] = field(default_factory=dict)
    role: Optional[str] = None
    phone: Optional[str] = None

    # Timestamps
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: Any) -> "Identity":
        """Build an Identity from a supabase-py `User` object (or any object with the same attributes)."""
        return cls(
            id=str(user.id),
            email=getattr(user, "email", None),
            user_metadata=dict(getattr(user, "user_metadata", None) or {}),
            role=getattr(user, "role", None),
            phone=getattr(user, "phone", None) or None,
            created_at=parse_utc_datetime(getattr(user, "created_at", None)),
            updated_at=parse_utc_datetime(getattr(user, "updated_at", None)),
        )

    def metadata(self, key: str) -> Any:
        return self.user_metadata.get(key)

    @property
    def email_local_part(self) -> Optional[str]:
        if not self.email:
            return None
        return self.email.split("@")[0]
