"""
Domain: Lead entity.

Contract excerpts implemented here:
- A Lead is created by a profile with role "lead-applier" and is owned by it
  through `created_by`.
- Only the creator may delete a Lead.
- A Lead accepts at most MAX_APPLICATIONS_PER_LEAD applications. The cap is a
  static policy reported alongside application counts; it is not derived
  from the store.
"""

from __future__ import annotations

from enum import Enum
from numbers import Real
from typing import Any, Mapping, Optional

MAX_APPLICATIONS_PER_LEAD: int = 6


class LeadStatus(str, Enum):
    ACTIVE = "active"


def is_owned_by(lead: Mapping[str, Any], user_id: str) -> bool:
    """True iff `user_id` created the lead."""
    return str(lead.get("created_by")) == str(user_id)


def _non_negative_count(value: Any) -> Optional[int]:
    # bool is a Real subclass; a boolean is never a count.
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    if value < 0:
        return None
    return int(value)


def parse_application_count(result: Any) -> Optional[int]:
    """
    Extract a count from the `count_lead_applications` RPC result.

    Accepted shapes:
    - a bare non-negative number: ``4``
    - a non-empty list whose first item has a numeric ``count``: ``[{"count": 4}]``
    - a mapping with a numeric ``count``: ``{"count": 4}``

    Returns None for anything else so callers can fall back to a direct count.
    """

    if result is None:
        return None

    count = _non_negative_count(result)
    if count is not None:
        return count

    if isinstance(result, list):
        if not result or not isinstance(result[0], Mapping):
            return None
        return _non_negative_count(result[0].get("count"))

    if isinstance(result, Mapping):
        return _non_negative_count(result.get("count"))

    return None


__all__ = [
    "MAX_APPLICATIONS_PER_LEAD",
    "LeadStatus",
    "is_owned_by",
    "parse_application_count",
]
