"""
Lead service.

Handles:
- Owner-only lead deletion
- Application counts per lead, with a direct-count fallback when the
  `count_lead_applications` RPC fails or returns an unexpected shape
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from supabase import Client

from domain.errors import Forbidden, NotFound, UpstreamReadError, UpstreamUnavailable
from domain.lead import MAX_APPLICATIONS_PER_LEAD, is_owned_by, parse_application_count
from repositories.application_repository import count_for_lead, count_for_lead_rpc
from repositories.lead_repository import delete_lead as delete_lead_row
from repositories.lead_repository import get_lead_owner

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ApplicationCount:
    count: int
    max_allowed: int = MAX_APPLICATIONS_PER_LEAD


def delete_lead(client: Client, user_id: str, lead_id: str) -> None:
    """
    Delete a lead on behalf of its creator.

    The ownership check and the delete are separate calls; nothing locks the
    row in between.

    Raises:
        NotFound: the lead does not exist (or could not be read)
        Forbidden: `user_id` did not create the lead
        UpstreamWriteError: the delete failed
    """

    try:
        lead = get_lead_owner(client, lead_id)
    except UpstreamReadError as e:
        raise NotFound("Lead not found.") from e

    if lead is None:
        raise NotFound("Lead not found.")

    if not is_owned_by(lead, user_id):
        logger.warning("User %s attempted to delete lead %s owned by another user", user_id, lead_id)
        raise Forbidden("Forbidden: You are not authorized to delete this lead.")

    delete_lead_row(client, lead_id)
    logger.info("Lead %s deleted by %s", lead_id, user_id)


def get_application_count(client: Client, lead_id: str) -> ApplicationCount:
    """
    Count applications on a lead.

    Tries the RPC first; on error (including a timeout) or an unrecognized
    result shape, falls back to a direct count query.

    Raises:
        UpstreamReadError: the fallback count failed
        UpstreamUnavailable: the store could not be reached for the fallback
    """

    count = None
    try:
        count = parse_application_count(count_for_lead_rpc(client, lead_id))
    except (UpstreamReadError, UpstreamUnavailable):
        logger.info("count_lead_applications RPC failed for lead %s", lead_id)

    if count is None:
        logger.info("Falling back to direct application count for lead %s", lead_id)
        try:
            count = count_for_lead(client, lead_id) or 0
        except UpstreamReadError as e:
            raise UpstreamReadError("Failed to count applications.") from e

    return ApplicationCount(count=count)


__all__ = ["ApplicationCount", "delete_lead", "get_application_count"]
