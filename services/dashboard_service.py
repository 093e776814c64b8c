"""
Dashboard service.

Composes the dashboard payload from several store reads, branching on the
profile's business role:

- lead-applier (posts leads): own recent leads, the newest applications on
  them, and counters over every application on those leads.
- anyone else (finds leads): recent active leads, the user's own newest
  applications, counters over all of them, and status changes as
  notifications.

Any failed read aborts the whole aggregation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from supabase import Client

from domain.application import DashboardStats, summarize_applications
from domain.errors import ProfileMissing
from domain.profile import is_lead_applier
from repositories.application_repository import (
    recent_by_applicant,
    recent_for_leads,
    status_updates_for_applicant,
    statuses_by_applicant,
    statuses_for_leads,
)
from repositories.lead_repository import list_active_leads, list_leads_by_creator
from repositories.profile_repository import get_profile
from repositories.task_repository import list_completed_task_ids

logger = logging.getLogger(__name__)

DASHBOARD_LEAD_LIMIT: int = 10
DASHBOARD_APPLICATION_LIMIT: int = 5


@dataclass(frozen=True, slots=True)
class DashboardData:
    profile: Dict[str, Any]
    completed_tasks: List[str]
    leads: List[Dict[str, Any]] = field(default_factory=list)
    applications: List[Dict[str, Any]] = field(default_factory=list)
    notifications: List[Dict[str, Any]] = field(default_factory=list)
    stats: DashboardStats = field(default_factory=DashboardStats)

    def to_response(self) -> Dict[str, Any]:
        return {
            "profile": self.profile,
            "completedTasks": self.completed_tasks,
            "leads": self.leads,
            "applications": self.applications,
            "notifications": self.notifications,
            "stats": self.stats.to_response(),
        }


def _poster_dashboard(client: Client, user_id: str, profile: Dict[str, Any], completed: List[str]) -> DashboardData:
    leads = list_leads_by_creator(client, user_id, limit=DASHBOARD_LEAD_LIMIT)
    if not leads:
        return DashboardData(profile=profile, completed_tasks=completed)

    lead_ids = [lead["id"] for lead in leads]
    applications = recent_for_leads(client, lead_ids, limit=DASHBOARD_APPLICATION_LIMIT)
    statuses = statuses_for_leads(client, lead_ids)

    return DashboardData(
        profile=profile,
        completed_tasks=completed,
        leads=leads,
        applications=applications,
        # New applications on the poster's leads double as notifications.
        notifications=list(applications),
        stats=summarize_applications(len(leads), statuses),
    )


def _finder_dashboard(client: Client, user_id: str, profile: Dict[str, Any], completed: List[str]) -> DashboardData:
    leads = list_active_leads(client, limit=DASHBOARD_LEAD_LIMIT)
    applications = recent_by_applicant(client, user_id, limit=DASHBOARD_APPLICATION_LIMIT)
    statuses = statuses_by_applicant(client, user_id)
    notifications = status_updates_for_applicant(client, user_id, limit=DASHBOARD_APPLICATION_LIMIT)

    return DashboardData(
        profile=profile,
        completed_tasks=completed,
        leads=leads,
        applications=applications,
        notifications=notifications,
        stats=summarize_applications(len(leads), statuses),
    )


def build_dashboard(client: Client, user_id: str) -> DashboardData:
    """
    Build the dashboard for the authenticated user.

    Raises:
        ProfileMissing: the user has no profile row yet
        UpstreamReadError: any store read failed
    """

    profile = get_profile(client, user_id)
    if profile is None:
        raise ProfileMissing("User profile not found. Please complete your profile.")

    completed = list_completed_task_ids(client, user_id)

    if is_lead_applier(profile):
        data = _poster_dashboard(client, user_id, profile, completed)
    else:
        data = _finder_dashboard(client, user_id, profile, completed)

    logger.debug(
        "Dashboard for %s: %d leads, %d applications",
        user_id,
        len(data.leads),
        data.stats.total_applications,
    )
    return data


__all__ = ["DashboardData", "build_dashboard"]
