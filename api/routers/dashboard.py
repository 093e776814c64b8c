"""
Dashboard API Endpoints.

Aggregated data for the signed-in user's dashboard.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_store, require_identity
from api.models import DashboardResponse
from domain.errors import ServiceError
from domain.identity import Identity
from repositories.client import Store
from services.dashboard_service import build_dashboard

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/data",
    response_model=DashboardResponse,
    summary="Dashboard Data",
    description="Profile, completed tasks, leads, applications, notifications and stats for the current user."
)
def get_dashboard_data(
    identity: Identity = Depends(require_identity),
    store: Store = Depends(get_store),
):
    """
    Build the dashboard for the current user.

    **Lead appliers** (posting leads) see their own 10 newest leads, the 5
    newest applications on them (also used as notifications) and counters
    over every application on those leads.

    **Lead finders** see the 10 newest active leads, their own 5 newest
    applications, counters over all their applications and their 5 most
    recent status changes as notifications.
    """
    try:
        return build_dashboard(store.admin, identity.id).to_response()

    except ServiceError:
        raise
    except Exception:
        logger.exception("Error fetching dashboard data")
        raise HTTPException(
            status_code=500,
            detail="Failed to fetch dashboard data."
        )
