"""
Leads API Endpoints.

Endpoints for deleting leads and counting their applications.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_store, require_identity
from api.models import ApplicationCountResponse, MessageResponse
from domain.errors import NotImplementedFeature, ServiceError
from domain.identity import Identity
from repositories.client import Store
from services.lead_service import delete_lead, get_application_count

logger = logging.getLogger(__name__)

router = APIRouter()


@router.delete(
    "/{lead_id}",
    response_model=MessageResponse,
    summary="Delete Lead",
    description="Delete a lead. Only the lead's creator may delete it."
)
def remove_lead(
    lead_id: str,
    identity: Identity = Depends(require_identity),
    store: Store = Depends(get_store),
):
    try:
        delete_lead(store.admin, identity.id, lead_id)
        return MessageResponse(message="Lead deleted successfully.")

    except ServiceError:
        raise
    except Exception:
        logger.exception("Error deleting lead %s", lead_id)
        raise HTTPException(
            status_code=500,
            detail="Failed to delete lead."
        )


@router.get(
    "/{lead_id}/application-count",
    response_model=ApplicationCountResponse,
    summary="Application Count",
    description="Number of applications on a lead and the maximum allowed."
)
def lead_application_count(
    lead_id: str,
    identity: Identity = Depends(require_identity),
    store: Store = Depends(get_store),
):
    """
    Count applications on a lead.

    **Example response:**
    ```json
    {"count": 4, "maxAllowed": 6}
    ```
    """
    try:
        result = get_application_count(store.admin, lead_id)
        return ApplicationCountResponse(count=result.count, max_allowed=result.max_allowed)

    except ServiceError:
        raise
    except Exception:
        logger.exception("Unhandled error counting applications for lead %s", lead_id)
        raise HTTPException(
            status_code=500,
            detail="Internal server error"
        )


@router.post(
    "",
    status_code=501,
    summary="Create Lead",
    description="Not implemented yet."
)
def create_lead(identity: Identity = Depends(require_identity)):
    raise NotImplementedFeature("Create lead endpoint not yet implemented.")
