"""
Users API Endpoints.

Profile lookups for other users.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_store, require_identity
from api.models import ProfileDetailsRequest, ProfileDetailsResponse
from domain.errors import ServiceError
from domain.identity import Identity
from repositories.client import Store
from services.profile_lookup_service import lookup_profile

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/get-profile-details",
    response_model=ProfileDetailsResponse,
    summary="Get Profile Details",
    description="Fetch the profile of any user by id."
)
def get_profile_details(
    request: ProfileDetailsRequest,
    identity: Identity = Depends(require_identity),
    store: Store = Depends(get_store),
):
    """
    Fetch a profile, falling back from the `get_direct_profile_data` RPC to
    the `profiles` table and finally to the auth user record.
    """
    logger.info("User %s requested profile %s", identity.id, request.target_user_id)
    try:
        return ProfileDetailsResponse(profile=lookup_profile(store.admin, request.target_user_id))

    except ServiceError:
        raise
    except Exception:
        logger.exception("Error in get-profile-details")
        raise HTTPException(
            status_code=500,
            detail="Internal server error while fetching profile."
        )
