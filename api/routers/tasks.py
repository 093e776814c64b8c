"""
Tasks API Endpoints.

Endpoints for listing credit tasks and claiming their credits.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_store, require_identity
from api.models import ClaimCreditsRequest, ClaimCreditsResponse, TaskItem, TaskListResponse
from domain.errors import ServiceError
from domain.identity import Identity
from repositories.client import Store
from services.credit_service import claim_credits, list_tasks

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=TaskListResponse,
    summary="List Tasks",
    description="Tasks that earn credits and how many credits each is worth."
)
def get_tasks(identity: Identity = Depends(require_identity)):
    return TaskListResponse(
        tasks=[TaskItem(id=task.task_id, credits=task.credits) for task in list_tasks()]
    )


@router.post(
    "/claim-credits",
    response_model=ClaimCreditsResponse,
    summary="Claim Credits",
    description="Claim the credits for a completed task. Each task can be claimed once."
)
def claim_task_credits(
    request: ClaimCreditsRequest,
    identity: Identity = Depends(require_identity),
    store: Store = Depends(get_store),
):
    """
    Claim credits for a task.

    **Failures:**
    - 400: taskId missing, already claimed, or task not complete
    - 404: unknown task or no profile
    """
    try:
        result = claim_credits(store.admin, identity.id, request.task_id)
        return ClaimCreditsResponse(message=result.message, new_credit_balance=result.new_balance)

    except ServiceError:
        raise
    except Exception:
        logger.exception("Error claiming credits")
        raise HTTPException(
            status_code=500,
            detail="Failed to claim credits."
        )
