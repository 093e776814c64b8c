"""
Credit service for claiming task rewards.

Handles:
- The static task registry (ids, credit values, completion checks)
- Claim validation: unknown task, already claimed, task not complete
- Balance update followed by recording the claim

The claim is not transactional. The prior-claim check, the balance update and
the claim insert are three separate store calls, so two identical concurrent
requests can both pass the check. If the store has a unique index on
completed_tasks(user_id, task_id), the losing insert is reported as
AlreadyClaimed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from supabase import Client

from domain.errors import AlreadyClaimed, ProfileMissing, TaskNotComplete, UnknownTask, UpstreamWriteError, ValidationError
from domain.profile import credit_balance
from domain.task import (
    ActivityCheck,
    ProfileCheck,
    TaskDefinition,
    address_is_set,
    bio_is_written,
    company_is_set,
    find_task,
    profile_is_complete,
)
from domain.time import utc_now
from repositories.application_repository import has_applied
from repositories.client import is_unique_violation
from repositories.profile_repository import get_profile, update_credits
from repositories.task_repository import has_claimed, record_completed_task

logger = logging.getLogger(__name__)

TASK_REGISTRY: tuple[TaskDefinition, ...] = (
    TaskDefinition("profile", 5, ProfileCheck(profile_is_complete)),
    TaskDefinition("bio", 3, ProfileCheck(bio_is_written)),
    TaskDefinition("apply", 2, ActivityCheck(has_applied)),
    TaskDefinition("company", 3, ProfileCheck(company_is_set)),
    TaskDefinition("address", 2, ProfileCheck(address_is_set)),
)


@dataclass(frozen=True, slots=True)
class ClaimResult:
    """
    Result of a successful claim.

    new_balance: credits on the profile after the award
    message: human-readable confirmation
    """
    task_id: str
    credits_awarded: int
    new_balance: int
    message: str


def list_tasks() -> List[TaskDefinition]:
    return list(TASK_REGISTRY)


def claim_credits(client: Client, user_id: str, task_id: Optional[str]) -> ClaimResult:
    """
    Award a task's credits to a user.

    **Process:**
    1. Look up the task in the registry
    2. Reject if the user already claimed it
    3. Fetch the profile
    4. Evaluate the task's completion check
    5. Write the new balance
    6. Record the claim

    If step 6 fails the balance has already been raised; the inconsistency is
    logged and the request fails with UpstreamWriteError.

    Raises:
        ValidationError: task_id missing
        UnknownTask: task_id not in the registry
        AlreadyClaimed: the user already claimed this task
        ProfileMissing: the user has no profile row
        TaskNotComplete: the completion check failed
        UpstreamReadError / UpstreamWriteError: a store call failed
    """

    if not task_id:
        raise ValidationError("Task ID is required.")

    task = find_task(TASK_REGISTRY, task_id)
    if task is None:
        raise UnknownTask()

    if has_claimed(client, user_id, task.task_id):
        raise AlreadyClaimed()

    profile = get_profile(client, user_id)
    if profile is None:
        raise ProfileMissing("User profile not found for validation.")

    check = task.check
    if isinstance(check, ProfileCheck):
        completed = check.evaluate(profile)
    elif isinstance(check, ActivityCheck):
        completed = check.evaluate(client, user_id)
    else:
        raise TypeError(f"Unsupported task check: {type(check)!r}")

    if not completed:
        raise TaskNotComplete()

    new_balance = credit_balance(profile) + task.credits
    update_credits(client, user_id, new_balance)

    try:
        record_completed_task(client, user_id, task.task_id, utc_now())
    except UpstreamWriteError as e:
        if is_unique_violation(e):
            logger.warning(
                "Concurrent claim of task %s for user %s detected after balance update to %s",
                task.task_id,
                user_id,
                new_balance,
            )
            raise AlreadyClaimed() from e
        logger.error(
            "Balance for user %s raised to %s but claim of task %s was not recorded",
            user_id,
            new_balance,
            task.task_id,
        )
        raise

    logger.info("User %s claimed %s credits for task %s", user_id, task.credits, task.task_id)

    return ClaimResult(
        task_id=task.task_id,
        credits_awarded=task.credits,
        new_balance=new_balance,
        message=f"Successfully claimed {task.credits} credits!",
    )


__all__ = ["TASK_REGISTRY", "ClaimResult", "list_tasks", "claim_credits"]
