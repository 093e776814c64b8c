"""
Completed-task repository (persistence).

Each row in `completed_tasks` records that a task's credits were awarded to a
user. Uniqueness of (user_id, task_id) is checked by the credit service before
inserting; it is not enforced here.
"""

from __future__ import annotations

from datetime import datetime

from supabase import Client

from domain.time import to_iso_utc
from repositories.client import execute_read, execute_write, rows_of

_COMPLETED_TASKS_TABLE: str = "completed_tasks"


def list_completed_task_ids(client: Client, user_id: str) -> list[str]:
    response = execute_read(
        client.table(_COMPLETED_TASKS_TABLE).select("task_id").eq("user_id", user_id),
        "fetch completed tasks",
    )
    return [row["task_id"] for row in rows_of(response)]


def has_claimed(client: Client, user_id: str, task_id: str) -> bool:
    """True if a claim for (user_id, task_id) already exists."""
    response = execute_read(
        client.table(_COMPLETED_TASKS_TABLE)
        .select("id")
        .eq("user_id", user_id)
        .eq("task_id", task_id)
        .limit(1),
        "check existing claim",
    )
    return bool(rows_of(response))


def record_completed_task(client: Client, user_id: str, task_id: str, completed_at: datetime) -> None:
    """
    Insert a completed-task claim.

    Args:
        user_id: Identity id of the claimant
        task_id: Registry id of the task
        completed_at: UTC timestamp of the claim
    """
    execute_write(
        client.table(_COMPLETED_TASKS_TABLE).insert(
            {
                "user_id": user_id,
                "task_id": task_id,
                "completed_at": to_iso_utc(completed_at, name="completed_at"),
            }
        ),
        "record completed task",
    )


__all__ = ["list_completed_task_ids", "has_claimed", "record_completed_task"]
