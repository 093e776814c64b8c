"""
Domain: credit-earning tasks.

A TaskDefinition is a static `(task_id, credits, check)` triple. The check is
a tagged variant:

- ProfileCheck: a pure predicate over the user's profile row.
- ActivityCheck: a predicate over the user id that queries the store.

The awarder dispatches on the variant type, never on the task id. Task
definitions are immutable and rebuilt at process start; nothing here is
persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, Union

Profile = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class ProfileCheck:
    """Synchronous predicate evaluated against the fetched profile."""

    predicate: Callable[[Profile], bool]

    def evaluate(self, profile: Profile) -> bool:
        return bool(self.predicate(profile))


@dataclass(frozen=True, slots=True)
class ActivityCheck:
    """
    Predicate evaluated against the user's historical activity.

    `predicate(client, user_id)` issues its own store query. Store failures
    propagate to the caller instead of being read as "not complete".
    """

    predicate: Callable[[Any, str], bool]

    def evaluate(self, client: Any, user_id: str) -> bool:
        return bool(self.predicate(client, user_id))


TaskCheck = Union[ProfileCheck, ActivityCheck]


@dataclass(frozen=True, slots=True)
class TaskDefinition:
    task_id: str
    credits: int
    check: TaskCheck

    def __post_init__(self) -> None:
        if self.credits <= 0:
            raise ValueError("credits must be > 0")


def _filled(profile: Profile, *fields: str) -> bool:
    return all(profile.get(name) for name in fields)


def profile_is_complete(profile: Profile) -> bool:
    return _filled(
        profile,
        "first_name",
        "last_name",
        "username",
        "phone_number",
        "bio",
        "company",
        "position",
    )


def bio_is_written(profile: Profile) -> bool:
    return len(profile.get("bio") or "") >= 20


def company_is_set(profile: Profile) -> bool:
    return _filled(profile, "company", "position")


def address_is_set(profile: Profile) -> bool:
    return len(profile.get("address") or "") > 5


def find_task(registry: Iterable[TaskDefinition], task_id: str) -> Optional[TaskDefinition]:
    for task in registry:
        if task.task_id == task_id:
            return task
    return None


__all__ = [
    "ProfileCheck",
    "ActivityCheck",
    "TaskCheck",
    "TaskDefinition",
    "profile_is_complete",
    "bio_is_written",
    "company_is_set",
    "address_is_set",
    "find_task",
]
