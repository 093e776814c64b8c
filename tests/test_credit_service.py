"""
Tests for `services/credit_service.py`.

Covers contract rules:
- Unknown tasks, repeated claims, missing profiles and incomplete tasks are
  rejected before any write.
- A successful claim adds exactly the task's credits and records the claim.
- A second claim of the same task is rejected and leaves the balance alone.
- A failed claim insert after the balance update is reported, not hidden.
"""

from __future__ import annotations

from contextlib import ExitStack
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from postgrest.exceptions import APIError

from domain.errors import (
    AlreadyClaimed,
    ProfileMissing,
    TaskNotComplete,
    UnknownTask,
    UpstreamReadError,
    UpstreamWriteError,
    ValidationError,
)
from domain.task import ActivityCheck
from services.credit_service import TASK_REGISTRY, claim_credits, list_tasks

USER_ID = "11111111-1111-1111-1111-111111111111"


class FakeCreditStore:
    """In-memory stand-in for the profiles and completed_tasks tables."""

    def __init__(self, profile=None):
        self.profile = profile
        self.claims: set[tuple[str, str]] = set()

    def has_claimed(self, client, user_id, task_id):
        return (user_id, task_id) in self.claims

    def get_profile(self, client, user_id):
        return dict(self.profile) if self.profile is not None else None

    def update_credits(self, client, user_id, credits):
        self.profile["credits"] = credits

    def record_completed_task(self, client, user_id, task_id, completed_at):
        self.claims.add((user_id, task_id))

    def patch(self, stack: ExitStack):
        for name in ("has_claimed", "get_profile", "update_credits", "record_completed_task"):
            stack.enter_context(patch(f"services.credit_service.{name}", side_effect=getattr(self, name)))


@pytest.fixture
def fake_store():
    fake = FakeCreditStore(profile={"id": USER_ID, "credits": 5, "bio": "x" * 20})
    with ExitStack() as stack:
        fake.patch(stack)
        yield fake


def test_registry_matches_published_tasks() -> None:
    assert [(t.task_id, t.credits) for t in list_tasks()] == [
        ("profile", 5),
        ("bio", 3),
        ("apply", 2),
        ("company", 3),
        ("address", 2),
    ]
    assert isinstance(TASK_REGISTRY[2].check, ActivityCheck)


def test_missing_task_id(admin) -> None:
    with pytest.raises(ValidationError, match="Task ID is required."):
        claim_credits(admin, USER_ID, None)


def test_unknown_task(admin, fake_store) -> None:
    with pytest.raises(UnknownTask):
        claim_credits(admin, USER_ID, "referral")


def test_claim_bio_adds_exactly_three_credits(admin, fake_store) -> None:
    result = claim_credits(admin, USER_ID, "bio")

    assert result.new_balance == 8
    assert result.message == "Successfully claimed 3 credits!"
    assert fake_store.profile["credits"] == 8
    assert (USER_ID, "bio") in fake_store.claims


def test_claim_bio_with_nineteen_characters_fails(admin, fake_store) -> None:
    fake_store.profile["bio"] = "x" * 19

    with pytest.raises(TaskNotComplete):
        claim_credits(admin, USER_ID, "bio")

    assert fake_store.profile["credits"] == 5
    assert not fake_store.claims


def test_second_claim_is_rejected_and_balance_unchanged(admin, fake_store) -> None:
    claim_credits(admin, USER_ID, "bio")

    with pytest.raises(AlreadyClaimed):
        claim_credits(admin, USER_ID, "bio")

    assert fake_store.profile["credits"] == 8


def test_null_balance_counts_as_zero(admin, fake_store) -> None:
    fake_store.profile["credits"] = None

    assert claim_credits(admin, USER_ID, "bio").new_balance == 3


def test_missing_profile(admin, fake_store) -> None:
    fake_store.profile = None

    with pytest.raises(ProfileMissing):
        claim_credits(admin, USER_ID, "bio")


def _applications_response(admin, count):
    query = admin.table.return_value.select.return_value.eq.return_value.limit.return_value
    query.execute.return_value = SimpleNamespace(data=[{"id": 1}] if count else [], count=count)
    return query


def test_apply_task_queries_applications(admin, fake_store) -> None:
    _applications_response(admin, 1)

    result = claim_credits(admin, USER_ID, "apply")

    assert result.new_balance == 7
    admin.table.assert_called_with("applications")


def test_apply_task_without_applications_fails(admin, fake_store) -> None:
    _applications_response(admin, 0)

    with pytest.raises(TaskNotComplete):
        claim_credits(admin, USER_ID, "apply")


def test_apply_task_store_failure_propagates(admin, fake_store) -> None:
    query = _applications_response(admin, 0)
    query.execute.side_effect = APIError({"message": "boom", "code": "XX000"})

    with pytest.raises(UpstreamReadError):
        claim_credits(admin, USER_ID, "apply")

    assert fake_store.profile["credits"] == 5


def test_balance_update_failure_leaves_claim_unrecorded(admin, fake_store) -> None:
    with patch("services.credit_service.update_credits", side_effect=UpstreamWriteError()):
        with pytest.raises(UpstreamWriteError):
            claim_credits(admin, USER_ID, "bio")

    assert not fake_store.claims


def test_claim_insert_failure_is_reported(admin, fake_store) -> None:
    with patch("services.credit_service.record_completed_task", side_effect=UpstreamWriteError()):
        with pytest.raises(UpstreamWriteError):
            claim_credits(admin, USER_ID, "bio")

    # The balance was already raised; the partial state is surfaced as an error.
    assert fake_store.profile["credits"] == 8


def test_unique_violation_on_insert_is_a_conflict(admin, fake_store) -> None:
    error = UpstreamWriteError()
    error.__cause__ = APIError({"message": "duplicate key", "code": "23505"})

    with patch("services.credit_service.record_completed_task", side_effect=error):
        with pytest.raises(AlreadyClaimed):
            claim_credits(admin, USER_ID, "bio")
