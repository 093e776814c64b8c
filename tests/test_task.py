"""
Tests for `domain/task.py`.

Covers contract rules:
- Each profile predicate checks exactly its own fields.
- bio needs at least 20 characters; address needs more than 5.
- Task definitions are immutable and must award positive credits.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

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

COMPLETE_PROFILE = {
    "first_name": "Jane",
    "last_name": "Doe",
    "username": "janedoe",
    "phone_number": "+15550100",
    "bio": "Sourcing commercial leads since 2015.",
    "company": "Acme",
    "position": "Broker",
}


def test_profile_is_complete_requires_every_field() -> None:
    assert profile_is_complete(COMPLETE_PROFILE) is True

    for name in COMPLETE_PROFILE:
        partial = dict(COMPLETE_PROFILE, **{name: ""})
        assert profile_is_complete(partial) is False, name


def test_profile_is_complete_treats_missing_keys_as_empty() -> None:
    assert profile_is_complete({"first_name": "Jane"}) is False


def test_bio_boundary_at_twenty_characters() -> None:
    assert bio_is_written({"bio": "x" * 19}) is False
    assert bio_is_written({"bio": "x" * 20}) is True
    assert bio_is_written({"bio": None}) is False
    assert bio_is_written({}) is False


def test_company_requires_company_and_position() -> None:
    assert company_is_set({"company": "Acme", "position": "Broker"}) is True
    assert company_is_set({"company": "Acme", "position": ""}) is False
    assert company_is_set({"position": "Broker"}) is False


def test_address_must_be_longer_than_five_characters() -> None:
    assert address_is_set({"address": "12345"}) is False
    assert address_is_set({"address": "123456"}) is True
    assert address_is_set({"address": None}) is False


def test_checks_evaluate_their_predicates() -> None:
    assert ProfileCheck(bio_is_written).evaluate({"bio": "y" * 25}) is True

    calls = []

    def applied(client, user_id):
        calls.append((client, user_id))
        return 1

    assert ActivityCheck(applied).evaluate("client", "user-1") is True
    assert calls == [("client", "user-1")]


def test_task_definition_is_immutable_and_positive() -> None:
    task = TaskDefinition("bio", 3, ProfileCheck(bio_is_written))

    with pytest.raises(FrozenInstanceError):
        task.credits = 10  # type: ignore[misc]

    with pytest.raises(ValueError):
        TaskDefinition("free", 0, ProfileCheck(bio_is_written))


def test_find_task() -> None:
    registry = (
        TaskDefinition("bio", 3, ProfileCheck(bio_is_written)),
        TaskDefinition("company", 3, ProfileCheck(company_is_set)),
    )

    assert find_task(registry, "company") is registry[1]
    assert find_task(registry, "missing") is None
