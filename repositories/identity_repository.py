"""
Identity repository.

Thin wrappers over the Supabase auth API: token resolution, password sign-up
and sign-in, and admin user lookups. Provider errors (`AuthError`) are left
for the service layer to map; transport failures become UpstreamUnavailable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, TypeVar

import httpx
from supabase import Client

from domain.errors import UpstreamUnavailable
from domain.identity import Identity

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class AuthResult:
    """JSON-ready user and session returned by a sign-up or sign-in."""

    user: Optional[dict[str, Any]]
    session: Optional[dict[str, Any]]


def _dump(model: Any) -> Optional[dict[str, Any]]:
    if model is None:
        return None
    if hasattr(model, "model_dump"):
        return model.model_dump(mode="json")
    return dict(model)


def _call_auth(action: str, call: Callable[[], T]) -> T:
    try:
        return call()
    except (httpx.TimeoutException, httpx.TransportError) as e:
        logger.error("Auth provider unreachable (%s): %s", action, e)
        raise UpstreamUnavailable(f"Failed to {action}: the auth provider is unavailable.") from e


def get_user_for_token(client: Client, token: str) -> Optional[Identity]:
    """
    Resolve the Identity a bearer token belongs to.

    Returns None if the provider answers without a user.

    Raises:
        AuthError: the provider rejected the token
    """
    response = _call_auth("verify token", lambda: client.auth.get_user(token))
    user = getattr(response, "user", None)
    return Identity.from_user(user) if user is not None else None


def get_user_by_id(client: Client, user_id: str) -> Optional[Identity]:
    """
    Look up an auth user by id with the admin API.

    Returns None when no user matches, including ids that are not UUIDs (the
    auth client rejects those with ValueError before any request is sent).
    """
    try:
        response = _call_auth("fetch auth user", lambda: client.auth.admin.get_user_by_id(user_id))
    except ValueError as e:
        logger.info("Auth user lookup skipped for malformed id %r: %s", user_id, e)
        return None
    user = getattr(response, "user", None)
    return Identity.from_user(user) if user is not None else None


def sign_up(client: Client, email: str, password: str, metadata: Mapping[str, Any]) -> AuthResult:
    """
    Create an auth user; `metadata` is stored as the user's metadata.

    The matching `profiles` row is created by a database trigger.
    """
    response = _call_auth(
        "sign up",
        lambda: client.auth.sign_up(
            {"email": email, "password": password, "options": {"data": dict(metadata)}}
        ),
    )
    return AuthResult(user=_dump(response.user), session=_dump(response.session))


def sign_in(client: Client, email: str, password: str) -> AuthResult:
    response = _call_auth(
        "sign in",
        lambda: client.auth.sign_in_with_password({"email": email, "password": password}),
    )
    return AuthResult(user=_dump(response.user), session=_dump(response.session))


__all__ = ["AuthResult", "get_user_for_token", "get_user_by_id", "sign_up", "sign_in"]
