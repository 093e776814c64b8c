"""
Authentication service.

Handles:
- Bearer token verification for protected routes
- Account sign-up with profile metadata (the profile row itself is created by
  a database trigger)
- Password sign-in
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from supabase import AuthError, Client

from domain.errors import ServiceError, Unauthenticated, UpstreamUnavailable, ValidationError
from domain.identity import Identity
from domain.profile import ALLOWED_SIGNUP_ROLES
from repositories.identity_repository import AuthResult, get_user_for_token, sign_in, sign_up

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH: int = 8
_BEARER_PREFIX = "Bearer "


@dataclass(frozen=True, slots=True)
class SignupResult:
    user: dict[str, Any]
    session: Optional[dict[str, Any]]
    message: str


def _provider_message(error: AuthError, fallback: str) -> str:
    return getattr(error, "message", None) or str(error) or fallback


def verify_bearer(client: Client, authorization: Optional[str]) -> Identity:
    """
    Resolve the Identity behind an `Authorization: Bearer <token>` header.

    Raises:
        Unauthenticated: header missing/malformed, empty token, or token rejected
        UpstreamUnavailable: the provider could not be asked
    """

    if not authorization or not authorization.startswith(_BEARER_PREFIX):
        raise Unauthenticated("Unauthorized: No token provided or malformed header.")

    token = authorization.split(" ")[1]
    if not token:
        raise Unauthenticated("Unauthorized: Token could not be extracted.")

    try:
        identity = get_user_for_token(client, token)
    except AuthError as e:
        logger.info("Token rejected by auth provider: %s", _provider_message(e, "invalid token"))
        raise Unauthenticated(f"Unauthorized: {_provider_message(e, 'Invalid token.')}") from e
    except Exception as e:
        logger.exception("Unexpected error while verifying token")
        raise UpstreamUnavailable("Internal server error during authentication.") from e

    if identity is None:
        raise Unauthenticated("Unauthorized: Invalid token or user not found.")

    return identity


def register_account(
    client: Client,
    *,
    email: Optional[str],
    password: Optional[str],
    first_name: Optional[str],
    last_name: Optional[str],
    username: Optional[str],
    role: Optional[str],
) -> SignupResult:
    """
    Create an account.

    All input checks run before the provider is contacted. The business role
    and names are stored as user metadata, which the `on_auth_user_created`
    trigger copies into the new profile row.
    """

    if not all([email, password, first_name, last_name, username, role]):
        raise ValidationError("Missing required fields for signup.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
    if role not in ALLOWED_SIGNUP_ROLES:
        raise ValidationError(
            f"Invalid role specified. Allowed roles are: {', '.join(ALLOWED_SIGNUP_ROLES)}."
        )

    logger.info("Signing up new %s account", role)
    try:
        result = sign_up(
            client,
            email,
            password,
            {
                "first_name": first_name,
                "last_name": last_name,
                "username": username,
                "role": role,
            },
        )
    except AuthError as e:
        logger.warning("Sign-up rejected by auth provider: %s", _provider_message(e, "unknown"))
        raise ValidationError(_provider_message(e, "Authentication signup failed.")) from e

    if not result.user:
        logger.error("Sign-up succeeded but no user object was returned")
        raise ServiceError("User creation failed: User object not returned after signup.")

    logger.info("Created auth user %s; profile creation is handled by the database trigger", result.user.get("id"))

    if result.session:
        message = "Account created successfully! You are logged in."
    else:
        message = "Account created successfully! Please check your email to confirm your account."

    return SignupResult(user=result.user, session=result.session, message=message)


def log_in(client: Client, *, email: Optional[str], password: Optional[str]) -> AuthResult:
    """
    Verify a password and open a session.

    Raises:
        ValidationError: email or password missing
        Unauthenticated: credentials rejected or no session returned
    """

    if not email or not password:
        raise ValidationError("Email and password are required.")

    try:
        result = sign_in(client, email, password)
    except AuthError as e:
        logger.info("Sign-in rejected by auth provider: %s", _provider_message(e, "unknown"))
        raise Unauthenticated(_provider_message(e, "Invalid login credentials.")) from e

    if not result.session or not result.user:
        raise Unauthenticated("Login failed. No session or user data returned.")

    return result


__all__ = ["SignupResult", "verify_bearer", "register_account", "log_in"]
