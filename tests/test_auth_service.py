"""
Tests for `services/auth_service.py`.

Covers contract rules:
- Missing or malformed bearer headers are rejected before the provider is
  asked; rejected tokens are Unauthenticated; provider outages are
  UpstreamUnavailable.
- Sign-up validates every field, the password length and the role before
  any account-creation call.
- Provider failures surface with the provider's message.
"""

from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
from supabase import AuthError

from domain.errors import ServiceError, Unauthenticated, UpstreamUnavailable, ValidationError
from services.auth_service import log_in, register_account, verify_bearer

USER_ID = "11111111-1111-1111-1111-111111111111"


class ProviderError(AuthError):
    """AuthError with a version-independent constructor."""

    def __init__(self, message: str) -> None:
        Exception.__init__(self, message)
        self.message = message


class Dumpable(dict):
    """Stands in for a supabase-py pydantic model."""

    def model_dump(self, mode="python"):
        return dict(self)


VALID_SIGNUP = {
    "email": "jane@example.com",
    "password": "correct-horse",
    "first_name": "Jane",
    "last_name": "Doe",
    "username": "janedoe",
    "role": "lead-applier",
}


# ---------------------------------------------------------------------------
# verify_bearer
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("header", [None, "", "Token abc", "bearer abc", "Bearer"])
def test_malformed_header_is_rejected_without_provider_call(admin, header) -> None:
    with pytest.raises(Unauthenticated, match="No token provided or malformed header"):
        verify_bearer(admin, header)

    admin.auth.get_user.assert_not_called()


def test_empty_token_is_rejected(admin) -> None:
    with pytest.raises(Unauthenticated, match="Token could not be extracted"):
        verify_bearer(admin, "Bearer ")

    admin.auth.get_user.assert_not_called()


def test_valid_token_resolves_identity(admin, make_user) -> None:
    admin.auth.get_user.return_value = SimpleNamespace(user=make_user(user_metadata={"role": "lead-finder"}))

    identity = verify_bearer(admin, "Bearer good-token")

    admin.auth.get_user.assert_called_once_with("good-token")
    assert identity.id == USER_ID
    assert identity.metadata("role") == "lead-finder"


def test_rejected_token(admin) -> None:
    admin.auth.get_user.side_effect = ProviderError("invalid JWT")

    with pytest.raises(Unauthenticated, match="Unauthorized: invalid JWT"):
        verify_bearer(admin, "Bearer expired")


def test_token_without_user(admin) -> None:
    admin.auth.get_user.return_value = None

    with pytest.raises(Unauthenticated, match="Invalid token or user not found"):
        verify_bearer(admin, "Bearer orphan")


def test_provider_outage_is_upstream_unavailable(admin) -> None:
    admin.auth.get_user.side_effect = httpx.ConnectTimeout("timed out")

    with pytest.raises(UpstreamUnavailable) as excinfo:
        verify_bearer(admin, "Bearer good-token")

    assert excinfo.value.status_code == 500
    assert excinfo.value.message == "Internal server error during authentication."


# ---------------------------------------------------------------------------
# register_account
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("missing", sorted(VALID_SIGNUP))
def test_signup_requires_every_field(admin, missing) -> None:
    fields = dict(VALID_SIGNUP, **{missing: None})

    with pytest.raises(ValidationError, match="Missing required fields"):
        register_account(admin, **fields)

    admin.auth.sign_up.assert_not_called()


def test_signup_rejects_short_password(admin) -> None:
    with pytest.raises(ValidationError, match="at least 8 characters"):
        register_account(admin, **dict(VALID_SIGNUP, password="1234567"))

    admin.auth.sign_up.assert_not_called()


def test_signup_rejects_unknown_role(admin) -> None:
    with pytest.raises(ValidationError) as excinfo:
        register_account(admin, **dict(VALID_SIGNUP, role="manager"))

    assert excinfo.value.status_code == 400
    assert "lead-finder, lead-applier" in excinfo.value.message
    admin.auth.sign_up.assert_not_called()


def test_signup_passes_metadata_and_reports_session(admin) -> None:
    admin.auth.sign_up.return_value = SimpleNamespace(
        user=Dumpable(id=USER_ID, email="jane@example.com"),
        session=Dumpable(access_token="tok"),
    )

    result = register_account(admin, **VALID_SIGNUP)

    payload = admin.auth.sign_up.call_args.args[0]
    assert payload["email"] == "jane@example.com"
    assert payload["options"]["data"] == {
        "first_name": "Jane",
        "last_name": "Doe",
        "username": "janedoe",
        "role": "lead-applier",
    }
    assert result.user == {"id": USER_ID, "email": "jane@example.com"}
    assert result.session == {"access_token": "tok"}
    assert result.message == "Account created successfully! You are logged in."


def test_signup_without_session_asks_for_confirmation(admin) -> None:
    admin.auth.sign_up.return_value = SimpleNamespace(user=Dumpable(id=USER_ID), session=None)

    result = register_account(admin, **VALID_SIGNUP)

    assert result.session is None
    assert "check your email" in result.message


def test_signup_provider_error_is_a_validation_error(admin) -> None:
    admin.auth.sign_up.side_effect = ProviderError("User already registered")

    with pytest.raises(ValidationError, match="User already registered"):
        register_account(admin, **VALID_SIGNUP)


def test_signup_without_user_is_a_server_error(admin) -> None:
    admin.auth.sign_up.return_value = SimpleNamespace(user=None, session=None)

    with pytest.raises(ServiceError) as excinfo:
        register_account(admin, **VALID_SIGNUP)

    assert excinfo.value.status_code == 500


# ---------------------------------------------------------------------------
# log_in
# ---------------------------------------------------------------------------

def test_login_requires_email_and_password(admin) -> None:
    with pytest.raises(ValidationError, match="Email and password are required."):
        log_in(admin, email="jane@example.com", password=None)

    admin.auth.sign_in_with_password.assert_not_called()


def test_login_bad_credentials(admin) -> None:
    admin.auth.sign_in_with_password.side_effect = ProviderError("Invalid login credentials")

    with pytest.raises(Unauthenticated, match="Invalid login credentials"):
        log_in(admin, email="jane@example.com", password="wrong-password")


def test_login_success(admin) -> None:
    admin.auth.sign_in_with_password.return_value = SimpleNamespace(
        user=Dumpable(id=USER_ID), session=Dumpable(access_token="tok")
    )

    result = log_in(admin, email="jane@example.com", password="correct-horse")

    assert result.session == {"access_token": "tok"}
    assert result.user == {"id": USER_ID}


def test_login_without_session(admin) -> None:
    admin.auth.sign_in_with_password.return_value = SimpleNamespace(user=Dumpable(id=USER_ID), session=None)

    with pytest.raises(Unauthenticated, match="No session or user data returned"):
        log_in(admin, email="jane@example.com", password="correct-horse")
