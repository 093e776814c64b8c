"""
Auth API Endpoints.

Endpoints for account sign-up and password login.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_store
from api.models import LoginRequest, LoginResponse, SignupRequest, SignupResponse
from domain.errors import ServiceError
from repositories.client import Store
from services.auth_service import log_in, register_account

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/signup",
    status_code=201,
    response_model=SignupResponse,
    summary="Sign Up",
    description="Create an account. The profile row is created by a database trigger."
)
def signup(request: SignupRequest, store: Store = Depends(get_store)):
    """
    Create a new account.

    **Validation (before the auth provider is contacted):**
    - email, password, firstName, lastName, username and role are required
    - password must be at least 8 characters
    - role must be `lead-finder` or `lead-applier`

    The message tells the client whether a session was opened or the email
    still has to be confirmed.
    """
    try:
        result = register_account(
            store.sessions,
            email=request.email,
            password=request.password,
            first_name=request.first_name,
            last_name=request.last_name,
            username=request.username,
            role=request.role,
        )
        return SignupResponse(message=result.message, user=result.user, session=result.session)

    except ServiceError:
        raise
    except Exception:
        logger.exception("Unexpected error during signup")
        raise HTTPException(
            status_code=500,
            detail="An unexpected error occurred during signup."
        )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log In",
    description="Verify email and password and return a session."
)
def login(request: LoginRequest, store: Store = Depends(get_store)):
    try:
        result = log_in(store.sessions, email=request.email, password=request.password)
        return LoginResponse(session=result.session, user=result.user)

    except ServiceError:
        raise
    except Exception:
        logger.exception("Unexpected error during login")
        raise HTTPException(
            status_code=500,
            detail="An unexpected error occurred during login."
        )
