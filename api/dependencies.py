"""
Shared route dependencies.

- get_store: the process-wide Store created at startup
- require_identity: bearer-token verification for protected routes
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header, Request

from domain.errors import StoreNotInitialized
from domain.identity import Identity
from repositories.client import Store
from services.auth_service import verify_bearer


def get_store(request: Request) -> Store:
    store: Optional[Store] = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreNotInitialized()
    return store


def require_identity(
    request: Request,
    authorization: Optional[str] = Header(None),
    store: Store = Depends(get_store),
) -> Identity:
    """
    Verify the `Authorization: Bearer <token>` header.

    The resolved Identity is attached to `request.state.identity` and returned
    to the route. Raises Unauthenticated (401) before any route logic runs.
    """

    identity = verify_bearer(store.admin, authorization)
    request.state.identity = identity
    return identity
