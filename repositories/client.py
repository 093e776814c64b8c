"""
Supabase client initialization.

This module contains *only* the store connection setup and the helpers every
repository uses to execute a query. It exposes a `Store` holding the
process-wide supabase-py clients; it is created once at startup
(`api.main.create_app`) and injected into every route.

Both clients use the service-role key:
- `admin` runs every data query, RPC, token check and admin user lookup.
- `sessions` runs password sign-up and sign-in only. supabase-py swaps a
  client's Authorization header for the user's token after a sign-in, so
  those flows must never run on `admin`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Type

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client
from supabase.client import ClientOptions

from domain.errors import (
    ServiceError,
    UpstreamReadError,
    UpstreamUnavailable,
    UpstreamWriteError,
)

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation.
UNIQUE_VIOLATION: str = "23505"


@dataclass(frozen=True, slots=True)
class Store:
    """Long-lived, shared handle to the Supabase project."""

    admin: Client
    sessions: Client


def _client_options(timeout: float) -> ClientOptions:
    # The server never refreshes or persists user sessions.
    return ClientOptions(
        auto_refresh_token=False,
        persist_session=False,
        postgrest_client_timeout=timeout,
    )


def create_store(url: Optional[str], key: Optional[str], *, timeout: float = 10.0) -> Optional[Store]:
    """
    Build the process-wide Store.

    Returns None when the URL or key is missing; store-dependent routes then
    answer 500 instead of the process failing to boot.
    """

    if not url or not key:
        logger.error(
            "Supabase URL or service role key is missing. Set SUPABASE_URL and "
            "SUPABASE_SERVICE_ROLE_KEY; store-dependent routes are disabled."
        )
        return None

    store = Store(
        admin=create_client(url, key, options=_client_options(timeout)),
        sessions=create_client(url, key, options=_client_options(timeout)),
    )
    logger.info("Supabase clients initialized (timeout=%ss)", timeout)
    return store


def _execute(query: Any, action: str, failure: Type[ServiceError]) -> Any:
    try:
        response = query.execute()
    except APIError as e:
        logger.error("Store call failed (%s): code=%s message=%s", action, e.code, e.message)
        raise failure(f"Failed to {action}.") from e
    except (httpx.TimeoutException, httpx.TransportError) as e:
        logger.error("Store unreachable (%s): %s", action, e)
        raise UpstreamUnavailable(f"Failed to {action}: the data store is unavailable.") from e

    error = getattr(response, "error", None)
    if error:
        logger.error("Store call failed (%s): %s", action, error)
        raise failure(f"Failed to {action}.")

    return response


def execute_read(query: Any, action: str) -> Any:
    """Execute a select/RPC builder; failures raise UpstreamReadError."""
    return _execute(query, action, UpstreamReadError)


def execute_write(query: Any, action: str) -> Any:
    """Execute an insert/update/delete builder; failures raise UpstreamWriteError."""
    return _execute(query, action, UpstreamWriteError)


def rows_of(response: Any) -> list[dict[str, Any]]:
    return list(getattr(response, "data", None) or [])


def is_unique_violation(error: BaseException) -> bool:
    """True when `error` was caused by a Postgres unique-constraint violation."""
    cause = error.__cause__
    return isinstance(cause, APIError) and str(cause.code) == UNIQUE_VIOLATION


__all__ = [
    "Store",
    "create_store",
    "execute_read",
    "execute_write",
    "rows_of",
    "is_unique_violation",
]
