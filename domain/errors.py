"""
Domain: error taxonomy.

Every failure a service can report carries the HTTP status the API answers
with. Routers let these propagate; `api.main` renders them as
`{"error": message}`.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base class for failures that map onto an HTTP response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid request."


class Unauthenticated(ServiceError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(ServiceError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(ServiceError):
    status_code = 404
    default_message = "Not found."


class ProfileMissing(NotFound):
    default_message = "User profile not found."


class UnknownTask(NotFound):
    default_message = "Task definition not found."


class Conflict(ServiceError):
    # Conceptually a 409; clients of this API expect 400.
    status_code = 400
    default_message = "Conflict"


class AlreadyClaimed(Conflict):
    default_message = "Credits for this task already claimed."


class TaskNotComplete(ValidationError):
    default_message = "Task not yet completed or validation failed."


class UpstreamReadError(ServiceError):
    default_message = "Failed to read from the data store."


class UpstreamWriteError(ServiceError):
    default_message = "Failed to write to the data store."


class UpstreamUnavailable(ServiceError):
    default_message = "The data store is unavailable."


class StoreNotInitialized(ServiceError):
    default_message = "Server configuration error: Supabase client not initialized."


class NotImplementedFeature(ServiceError):
    status_code = 501
    default_message = "Not implemented."


__all__ = [
    "ServiceError",
    "ValidationError",
    "Unauthenticated",
    "Forbidden",
    "NotFound",
    "ProfileMissing",
    "UnknownTask",
    "Conflict",
    "AlreadyClaimed",
    "TaskNotComplete",
    "UpstreamReadError",
    "UpstreamWriteError",
    "UpstreamUnavailable",
    "StoreNotInitialized",
    "NotImplementedFeature",
]
