"""
API Request and Response Models.

Pydantic models for validating API requests and serializing responses.
Attribute names are snake_case; the wire format uses the camelCase aliases
the frontend expects.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# Auth Models
# ============================================================================

class SignupRequest(BaseModel):
    """
    Request to create an account.

    Every field is optional at the schema level so that missing values are
    reported by the service as a single 400 rather than field-by-field.
    """
    email: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    username: Optional[str] = None
    role: Optional[str] = Field(None, description="'lead-finder' or 'lead-applier'")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "email": "jane@example.com",
                "password": "correct-horse",
                "firstName": "Jane",
                "lastName": "Doe",
                "username": "janedoe",
                "role": "lead-finder"
            }
        }


class SignupResponse(BaseModel):
    success: bool = True
    message: str
    user: Dict[str, Any]
    session: Optional[Dict[str, Any]] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "email": "jane@example.com",
                "password": "correct-horse"
            }
        }


class LoginResponse(BaseModel):
    success: bool = True
    session: Dict[str, Any]
    user: Dict[str, Any]


# ============================================================================
# Dashboard Models
# ============================================================================

class DashboardStatsResponse(BaseModel):
    total_leads: int = Field(0, alias="totalLeads")
    total_applications: int = Field(0, alias="totalApplications")
    pending_applications: int = Field(0, alias="pendingApplications")
    accepted_applications: int = Field(0, alias="acceptedApplications")

    class Config:
        populate_by_name = True


class DashboardResponse(BaseModel):
    """Aggregated dashboard payload. Credits are part of the profile object."""
    profile: Dict[str, Any]
    completed_tasks: List[str] = Field(default_factory=list, alias="completedTasks")
    leads: List[Dict[str, Any]] = Field(default_factory=list)
    applications: List[Dict[str, Any]] = Field(default_factory=list)
    notifications: List[Dict[str, Any]] = Field(default_factory=list)
    stats: DashboardStatsResponse

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "profile": {"id": "4c1f0c9e-2b1d-4a53-9d7e-5a3f1b2c9e10", "role": "lead-applier", "credits": 8},
                "completedTasks": ["bio"],
                "leads": [],
                "applications": [],
                "notifications": [],
                "stats": {
                    "totalLeads": 0,
                    "totalApplications": 0,
                    "pendingApplications": 0,
                    "acceptedApplications": 0
                }
            }
        }


# ============================================================================
# Lead Models
# ============================================================================

class ApplicationCountResponse(BaseModel):
    count: int
    max_allowed: int = Field(..., alias="maxAllowed")

    class Config:
        populate_by_name = True
        json_schema_extra = {"example": {"count": 4, "maxAllowed": 6}}


class MessageResponse(BaseModel):
    message: str


# ============================================================================
# Task Models
# ============================================================================

class ClaimCreditsRequest(BaseModel):
    task_id: Optional[str] = Field(None, alias="taskId")

    class Config:
        populate_by_name = True
        json_schema_extra = {"example": {"taskId": "bio"}}


class ClaimCreditsResponse(BaseModel):
    message: str
    new_credit_balance: int = Field(..., alias="newCreditBalance")

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {"message": "Successfully claimed 3 credits!", "newCreditBalance": 8}
        }


class TaskItem(BaseModel):
    id: str
    credits: int


class TaskListResponse(BaseModel):
    tasks: List[TaskItem]


# ============================================================================
# User Models
# ============================================================================

class ProfileDetailsRequest(BaseModel):
    target_user_id: Optional[str] = Field(None, alias="targetUserId")

    class Config:
        populate_by_name = True
        json_schema_extra = {"example": {"targetUserId": "4c1f0c9e-2b1d-4a53-9d7e-5a3f1b2c9e10"}}


class ProfileDetailsResponse(BaseModel):
    profile: Dict[str, Any]


# ============================================================================
# Error Models
# ============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str

    class Config:
        json_schema_extra = {"example": {"error": "Lead not found."}}
