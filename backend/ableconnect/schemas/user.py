from datetime import datetime
from typing import Any, Optional

from ableconnect.schemas.base import CamelModel


class UserSummary(CamelModel):
    """Minimal identity, embedded in tokens responses and populated references."""

    id: int
    email: str
    username: str
    role: str


class UserRead(CamelModel):
    """User as returned to its owner and to admins (never the password hash)."""

    id: int
    name: Optional[str] = ""
    email: str
    username: str
    role: str
    phone: Optional[str] = None
    location: Optional[str] = None
    approved: bool = False
    suspended: bool = False
    resume: Optional[dict[str, Any]] = None
    saved_jobs: list[int] = []
    applied_jobs: list[int] = []
    job_types: list[str] = []
    preferred_location: Optional[str] = None
    desired_salary: Optional[str] = None
    accommodation_preferences: Optional[str] = None
    company_profile: Optional[dict[str, Any]] = None
    created_at: Optional[datetime] = None


def user_payload(user) -> dict:
    """Serialize a User ORM row, tolerating NULL JSON lists from older rows."""
    data = UserRead.model_validate(user).dump()
    for key in ("savedJobs", "appliedJobs", "jobTypes"):
        data[key] = data.get(key) or []
    return data
