from datetime import datetime
from typing import Optional

from ableconnect.schemas.base import CamelModel


class JobRead(CamelModel):
    """Schema for a job posting."""

    id: int
    title: str
    description: str
    location: str
    salary: Optional[str] = None
    type: Optional[str] = None
    disability_friendly: Optional[bool] = False
    company: str
    accessibility: Optional[list[str]] = None
    about_company: Optional[str] = ""
    requirements: Optional[str] = None
    category: Optional[str] = None
    posted_by: int
    status: str
    created_at: Optional[datetime] = None


class JobSummary(CamelModel):
    """Job reference embedded in application listings."""

    id: int
    title: str
    company: str
    status: str
    location: Optional[str] = None
    type: Optional[str] = None
    posted_by: int


def job_payload(job) -> dict:
    data = JobRead.model_validate(job).dump()
    data["accessibility"] = data.get("accessibility") or []
    return data
