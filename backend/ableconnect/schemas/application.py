from datetime import datetime
from typing import Optional

from ableconnect.schemas.base import CamelModel
from ableconnect.schemas.job import JobSummary


class ApplicantSummary(CamelModel):
    id: int
    email: str
    name: Optional[str] = ""
    username: Optional[str] = None


class ApplicationRead(CamelModel):
    """Schema for an application with its job and applicant references."""

    id: int
    job_id: int
    applicant_id: int
    name: str
    email: str
    phone: Optional[str] = ""
    bio: Optional[str] = ""
    background: list[str] = []
    experience: list[str] = []
    cover_letter: Optional[str] = ""
    accommodation: Optional[str] = ""
    has_special_need: bool = False
    special_need_details: Optional[str] = None
    resume: Optional[str] = None
    certificate: Optional[str] = None
    feedback: Optional[str] = None
    status: str
    submitted_at: Optional[datetime] = None
    job: Optional[JobSummary] = None
    applicant: Optional[ApplicantSummary] = None
