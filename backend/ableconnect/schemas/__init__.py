from ableconnect.schemas.base import CamelModel
from ableconnect.schemas.user import UserRead, UserSummary, user_payload
from ableconnect.schemas.job import JobRead, JobSummary, job_payload
from ableconnect.schemas.application import ApplicantSummary, ApplicationRead
from ableconnect.schemas.content import ContentRead, content_payload
from ableconnect.schemas.settings import SettingsRead, SettingsUpdate

__all__ = [
    "CamelModel",
    "UserRead",
    "UserSummary",
    "user_payload",
    "JobRead",
    "JobSummary",
    "job_payload",
    "ApplicantSummary",
    "ApplicationRead",
    "ContentRead",
    "content_payload",
    "SettingsRead",
    "SettingsUpdate",
]
