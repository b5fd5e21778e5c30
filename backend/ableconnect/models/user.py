from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String
from sqlalchemy.orm import relationship

from ableconnect.db.base import Base, utc_now

ROLES = ("jobseeker", "employer", "admin")


class User(Base):
    """
    Account for every role.

    Employer-only data lives in ``company_profile`` and jobseeker-only data in
    the resume/preference columns; both are document-shaped JSON.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, default="")
    email = Column(String, unique=True, index=True, nullable=False)
    username = Column(String, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    phone = Column(String)
    location = Column(String)
    role = Column(String, nullable=False, default="jobseeker")  # 'jobseeker' | 'employer' | 'admin'

    # Moderation flags
    approved = Column(Boolean, default=False, nullable=False)
    suspended = Column(Boolean, default=False, nullable=False)

    # Jobseeker data
    # Format: {"filename": str, "url": str, "uploadedAt": iso8601}
    resume = Column(JSON, nullable=True)
    saved_jobs = Column(JSON, default=list)
    applied_jobs = Column(JSON, default=list)
    job_types = Column(JSON, default=list)
    preferred_location = Column(String)
    desired_salary = Column(String)
    accommodation_preferences = Column(String)

    # Employer data
    # Format: {"name", "website", "industry", "size", "inclusionStatement",
    #          "accommodations": [{"name": str, "available": bool}], "accommodationsAvailable": bool}
    company_profile = Column(JSON, default=dict)

    # Password reset
    reset_token = Column(String, index=True, nullable=True)
    reset_token_expiry = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=utc_now)

    # Relationships
    jobs = relationship("Job", back_populates="poster", cascade="all, delete-orphan")
    applications = relationship(
        "Application", back_populates="applicant", cascade="all, delete-orphan"
    )
    settings = relationship(
        "UserSettings", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
