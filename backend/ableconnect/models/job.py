from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from ableconnect.db.base import Base, utc_now

JOB_TYPES = ("Full-time", "Part-time", "Contract", "Remote", "Internship")
JOB_STATUSES = ("Pending", "Approved", "Rejected", "Active", "Closed")


class Job(Base):
    """Job posting owned by the employer in ``posted_by``."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String, nullable=False)
    salary = Column(String)
    type = Column(String, default="Full-time")
    disability_friendly = Column(Boolean, default=False)

    # Copied from the poster's company profile when the job is created
    company = Column(String, nullable=False)
    accessibility = Column(JSON, default=list)  # ["Screen reader compatible", ...]
    about_company = Column(Text, default="")
    requirements = Column(Text)
    category = Column(String)

    posted_by = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    status = Column(String, default="Pending", index=True)
    created_at = Column(DateTime, default=utc_now, index=True)

    # Relationships
    poster = relationship("User", back_populates="jobs")
    applications = relationship(
        "Application", back_populates="job", cascade="all, delete-orphan"
    )
