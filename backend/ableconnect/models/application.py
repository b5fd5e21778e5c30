from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from ableconnect.db.base import Base, utc_now


class Application(Base):
    """
    A jobseeker's application to one job.

    Holds a snapshot of what the applicant submitted; it is not kept in sync
    with the live User record.
    """

    __tablename__ = "applications"
    __table_args__ = (
        # One application per (job, applicant), enforced by the database
        UniqueConstraint("job_id", "applicant_id", name="uq_application_job_applicant"),
    )

    id = Column(Integer, primary_key=True, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id"), index=True, nullable=False)
    applicant_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)

    # Submission snapshot
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, default="")
    bio = Column(Text, default="")
    background = Column(JSON, default=list)
    experience = Column(JSON, default=list)
    cover_letter = Column(Text, default="")
    accommodation = Column(Text, default="")
    has_special_need = Column(Boolean, default=False)
    special_need_details = Column(Text)

    # Stored filenames under UPLOAD_DIR/resumes and UPLOAD_DIR/certificates
    resume = Column(String, nullable=True)
    certificate = Column(String, nullable=True)

    feedback = Column(Text)
    status = Column(String, default="Pending", index=True)
    submitted_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    # Relationships
    job = relationship("Job", back_populates="applications")
    applicant = relationship("User", back_populates="applications")
