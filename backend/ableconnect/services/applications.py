"""
Application workflow.

Owns submission (with duplicate protection and file storage), the status
state machine, and the notification sent to the applicant whenever an
application's status is set.
"""

import html
import logging
import os
import re
from typing import Any, Iterable, Optional

from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ableconnect.core.exceptions import (
    DuplicateApplication,
    InvalidJob,
    InvalidStatus,
    ValidationFailed,
)
from ableconnect.core.permissions import (
    APPLICATION_STATUSES,
    Action,
    authorize,
    can_transition,
)
from ableconnect.db.base import MAX_ID
from ableconnect.models import Application, Job, User
from ableconnect.schemas import ApplicantSummary, ApplicationRead, JobSummary
from ableconnect.services.email import Mailer
from ableconnect.services.storage import FileStorage

logger = logging.getLogger("applications")


# ============== Normalization ==============


def normalize_entries(value: Any) -> list[str]:
    """
    Coerce a stored background/experience value to a list.

    Lists pass through unchanged, a bare non-empty string becomes a
    one-element list, anything else becomes [].
    """
    if isinstance(value, list):
        return [str(item) for item in value]
    if isinstance(value, str) and value:
        return [value]
    return []


def clean_entries(values: Optional[Iterable[Any]]) -> list[str]:
    """Trim submitted list items and drop blanks, keeping their order."""
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]
    return [item.strip() for item in values if isinstance(item, str) and item.strip()]


def application_payload(application: Application) -> dict:
    """Serialize an application for any reader (applicant, employer, admin)."""
    data = {
        column.name: getattr(application, column.name)
        for column in Application.__table__.columns
    }
    data["background"] = normalize_entries(application.background)
    data["experience"] = normalize_entries(application.experience)
    data["resume"] = os.path.basename(application.resume) if application.resume else None
    data["certificate"] = (
        os.path.basename(application.certificate) if application.certificate else None
    )
    data["has_special_need"] = bool(application.has_special_need)
    data["job"] = JobSummary.model_validate(application.job) if application.job else None
    data["applicant"] = (
        ApplicantSummary.model_validate(application.applicant) if application.applicant else None
    )
    return ApplicationRead.model_validate(data).dump()


# ============== Submission ==============


def parse_job_id(raw: Any) -> int:
    """Parse a job id; only ASCII digits within the key range are accepted."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    else:
        text = str(raw or "").strip()
        if not re.fullmatch(r"[0-9]+", text):
            raise InvalidJob()
        value = int(text)
    if not 0 < value <= MAX_ID:
        raise InvalidJob()
    return value


def find_existing_application(
    db: Session, job_id: int, applicant_id: int
) -> Optional[Application]:
    return (
        db.query(Application)
        .filter(Application.job_id == job_id, Application.applicant_id == applicant_id)
        .first()
    )


async def submit_application(
    db: Session,
    applicant: User,
    job_id: Any,
    snapshot: dict[str, Any],
    storage: FileStorage,
    resume: Optional[UploadFile] = None,
    certificate: Optional[UploadFile] = None,
) -> Application:
    """
    Create a Pending application for ``applicant`` on ``job_id``.

    Checks run before anything is written: role, required fields, job
    existence, the duplicate pre-check, then file validation. The unique
    (job, applicant) constraint catches submissions that race past the
    pre-check; their stored files are removed again.
    """
    authorize(applicant, Action.SUBMIT_APPLICATION, detail="Only job seekers can apply.")

    name = (snapshot.get("name") or "").strip()
    email = (snapshot.get("email") or "").strip()
    if job_id in (None, "") or not name or not email:
        raise ValidationFailed("Job ID, name, and email are required")

    parsed_job_id = parse_job_id(job_id)
    job = db.query(Job).filter(Job.id == parsed_job_id).first()
    if not job:
        raise InvalidJob()

    if find_existing_application(db, job.id, applicant.id):
        raise DuplicateApplication()

    pending_resume = await storage.read_upload("resume", resume)
    pending_certificate = await storage.read_upload("certificate", certificate)

    resume_name = storage.save(pending_resume) if pending_resume else None
    certificate_name = storage.save(pending_certificate) if pending_certificate else None

    application = Application(
        job_id=job.id,
        applicant_id=applicant.id,
        name=name,
        email=email,
        phone=snapshot.get("phone") or "",
        bio=snapshot.get("bio") or "",
        background=clean_entries(snapshot.get("background")),
        experience=clean_entries(snapshot.get("experience")),
        cover_letter=snapshot.get("cover_letter") or "",
        accommodation=snapshot.get("accommodation") or "",
        has_special_need=bool(snapshot.get("has_special_need")),
        special_need_details=snapshot.get("special_need_details") or None,
        resume=resume_name,
        certificate=certificate_name,
        status="Pending",
    )
    db.add(application)

    applied = list(applicant.applied_jobs or [])
    if job.id not in applied:
        applicant.applied_jobs = applied + [job.id]

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        storage.delete("resume", resume_name)
        storage.delete("certificate", certificate_name)
        logger.warning(
            f"Duplicate application blocked by constraint: job {job.id}, applicant {applicant.id}"
        )
        raise DuplicateApplication()

    db.refresh(application)
    logger.info(f"Application {application.id} submitted by user {applicant.id} for job {job.id}")
    return application


# ============== Status Workflow ==============


def validate_status(
    new_status: Optional[str],
    allowed: Iterable[str] = APPLICATION_STATUSES,
    detail: str = "Invalid status value",
) -> str:
    if new_status not in tuple(allowed):
        raise InvalidStatus(detail)
    return new_status


def build_status_email(application: Application, new_status: str, notes: Optional[str]) -> dict:
    job_title = application.job.title if application.job else "your application"
    greeting = html.escape(application.applicant.username or "Applicant")
    feedback_html = f"<p>Feedback: {html.escape(notes)}</p>" if notes else ""
    body = (
        "<h2>Application Status Update</h2>"
        f"<p>Hi {greeting},</p>"
        f"<p>Your application status has been updated to: {html.escape(new_status)}.</p>"
        f"{feedback_html}"
        "<p>Thank you for using AbleConnect Job Portal!</p>"
    )
    return {
        "to": application.applicant.email,
        "subject": f"Your Application Status for {job_title}",
        "html": body,
    }


def notify_applicant(
    mailer: Mailer, application: Application, new_status: str, notes: Optional[str]
) -> bool:
    """Send the status email once. Failures are logged and reported as False."""
    message = build_status_email(application, new_status, notes)
    try:
        return bool(mailer.send(**message))
    except Exception:
        logger.exception(f"Status email for application {application.id} failed")
        return False


def change_status(
    db: Session,
    application: Application,
    new_status: str,
    mailer: Mailer,
    notes: Optional[str] = None,
) -> bool:
    """
    Persist a new status (and notes as feedback), then notify the applicant.

    Returns whether the notification was delivered; the status change stands
    either way.
    """
    previous = application.status
    if not can_transition(previous, new_status):
        raise InvalidStatus(f"Cannot move application from {previous} to {new_status}")

    application.status = new_status
    if notes:
        application.feedback = notes
    db.commit()
    db.refresh(application)

    logger.info(
        f"Application {application.id} status {previous} -> {new_status}, "
        f"feedback: {notes or 'None'}"
    )

    notified = notify_applicant(mailer, application, new_status, notes)
    if not notified:
        logger.warning(f"Applicant of application {application.id} was not notified")
    return notified
