"""
Application API endpoints.

Submission, per-role listings, status updates with applicant notification,
withdrawal, and secured resume/certificate downloads.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import FileResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ableconnect.api.deps import (
    ResourceId,
    get_current_user,
    get_mailer,
    get_storage,
    require_roles,
)
from ableconnect.core.exceptions import NotFound
from ableconnect.core.permissions import Action, authorize
from ableconnect.db.session import get_db
from ableconnect.models import Application, Job, User
from ableconnect.services.applications import (
    application_payload,
    change_status,
    parse_job_id,
    submit_application,
    validate_status,
)
from ableconnect.services.email import Mailer
from ableconnect.services.storage import FileStorage, media_type_for

logger = logging.getLogger("applications")

router = APIRouter()


# ============== Pydantic Schemas ==============


class StatusUpdateRequest(BaseModel):
    """Schema for an employer's status decision."""

    status: Optional[str] = None
    notes: Optional[str] = None


# ============== Helper Functions ==============


def get_application_or_404(db: Session, application_id: int) -> Application:
    application = db.query(Application).filter(Application.id == application_id).first()
    if not application:
        raise NotFound("Application not found")
    return application


def _serve_upload(
    kind: str,
    filename: str,
    view: bool,
    db: Session,
    current_user: User,
    storage: FileStorage,
) -> FileResponse:
    """
    Stream a stored file inline (view) or as an attachment.

    Application files are readable by whoever may view the application;
    profile resumes by their owner, employers and admins.
    """
    label = "Resume" if kind == "resume" else "Certificate"
    path = storage.resolve(kind, filename)
    if path is None:
        raise NotFound(f"{label} not found")

    column = Application.resume if kind == "resume" else Application.certificate
    application = db.query(Application).filter(column == filename).first()
    if application is not None:
        authorize(current_user, Action.VIEW_APPLICATION, application)
    else:
        owner = None
        if kind == "resume":
            owner = (
                db.query(User)
                .filter(User.resume["filename"].as_string() == filename)
                .first()
            )
        if owner is None:
            raise NotFound(f"{label} not found")
        authorize(current_user, Action.VIEW_PROFILE_RESUME, owner)

    logger.info(f"Serving {kind} {filename} to user {current_user.id} (view={view})")
    return FileResponse(
        path,
        media_type=media_type_for(filename),
        filename=filename,
        content_disposition_type="inline" if view else "attachment",
    )


# ============== API Endpoints ==============


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_application(
    job_id: Optional[str] = Form(None, alias="jobId"),
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    bio: Optional[str] = Form(None),
    background: list[str] = Form([]),
    experience: list[str] = Form([]),
    cover_letter: Optional[str] = Form(None, alias="coverLetter"),
    accommodation: Optional[str] = Form(None),
    has_special_need: bool = Form(False, alias="hasSpecialNeed"),
    special_need_details: Optional[str] = Form(None, alias="specialNeedDetails"),
    resume: Optional[UploadFile] = File(None),
    certificate: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: FileStorage = Depends(get_storage),
):
    """
    Submit an application (multipart form, optional 'resume' and 'certificate' files).

    Jobseekers only. A second application to the same job is rejected
    before any file is written.
    """
    snapshot = {
        "name": name,
        "email": email,
        "phone": phone,
        "bio": bio,
        "background": background,
        "experience": experience,
        "cover_letter": cover_letter,
        "accommodation": accommodation,
        "has_special_need": has_special_need,
        "special_need_details": special_need_details,
    }
    application = await submit_application(
        db,
        current_user,
        job_id,
        snapshot,
        storage,
        resume=resume,
        certificate=certificate,
    )
    return {
        "message": "Application submitted successfully",
        "data": application_payload(application),
    }


@router.get("/jobseeker")
async def list_my_applications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """All applications the calling jobseeker has submitted."""
    authorize(current_user, Action.LIST_OWN_APPLICATIONS, detail="Only job seekers can view this.")
    applications = (
        db.query(Application)
        .filter(Application.applicant_id == current_user.id)
        .order_by(Application.submitted_at.desc(), Application.id.desc())
        .all()
    )
    return [application_payload(application) for application in applications]


@router.get("/employer")
async def list_employer_applications(
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_roles("employer", detail="Only employers can view applications.")
    ),
):
    """Applications across every job the calling employer has posted."""
    applications = (
        db.query(Application)
        .join(Job, Application.job_id == Job.id)
        .filter(Job.posted_by == current_user.id)
        .order_by(Application.submitted_at.desc(), Application.id.desc())
        .all()
    )
    return [application_payload(application) for application in applications]


@router.get("/employer/{job_id}")
async def list_job_applications(
    job_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_roles("employer", "admin", detail="Only employers can view applicants.")
    ),
):
    """Applications for one job; the caller must own it (or be an admin)."""
    job = db.query(Job).filter(Job.id == parse_job_id(job_id)).first()
    authorize(current_user, Action.LIST_JOB_APPLICATIONS, job)

    applications = (
        db.query(Application)
        .filter(Application.job_id == job.id)
        .order_by(Application.submitted_at.desc(), Application.id.desc())
        .all()
    )
    return [application_payload(application) for application in applications]


@router.get("/resume/{filename}")
async def get_resume_file(
    filename: str,
    view: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: FileStorage = Depends(get_storage),
):
    """Download a resume, or display it inline with ?view=true."""
    return _serve_upload("resume", filename, view, db, current_user, storage)


@router.get("/certificate/{filename}")
async def get_certificate_file(
    filename: str,
    view: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: FileStorage = Depends(get_storage),
):
    """Download a certificate, or display it inline with ?view=true."""
    return _serve_upload("certificate", filename, view, db, current_user, storage)


@router.get("/{application_id}")
async def get_application(
    application_id: ResourceId,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Single application for its applicant, the job's owner, or an admin."""
    application = get_application_or_404(db, application_id)
    authorize(current_user, Action.VIEW_APPLICATION, application)
    return application_payload(application)


@router.put("/{application_id}/status")
async def update_application_status(
    application_id: ResourceId,
    request: StatusUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    mailer: Mailer = Depends(get_mailer),
):
    """
    Set an application's status (owning employer only).

    Valid statuses: 'Pending', 'Accepted', 'Rejected', 'Interview Scheduled'.
    Notes, when given, replace the feedback. The applicant is emailed; a
    failed email does not undo the update.
    """
    new_status = validate_status(request.status)
    application = get_application_or_404(db, application_id)
    authorize(
        current_user,
        Action.UPDATE_APPLICATION_STATUS,
        application,
        detail="You are not authorized",
    )

    notified = change_status(db, application, new_status, mailer, notes=request.notes)

    return {
        "message": "Status updated and email sent" if notified else "Status updated",
        "emailSent": notified,
        "application": application_payload(application),
    }


@router.delete("/{application_id}")
async def delete_application(
    application_id: ResourceId,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: FileStorage = Depends(get_storage),
):
    """Withdraw an application (its applicant only)."""
    application = get_application_or_404(db, application_id)
    authorize(current_user, Action.DELETE_APPLICATION, application)

    resume, certificate = application.resume, application.certificate
    job_id = application.job_id

    db.delete(application)
    applied = list(current_user.applied_jobs or [])
    if job_id in applied:
        current_user.applied_jobs = [applied_id for applied_id in applied if applied_id != job_id]
    db.commit()

    storage.delete("resume", resume)
    storage.delete("certificate", certificate)

    logger.info(f"Application {application_id} withdrawn by user {current_user.id}")
    return {"message": "Application deleted successfully"}
