"""
Admin API endpoints.

Moderation of users, jobs and applications, site content, and the
dashboard report. Every route here requires the admin role; the gate is
applied once on the router.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ableconnect.api.deps import ResourceId, get_current_user, get_mailer, require_roles
from ableconnect.core.exceptions import InvalidStatus, NotFound, ValidationFailed
from ableconnect.core.permissions import ADMIN_APPLICATION_STATUSES
from ableconnect.db.session import get_db
from ableconnect.models import Application, Content, Job, User
from ableconnect.models.content import CONTENT_CATEGORIES
from ableconnect.models.job import JOB_STATUSES
from ableconnect.models.user import ROLES
from ableconnect.schemas import CamelModel, content_payload, job_payload, user_payload
from ableconnect.services.applications import application_payload, change_status, validate_status
from ableconnect.services.email import Mailer
from ableconnect.services.profiles import apply_email_change, apply_username_change
from ableconnect.services.reports import build_report

logger = logging.getLogger("admin")

router = APIRouter(dependencies=[Depends(require_roles("admin"))])


# ============== Pydantic Schemas ==============


class UserEdit(CamelModel):
    email: Optional[str] = None
    username: Optional[str] = None
    role: Optional[str] = None


class JobEdit(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    status: Optional[str] = None


class ApplicationStatusEdit(BaseModel):
    status: Optional[str] = None
    notes: Optional[str] = None


class FeedbackEdit(BaseModel):
    feedback: Optional[str] = None


class ContentCreate(CamelModel):
    title: Optional[str] = None
    body: Optional[str] = None
    category: Optional[str] = None
    is_published: bool = False


class ContentEdit(CamelModel):
    title: Optional[str] = None
    body: Optional[str] = None
    category: Optional[str] = None
    is_published: Optional[bool] = None


# ============== Helper Functions ==============


def _get_or_404(db: Session, model, object_id: int, detail: str):
    obj = db.query(model).filter(model.id == object_id).first()
    if not obj:
        raise NotFound(detail)
    return obj


def _check_category(category: Optional[str]) -> None:
    if category is not None and category not in CONTENT_CATEGORIES:
        raise ValidationFailed(f"Category must be one of: {', '.join(CONTENT_CATEGORIES)}")


# ============== Users ==============


@router.get("/users")
async def list_users(db: Session = Depends(get_db)):
    users = db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()
    return [user_payload(user) for user in users]


@router.put("/users/{user_id}/approve")
async def approve_user(user_id: ResourceId, db: Session = Depends(get_db)):
    user = _get_or_404(db, User, user_id, "User not found")
    if user.approved:
        raise ValidationFailed("User is already approved")

    user.approved = True
    db.commit()
    db.refresh(user)

    logger.info(f"User {user.id} approved")
    return {"message": "User approved", "user": user_payload(user)}


@router.put("/users/{user_id}/suspend")
async def toggle_user_suspension(user_id: ResourceId, db: Session = Depends(get_db)):
    user = _get_or_404(db, User, user_id, "User not found")
    user.suspended = not user.suspended
    db.commit()
    db.refresh(user)

    message = "User suspended" if user.suspended else "User unsuspended"
    logger.info(f"{message}: {user.id}")
    return {"message": message, "user": user_payload(user)}


@router.put("/users/{user_id}")
async def edit_user(user_id: ResourceId, user_data: UserEdit, db: Session = Depends(get_db)):
    user = _get_or_404(db, User, user_id, "User not found")

    apply_email_change(db, user, user_data.email)
    if user_data.username is not None:
        apply_username_change(db, user, user_data.username)
    if user_data.role is not None:
        if user_data.role not in ROLES:
            raise ValidationFailed(f"Role must be one of: {', '.join(ROLES)}")
        user.role = user_data.role

    db.commit()
    db.refresh(user)
    return {"message": "User updated", "user": user_payload(user)}


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: ResourceId,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a user with their settings, jobs (and those jobs' applications) and applications."""
    user = _get_or_404(db, User, user_id, "User not found")
    if user.id == current_user.id:
        raise ValidationFailed("Admins cannot delete their own account")

    db.delete(user)
    db.commit()

    logger.info(f"User {user_id} deleted by admin {current_user.id}")
    return {"message": "User deleted"}


# ============== Jobs ==============


@router.get("/jobs")
async def list_all_jobs(db: Session = Depends(get_db)):
    jobs = db.query(Job).order_by(Job.created_at.desc(), Job.id.desc()).all()
    return [job_payload(job) for job in jobs]


def _moderate_job(db: Session, job_id: int, target: str) -> dict:
    job = _get_or_404(db, Job, job_id, "Job not found")
    verb = target.lower()
    if job.status == target:
        raise ValidationFailed(f"Job is already {verb}")

    job.status = target
    db.commit()
    db.refresh(job)

    logger.info(f"Job {job.id} {verb}")
    return {"message": f"Job {verb}", "job": job_payload(job)}


@router.put("/jobs/{job_id}/approve")
async def approve_job(job_id: ResourceId, db: Session = Depends(get_db)):
    return _moderate_job(db, job_id, "Approved")


@router.put("/jobs/{job_id}/reject")
async def reject_job(job_id: ResourceId, db: Session = Depends(get_db)):
    return _moderate_job(db, job_id, "Rejected")


@router.put("/jobs/{job_id}")
async def edit_job(job_id: ResourceId, job_data: JobEdit, db: Session = Depends(get_db)):
    job = _get_or_404(db, Job, job_id, "Job not found")

    changes = job_data.model_dump(exclude_unset=True)
    if "status" in changes and changes["status"] not in JOB_STATUSES:
        raise InvalidStatus(f"Status must be one of: {', '.join(JOB_STATUSES)}")
    for field, value in changes.items():
        if value is not None:
            setattr(job, field, value)

    db.commit()
    db.refresh(job)
    return {"message": "Job updated", "job": job_payload(job)}


@router.delete("/jobs/{job_id}")
async def delete_job(job_id: ResourceId, db: Session = Depends(get_db)):
    job = _get_or_404(db, Job, job_id, "Job not found")
    db.delete(job)
    db.commit()

    logger.info(f"Job {job_id} deleted by admin")
    return {"message": "Job deleted"}


# ============== Applications ==============


@router.get("/applications")
async def list_all_applications(db: Session = Depends(get_db)):
    applications = (
        db.query(Application)
        .order_by(Application.submitted_at.desc(), Application.id.desc())
        .all()
    )
    return [application_payload(application) for application in applications]


@router.put("/applications/{application_id}/status")
async def update_application_status(
    application_id: ResourceId,
    status_data: ApplicationStatusEdit,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """Admin status change; limited to Pending/Accepted/Rejected. Notifies the applicant."""
    new_status = validate_status(
        status_data.status,
        allowed=ADMIN_APPLICATION_STATUSES,
        detail="Invalid status. Must be Pending, Accepted, or Rejected",
    )
    application = _get_or_404(db, Application, application_id, "Application not found")

    email_sent = change_status(db, application, new_status, mailer, notes=status_data.notes)
    return {
        "message": "Application status updated",
        "emailSent": email_sent,
        "app": application_payload(application),
    }


@router.put("/applications/{application_id}/feedback")
async def update_application_feedback(
    application_id: ResourceId,
    feedback_data: FeedbackEdit,
    db: Session = Depends(get_db),
):
    application = _get_or_404(db, Application, application_id, "Application not found")
    application.feedback = feedback_data.feedback or ""
    db.commit()
    db.refresh(application)
    return {"message": "Feedback updated", "app": application_payload(application)}


# ============== Reports ==============


@router.get("/reports")
async def get_reports(db: Session = Depends(get_db)):
    return build_report(db)


# ============== Content ==============


@router.get("/content")
async def list_all_content(db: Session = Depends(get_db)):
    items = db.query(Content).order_by(Content.created_at.desc(), Content.id.desc()).all()
    return [content_payload(item) for item in items]


@router.post("/content", status_code=status.HTTP_201_CREATED)
async def create_content(
    content_data: ContentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if not (content_data.title and content_data.body and content_data.category):
        raise ValidationFailed("Title, body, and category are required")
    _check_category(content_data.category)

    item = Content(
        title=content_data.title,
        body=content_data.body,
        category=content_data.category,
        is_published=content_data.is_published,
        created_by=current_user.id,
    )
    db.add(item)
    db.commit()
    db.refresh(item)

    logger.info(f"Content {item.id} created by admin {current_user.id}")
    return content_payload(item)


@router.put("/content/{content_id}")
async def edit_content(
    content_id: ResourceId, content_data: ContentEdit, db: Session = Depends(get_db)
):
    item = _get_or_404(db, Content, content_id, "Content not found")

    changes = content_data.model_dump(exclude_unset=True)
    _check_category(changes.get("category"))
    for field, value in changes.items():
        if value is not None:
            setattr(item, field, value)

    db.commit()
    db.refresh(item)
    return content_payload(item)


@router.delete("/content/{content_id}")
async def delete_content(content_id: ResourceId, db: Session = Depends(get_db)):
    item = _get_or_404(db, Content, content_id, "Content not found")
    db.delete(item)
    db.commit()
    return {"message": "Content deleted"}
