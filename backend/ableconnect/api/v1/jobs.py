"""
Job API endpoints.

Public search and detail, employer posting and ownership-scoped edits,
and jobseeker save/quick-apply.
"""

import logging
from typing import Literal, Optional, Union

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from ableconnect.api.deps import ResourceId, get_current_user, get_storage, require_roles
from ableconnect.core.config import settings
from ableconnect.core.exceptions import Forbidden, InvalidStatus, NotFound
from ableconnect.core.permissions import OWNER_JOB_STATUSES, Action, authorize
from ableconnect.db.session import get_db
from ableconnect.models import Job, User
from ableconnect.schemas import CamelModel, job_payload
from ableconnect.services.applications import application_payload, submit_application
from ableconnect.services.storage import FileStorage

logger = logging.getLogger("jobs")

router = APIRouter()

JobType = Literal["Full-time", "Part-time", "Contract", "Remote", "Internship"]


# ============== Pydantic Schemas ==============


class JobCreate(CamelModel):
    """Schema for posting a job."""

    title: str
    description: str
    location: str
    salary: Optional[Union[str, float]] = None
    type: JobType = "Full-time"
    disability_friendly: bool = False
    company: Optional[str] = None
    accessibility: list[str] = []
    about_company: Optional[str] = ""
    requirements: Optional[str] = None
    category: Optional[str] = None


class JobUpdate(CamelModel):
    """Schema for an owner's partial job edit."""

    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[Union[str, float]] = None
    type: Optional[JobType] = None
    disability_friendly: Optional[bool] = None
    company: Optional[str] = None
    accessibility: Optional[list[str]] = None
    about_company: Optional[str] = None
    requirements: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None


# ============== Helper Functions ==============


def get_job_or_404(db: Session, job_id: int) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise NotFound("Job not found")
    return job


def _contains(column, term: str):
    """Case-insensitive substring match with LIKE wildcards escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.ilike(f"%{escaped}%", escape="\\")


def _salary_text(value: Optional[Union[str, float]]) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)


# ============== API Endpoints ==============


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_job(
    job_data: JobCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Employer posts a new job.

    The company name comes from the poster's company profile when set,
    otherwise from the request, otherwise 'Unnamed Company'.
    """
    authorize(current_user, Action.POST_JOB, detail="Only employers can post jobs")

    if settings.ENFORCE_EMPLOYER_APPROVAL and not current_user.approved:
        raise Forbidden("Your employer account is awaiting admin approval")

    profile = current_user.company_profile or {}
    company = profile.get("name") or job_data.company or "Unnamed Company"

    job = Job(
        title=job_data.title,
        description=job_data.description,
        location=job_data.location,
        salary=_salary_text(job_data.salary),
        type=job_data.type,
        disability_friendly=job_data.disability_friendly,
        company=company,
        accessibility=job_data.accessibility,
        about_company=job_data.about_company or "",
        requirements=job_data.requirements,
        category=job_data.category,
        posted_by=current_user.id,
        status="Pending",
    )
    db.add(job)
    db.commit()
    db.refresh(job)

    logger.info(f"Job {job.id} posted by employer {current_user.id} as '{company}'")

    return {"message": "Job posted successfully", "job": job_payload(job)}


@router.get("")
async def list_jobs(
    type: Optional[str] = Query(None),
    disability_friendly: Optional[str] = Query(None, alias="disabilityFriendly"),
    location: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Public job search. All filters combine with AND.

    - type: exact match ('All' or empty means any)
    - disabilityFriendly: 'true' keeps only disability-friendly jobs
    - location: case-insensitive substring
    - search: case-insensitive substring of title, description or company
    """
    query = db.query(Job)

    if settings.PUBLIC_JOBS_APPROVED_ONLY:
        query = query.filter(Job.status.notin_(["Pending", "Rejected"]))
    if type and type != "All":
        query = query.filter(Job.type == type)
    if disability_friendly == "true":
        query = query.filter(Job.disability_friendly.is_(True))
    if location:
        query = query.filter(_contains(Job.location, location))
    if search:
        query = query.filter(
            or_(
                _contains(Job.title, search),
                _contains(Job.description, search),
                _contains(Job.company, search),
            )
        )

    jobs = query.order_by(Job.created_at.desc(), Job.id.desc()).all()
    return [job_payload(job) for job in jobs]


@router.get("/employer")
async def list_my_jobs(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("employer", detail="Forbidden")),
):
    """The caller's own postings, newest first."""
    jobs = (
        db.query(Job)
        .filter(Job.posted_by == current_user.id)
        .order_by(Job.created_at.desc(), Job.id.desc())
        .all()
    )
    return [job_payload(job) for job in jobs]


@router.get("/saved")
async def list_saved_jobs(
    db: Session = Depends(get_db),
    current_user: User = Depends(
        require_roles("jobseeker", detail="Only jobseekers can save jobs")
    ),
):
    """Jobs in the caller's saved list that still exist."""
    saved_ids = list(current_user.saved_jobs or [])
    if not saved_ids:
        return []
    jobs = db.query(Job).filter(Job.id.in_(saved_ids)).all()
    by_id = {job.id: job for job in jobs}
    return [job_payload(by_id[job_id]) for job_id in saved_ids if job_id in by_id]


@router.get("/{job_id}")
async def get_job(job_id: ResourceId, db: Session = Depends(get_db)):
    """Public job detail."""
    return job_payload(get_job_or_404(db, job_id))


@router.put("/{job_id}")
async def update_job(
    job_id: ResourceId,
    job_data: JobUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update a job (owner only).

    Owners may move the status between Active and Closed; approval and
    rejection belong to admins.
    """
    job = get_job_or_404(db, job_id)
    authorize(
        current_user,
        Action.EDIT_JOB,
        job,
        detail="Unauthorized: You can only edit your own jobs",
    )

    changes = job_data.model_dump(exclude_unset=True)
    if "status" in changes and changes["status"] not in OWNER_JOB_STATUSES:
        raise InvalidStatus("Employers may only set a job to Active or Closed")
    if "salary" in changes:
        changes["salary"] = _salary_text(changes["salary"])
    if changes.get("accessibility") is None:
        changes.pop("accessibility", None)

    for field, value in changes.items():
        if value is None and field in ("title", "description", "location", "company", "type"):
            continue
        setattr(job, field, value)

    db.commit()
    db.refresh(job)

    logger.info(f"Job {job.id} updated by owner {current_user.id}: {sorted(changes)}")
    return job_payload(job)


@router.delete("/{job_id}")
async def delete_job(
    job_id: ResourceId,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a job and its applications (owner or admin)."""
    job = get_job_or_404(db, job_id)
    authorize(current_user, Action.DELETE_JOB, job)

    db.delete(job)
    db.commit()

    logger.info(f"Job {job_id} deleted by user {current_user.id}")
    return {"message": "Job deleted"}


@router.post("/{job_id}/save")
async def toggle_saved_job(
    job_id: ResourceId,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Save the job, or unsave it if it is already saved."""
    authorize(current_user, Action.SAVE_JOB, detail="Only jobseekers can save jobs")
    job = get_job_or_404(db, job_id)

    saved = list(current_user.saved_jobs or [])
    if job.id in saved:
        current_user.saved_jobs = [saved_id for saved_id in saved if saved_id != job.id]
        db.commit()
        return {"message": "Job removed from saved jobs", "saved": False}

    current_user.saved_jobs = saved + [job.id]
    db.commit()
    return {"message": "Job saved successfully", "saved": True}


@router.post("/apply/{job_id}", status_code=status.HTTP_201_CREATED)
async def quick_apply(
    job_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    storage: FileStorage = Depends(get_storage),
):
    """
    Apply with the caller's profile as the submission snapshot.

    Runs the same checks as the full application form.
    """
    snapshot = {
        "name": current_user.name or current_user.username,
        "email": current_user.email,
        "phone": current_user.phone,
        "accommodation": current_user.accommodation_preferences,
    }
    application = await submit_application(db, current_user, job_id, snapshot, storage)
    return {"message": "Application submitted.", "data": application_payload(application)}
