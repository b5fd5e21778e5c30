"""Read-only rollups for the admin dashboard."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from ableconnect.models import Application, Job, User
from ableconnect.models.job import JOB_STATUSES


def top_employers(db: Session, limit: int = 5) -> list[dict]:
    """Employers ranked by number of posted jobs."""
    job_count = func.count(Job.id).label("job_count")
    rows = (
        db.query(User, job_count)
        .join(Job, Job.posted_by == User.id)
        .group_by(User.id)
        .order_by(job_count.desc(), User.id)
        .limit(limit)
        .all()
    )
    return [
        {
            "id": user.id,
            "email": user.email,
            "company": (user.company_profile or {}).get("name"),
            "jobCount": count,
        }
        for user, count in rows
    ]


def build_report(db: Session) -> dict:
    users_by_role = {
        role: db.query(User).filter(User.role == role).count()
        for role in ("jobseeker", "employer")
    }
    jobs_by_status = {
        job_status.lower(): db.query(Job).filter(Job.status == job_status).count()
        for job_status in JOB_STATUSES
    }

    return {
        "totalUsers": db.query(User).count(),
        "totalJobs": db.query(Job).count(),
        "totalApplications": db.query(Application).count(),
        "hires": db.query(Application).filter(Application.status == "Accepted").count(),
        "resumeUploads": db.query(Application).filter(Application.resume.isnot(None)).count(),
        "accommodations": db.query(Application)
        .filter(Application.accommodation.isnot(None), Application.accommodation != "")
        .count(),
        "usersByRole": users_by_role,
        "jobsByStatus": jobs_by_status,
        "topEmployers": top_employers(db),
    }
