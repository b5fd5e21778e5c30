"""
Profile API endpoints.

Employer company profiles, jobseeker profiles and preferences, and the
public company lookup.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from ableconnect.api.deps import get_storage, require_roles
from ableconnect.core.exceptions import NotFound, ValidationFailed
from ableconnect.db.base import utc_now
from ableconnect.db.session import get_db
from ableconnect.models import User
from ableconnect.schemas import CamelModel, user_payload
from ableconnect.services.profiles import (
    apply_email_change,
    apply_username_change,
    company_profile_payload,
    normalize_accommodations,
)
from ableconnect.services.storage import FileStorage

logger = logging.getLogger("profiles")

router = APIRouter()

employer_only = require_roles("employer", detail="Only employers can access their company profile")
jobseeker_only = require_roles("jobseeker", detail="Only job seekers can access this.")


# ============== Pydantic Schemas ==============


class CompanyProfileUpdate(CamelModel):
    """Employer profile edit. Username and company name are required."""

    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    company_name: Optional[str] = None
    website: Optional[str] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    inclusion_statement: Optional[str] = None
    accommodations: Any = None
    accommodations_available: bool = False


class PreferencesUpdate(CamelModel):
    job_types: Optional[list[str]] = None
    preferred_location: Optional[str] = None
    desired_salary: Optional[str] = None


class AccommodationUpdate(CamelModel):
    accommodation_preferences: Optional[str] = None


# ============== Helper Functions ==============


def _stripped(value: Optional[str], fallback: Optional[str]) -> Optional[str]:
    if value and value.strip():
        return value.strip()
    return fallback


# ============== API Endpoints ==============


@router.get("/employer")
async def get_company_profile(current_user: User = Depends(employer_only)):
    """The calling employer's account and company profile."""
    return company_profile_payload(current_user)


@router.put("/employer")
async def update_company_profile(
    profile_data: CompanyProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(employer_only),
):
    """Update the calling employer's account fields and company profile."""
    apply_username_change(db, current_user, profile_data.username)
    apply_email_change(db, current_user, profile_data.email)

    if not profile_data.company_name or not profile_data.company_name.strip():
        raise ValidationFailed("Company Name is required")

    profile = dict(current_user.company_profile or {})
    profile.update(
        {
            "name": profile_data.company_name.strip(),
            "website": _stripped(profile_data.website, profile.get("website")),
            "industry": _stripped(profile_data.industry, profile.get("industry")),
            "size": _stripped(profile_data.size, profile.get("size")),
            "inclusionStatement": _stripped(
                profile_data.inclusion_statement, profile.get("inclusionStatement")
            ),
            "accommodations": normalize_accommodations(profile_data.accommodations),
            "accommodationsAvailable": bool(profile_data.accommodations_available),
        }
    )
    current_user.company_profile = profile
    current_user.phone = _stripped(profile_data.phone, current_user.phone)
    current_user.location = _stripped(profile_data.location, current_user.location)

    db.commit()
    db.refresh(current_user)

    logger.info(f"Company profile updated for employer {current_user.id}")
    return company_profile_payload(current_user)


@router.get("/jobseeker")
async def get_jobseeker_profile(current_user: User = Depends(jobseeker_only)):
    return user_payload(current_user)


@router.put("/jobseeker")
async def update_jobseeker_profile(
    username: Optional[str] = Form(None),
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(jobseeker_only),
    storage: FileStorage = Depends(get_storage),
):
    """
    Update the jobseeker profile (multipart form).

    A new 'resume' file replaces the stored one; the old file is removed
    best-effort after the change is committed.
    """
    apply_email_change(db, current_user, email)
    apply_username_change(db, current_user, username)

    if not name or not name.strip():
        raise ValidationFailed("Name is required")
    current_user.name = name.strip()
    current_user.phone = _stripped(phone, current_user.phone)
    current_user.location = _stripped(location, current_user.location)

    pending = await storage.read_upload("resume", resume)
    superseded = None
    if pending is not None:
        superseded = (current_user.resume or {}).get("filename")
        filename = storage.save(pending)
        current_user.resume = {
            "filename": filename,
            "url": f"/api/applications/resume/{filename}",
            "uploadedAt": utc_now().isoformat(),
        }

    db.commit()
    db.refresh(current_user)

    if superseded:
        storage.delete("resume", superseded)

    logger.info(f"Jobseeker profile updated for user {current_user.id}")
    return user_payload(current_user)


@router.put("/jobseeker/preferences")
async def update_preferences(
    preferences: PreferencesUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(jobseeker_only),
):
    if preferences.job_types is not None:
        current_user.job_types = list(preferences.job_types)
    if preferences.preferred_location is not None:
        current_user.preferred_location = preferences.preferred_location
    if preferences.desired_salary is not None:
        current_user.desired_salary = preferences.desired_salary
    db.commit()
    db.refresh(current_user)
    return user_payload(current_user)


@router.put("/jobseeker/accommodation")
async def update_accommodation(
    accommodation: AccommodationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(jobseeker_only),
):
    current_user.accommodation_preferences = accommodation.accommodation_preferences
    db.commit()
    db.refresh(current_user)
    return user_payload(current_user)


@router.get("/companies/{company_name}")
async def get_public_company_profile(company_name: str, db: Session = Depends(get_db)):
    """
    Public company profile lookup.

    'acme-corp' matches a company named 'Acme Corp' (hyphens become spaces,
    case-insensitive substring).
    """
    wanted = company_name.lower().replace("-", " ").strip()
    employers = db.query(User).filter(User.role == "employer").order_by(User.id).all()
    for employer in employers:
        name = ((employer.company_profile or {}).get("name") or "").lower()
        if name and wanted in name:
            payload = company_profile_payload(employer)
            # Account contact details stay private on the public page
            for private_key in ("username", "email", "phone"):
                payload.pop(private_key, None)
            return payload

    raise NotFound("No user found with that company name")

