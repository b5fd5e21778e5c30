"""Helpers for the employer company profile and account field edits."""

import json
from typing import Any, Optional

from sqlalchemy.orm import Session

from ableconnect.core.exceptions import DuplicateError, ValidationFailed
from ableconnect.models import User


def normalize_accommodations(raw: Any) -> list[dict]:
    """
    Normalize accommodations to [{"name": str, "available": bool}].

    Accepts a JSON string, a comma-separated string, a list of names, or a
    list of {"name", "available"} objects. Malformed items are dropped.
    """
    if raw is None or raw == "":
        return []

    value = raw
    if isinstance(raw, str):
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            value = raw

    if isinstance(value, str):
        return [
            {"name": name.strip(), "available": True}
            for name in value.split(",")
            if name.strip()
        ]

    if not isinstance(value, list):
        raise ValidationFailed("Invalid accommodations format")

    normalized: list[dict] = []
    for item in value:
        if isinstance(item, str) and item.strip():
            normalized.append({"name": item.strip(), "available": True})
        elif (
            isinstance(item, dict)
            and isinstance(item.get("name"), str)
            and item["name"].strip()
            and isinstance(item.get("available"), bool)
        ):
            normalized.append({"name": item["name"].strip(), "available": item["available"]})
    return normalized


def company_profile_payload(user: User) -> dict:
    profile = user.company_profile or {}
    return {
        "username": user.username,
        "companyName": profile.get("name") or "",
        "email": user.email or "",
        "phone": user.phone or "",
        "location": user.location or "",
        "website": profile.get("website") or "",
        "industry": profile.get("industry") or "",
        "size": profile.get("size") or "",
        "inclusionStatement": profile.get("inclusionStatement") or "",
        "accommodations": normalize_accommodations(profile.get("accommodations")),
        "accommodationsAvailable": bool(profile.get("accommodationsAvailable", False)),
    }


def apply_email_change(db: Session, user: User, email: Optional[str]) -> None:
    """Change the user's email if given and different, keeping it unique."""
    if not email:
        return
    email = email.strip().lower()
    if email == user.email:
        return
    existing = db.query(User).filter(User.email == email, User.id != user.id).first()
    if existing:
        raise DuplicateError("Email already in use")
    user.email = email


def apply_username_change(db: Session, user: User, username: Optional[str]) -> None:
    """Username is required on profile edits and must stay unique."""
    if not username or not username.strip():
        raise ValidationFailed("Username is required")
    username = username.strip()
    if username == user.username:
        return
    existing = db.query(User).filter(User.username == username, User.id != user.id).first()
    if existing:
        raise DuplicateError("Username already in use")
    user.username = username
