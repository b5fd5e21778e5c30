"""
Authentication API endpoints.

Handles registration, login with JWT token generation, and password reset.
"""

import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import field_validator
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ableconnect.api.deps import get_current_user, get_mailer
from ableconnect.core.config import settings
from ableconnect.core.exceptions import (
    DuplicateError,
    NotFound,
    ServerError,
    ValidationFailed,
)
from ableconnect.core.security import (
    create_user_token,
    generate_reset_token,
    get_password_hash,
    verify_password,
)
from ableconnect.db.base import utc_now
from ableconnect.db.session import get_db
from ableconnect.models import User
from ableconnect.schemas import CamelModel, UserSummary, user_payload
from ableconnect.services.email import Mailer

logger = logging.getLogger("auth")

router = APIRouter()

SELF_SERVICE_ROLES = ("jobseeker", "employer")


# ============== Pydantic Schemas ==============


class UserRegister(CamelModel):
    """Schema for user registration."""

    email: str
    username: str
    password: str
    name: Optional[str] = None
    role: Optional[str] = None  # defaults to 'jobseeker'

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate email format."""
        email_pattern = r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$"
        if not re.match(email_pattern, v.strip()):
            raise ValueError("Invalid email format")
        return v.strip().lower()


class LoginRequest(CamelModel):
    """Login accepts either the username or the email."""

    username_or_email: str
    password: str


class ForgotPasswordRequest(CamelModel):
    email: str


class ResetPasswordRequest(CamelModel):
    password: str


# ============== Helper Functions ==============


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get a user by email address."""
    return db.query(User).filter(User.email == email.strip().lower()).first()


def authenticate_user(db: Session, username_or_email: str, password: str) -> Optional[User]:
    """Authenticate a user by username or email and password."""
    identifier = username_or_email.strip()
    user = (
        db.query(User)
        .filter(or_(User.email == identifier.lower(), User.username == identifier))
        .first()
    )
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


# ============== API Endpoints ==============


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(user_data: UserRegister, db: Session = Depends(get_db)):
    """
    Register a new user.

    Role defaults to 'jobseeker'. Every account starts unapproved; employers
    wait for an admin to approve them.
    """
    role = user_data.role or "jobseeker"
    if role not in SELF_SERVICE_ROLES:
        raise ValidationFailed("Role must be 'jobseeker' or 'employer'")

    if not user_data.username.strip() or not user_data.password:
        raise ValidationFailed("Username and password are required")

    if get_user_by_email(db, user_data.email):
        raise DuplicateError("User already exists")

    new_user = User(
        email=user_data.email,
        username=user_data.username.strip(),
        name=(user_data.name or user_data.username).strip(),
        hashed_password=get_password_hash(user_data.password),
        role=role,
        approved=False,
        company_profile={},
        saved_jobs=[],
        applied_jobs=[],
        job_types=[],
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise DuplicateError("User already exists")
    db.refresh(new_user)

    logger.info(f"Registered user {new_user.id} ({new_user.role})")

    return {
        "message": "User registered successfully",
        "user": UserSummary.model_validate(new_user).dump(),
    }


@router.post("/login")
async def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Verify credentials and return a bearer token carrying user id and role."""
    user = authenticate_user(db, credentials.username_or_email, credentials.password)
    if not user:
        raise ValidationFailed("Invalid credentials")

    token = create_user_token(user.id, user.role)
    logger.info(f"User {user.id} logged in")

    return {
        "message": "Login successful",
        "user": UserSummary.model_validate(user).dump(),
        "token": token,
    }


@router.get("/me")
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the authenticated user's record."""
    return user_payload(current_user)


@router.post("/forgot-password")
async def forgot_password(
    request: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """
    Issue a one-hour reset token and email the reset link.

    A newer request replaces any outstanding token.
    """
    user = get_user_by_email(db, request.email)
    if not user:
        raise NotFound("User not found")

    token, expires_at = generate_reset_token()
    user.reset_token = token
    user.reset_token_expiry = expires_at
    db.commit()

    reset_url = f"{settings.FRONTEND_URL.rstrip('/')}/reset/{token}"
    sent = mailer.send(
        to=user.email,
        subject="Password Reset",
        html=(
            f'<p>Click <a href="{reset_url}">here</a> to reset your password. '
            "Link expires in 1 hour.</p>"
        ),
    )
    if not sent:
        logger.error(f"Reset email for user {user.id} could not be sent")
        raise ServerError("Server error")

    return {"message": "Reset link sent to your email!"}


@router.post("/reset-password/{token}")
async def reset_password(
    token: str,
    request: ResetPasswordRequest,
    db: Session = Depends(get_db),
):
    """Consume a reset token: set the new password and clear the token in one commit."""
    if not request.password:
        raise ValidationFailed("Password is required")

    user = (
        db.query(User)
        .filter(User.reset_token == token, User.reset_token_expiry > utc_now())
        .first()
    )
    if not user:
        raise ValidationFailed("Invalid or expired token")

    user.hashed_password = get_password_hash(request.password)
    user.reset_token = None
    user.reset_token_expiry = None
    db.commit()

    logger.info(f"Password reset for user {user.id}")
    return {"message": "Password reset successfully"}
