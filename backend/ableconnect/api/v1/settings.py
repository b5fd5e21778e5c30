"""
User settings API endpoints.

Accessibility (text-to-speech, font size, contrast) and notification
preferences. Anonymous callers read the defaults.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ableconnect.api.deps import get_current_user, get_optional_user
from ableconnect.db.session import get_db
from ableconnect.models import User, UserSettings
from ableconnect.models.settings import DEFAULT_NOTIFICATIONS, DEFAULT_TTS
from ableconnect.schemas import SettingsRead, SettingsUpdate

logger = logging.getLogger("settings")

router = APIRouter()


def guest_settings() -> dict:
    return SettingsRead(
        tts=dict(DEFAULT_TTS),
        notifications=dict(DEFAULT_NOTIFICATIONS),
    ).dump()


def get_or_create_settings(db: Session, user: User) -> UserSettings:
    """Return the user's settings row, creating it with defaults on first use."""
    user_settings = db.query(UserSettings).filter(UserSettings.user_id == user.id).first()
    if user_settings is None:
        user_settings = UserSettings(
            user_id=user.id,
            tts=dict(DEFAULT_TTS),
            notifications=dict(DEFAULT_NOTIFICATIONS),
            font_size=0,
            high_contrast=False,
        )
        db.add(user_settings)
        db.commit()
        db.refresh(user_settings)
        logger.info(f"Created default settings for user {user.id}")
    return user_settings


def settings_payload(user_settings: UserSettings) -> dict:
    return SettingsRead(
        tts={**DEFAULT_TTS, **(user_settings.tts or {})},
        notifications={**DEFAULT_NOTIFICATIONS, **(user_settings.notifications or {})},
        font_size=user_settings.font_size or 0,
        high_contrast=bool(user_settings.high_contrast),
        user_id=user_settings.user_id,
    ).dump()


@router.get("")
async def get_settings(
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    if current_user is None:
        return guest_settings()
    return settings_payload(get_or_create_settings(db, current_user))


@router.put("")
async def update_settings(
    update: SettingsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Merge the given sections into the caller's settings."""
    user_settings = get_or_create_settings(db, current_user)

    if update.tts is not None:
        user_settings.tts = {
            **(user_settings.tts or {}),
            **update.tts.model_dump(by_alias=True, exclude_unset=True),
        }
    if update.notifications is not None:
        user_settings.notifications = {
            **(user_settings.notifications or {}),
            **update.notifications.model_dump(by_alias=True, exclude_unset=True),
        }
    if update.font_size is not None:
        user_settings.font_size = update.font_size
    if update.high_contrast is not None:
        user_settings.high_contrast = update.high_contrast

    db.commit()
    db.refresh(user_settings)
    return settings_payload(user_settings)
