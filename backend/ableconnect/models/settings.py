from sqlalchemy import Boolean, Column, ForeignKey, Integer, JSON
from sqlalchemy.orm import relationship

from ableconnect.db.base import Base

DEFAULT_TTS = {"voice": "", "rate": 1, "volume": 1}
DEFAULT_NOTIFICATIONS = {"jobAlerts": True, "announcements": True}


class UserSettings(Base):
    """Accessibility and notification preferences, one row per user."""

    __tablename__ = "user_settings"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    tts = Column(JSON, default=lambda: dict(DEFAULT_TTS))
    notifications = Column(JSON, default=lambda: dict(DEFAULT_NOTIFICATIONS))
    font_size = Column(Integer, default=0)  # offset, -2 to 4
    high_contrast = Column(Boolean, default=False)

    user = relationship("User", back_populates="settings")
