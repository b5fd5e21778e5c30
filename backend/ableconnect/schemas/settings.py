from typing import Optional

from pydantic import Field

from ableconnect.schemas.base import CamelModel


class TTSSettings(CamelModel):
    voice: str = ""
    rate: float = Field(1, gt=0, le=10)
    volume: float = Field(1, ge=0, le=1)


class NotificationSettings(CamelModel):
    job_alerts: bool = True
    announcements: bool = True


class SettingsRead(CamelModel):
    tts: TTSSettings
    notifications: NotificationSettings
    font_size: int = 0
    high_contrast: bool = False
    user_id: Optional[int] = None


class SettingsUpdate(CamelModel):
    tts: Optional[TTSSettings] = None
    notifications: Optional[NotificationSettings] = None
    font_size: Optional[int] = Field(None, ge=-2, le=4)
    high_contrast: Optional[bool] = None
