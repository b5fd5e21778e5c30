from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from ableconnect.db.base import Base, utc_now

CONTENT_CATEGORIES = ("Homepage", "FAQ", "Guidelines", "Announcements", "Guides", "Other")


class Content(Base):
    """Admin-authored article; only published rows reach the public endpoint."""

    __tablename__ = "content"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    body = Column(Text, nullable=False)
    category = Column(String, nullable=False, default="Other", index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    is_published = Column(Boolean, default=False, index=True)

    created_at = Column(DateTime, default=utc_now)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now)

    author = relationship("User")
