from ableconnect.models.user import User
from ableconnect.models.job import Job
from ableconnect.models.application import Application
from ableconnect.models.content import Content
from ableconnect.models.settings import UserSettings

__all__ = ["User", "Job", "Application", "Content", "UserSettings"]
