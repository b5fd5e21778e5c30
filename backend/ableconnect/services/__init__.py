from ableconnect.services.email import Mailer, build_mailer
from ableconnect.services.storage import FileStorage, build_storage, media_type_for
from ableconnect.services.applications import (
    application_payload,
    change_status,
    normalize_entries,
    submit_application,
    validate_status,
)
from ableconnect.services.profiles import company_profile_payload, normalize_accommodations
from ableconnect.services.reports import build_report

__all__ = [
    "Mailer",
    "build_mailer",
    "FileStorage",
    "build_storage",
    "media_type_for",
    "application_payload",
    "change_status",
    "normalize_entries",
    "submit_application",
    "validate_status",
    "company_profile_payload",
    "normalize_accommodations",
    "build_report",
]
