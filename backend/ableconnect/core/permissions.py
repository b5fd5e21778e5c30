"""
Authorization policy.

Every ownership or role decision in the API goes through ``is_allowed``.
Route-level role gates are declared with ``require_roles``.
"""

import logging
from enum import Enum
from typing import Any, Optional

from ableconnect.core.exceptions import Forbidden

logger = logging.getLogger("permissions")


class Action(str, Enum):
    SUBMIT_APPLICATION = "submit_application"
    LIST_OWN_APPLICATIONS = "list_own_applications"
    LIST_JOB_APPLICATIONS = "list_job_applications"
    VIEW_APPLICATION = "view_application"
    UPDATE_APPLICATION_STATUS = "update_application_status"
    DELETE_APPLICATION = "delete_application"
    POST_JOB = "post_job"
    EDIT_JOB = "edit_job"
    DELETE_JOB = "delete_job"
    SAVE_JOB = "save_job"
    VIEW_PROFILE_RESUME = "view_profile_resume"


APPLICATION_STATUSES = ("Pending", "Accepted", "Rejected", "Interview Scheduled")
ADMIN_APPLICATION_STATUSES = ("Pending", "Accepted", "Rejected")
OWNER_JOB_STATUSES = ("Active", "Closed")

# Every status may move to every status, including back to Pending.
# Narrow a row here to restrict the workflow.
APPLICATION_TRANSITIONS: dict[str, frozenset[str]] = {
    current: frozenset(APPLICATION_STATUSES) for current in APPLICATION_STATUSES
}


def can_transition(current: Optional[str], target: str) -> bool:
    """Return True if an application may move from ``current`` to ``target``."""
    if target not in APPLICATION_STATUSES:
        return False
    allowed = APPLICATION_TRANSITIONS.get(current or "Pending", frozenset())
    return target in allowed


def _owns_job(user, job) -> bool:
    return job is not None and user.role == "employer" and job.posted_by == user.id


def is_allowed(user, action: Action, resource: Any = None) -> bool:
    """
    Evaluate the policy for ``user`` performing ``action`` on ``resource``.

    ``resource`` is a Job for job actions and LIST_JOB_APPLICATIONS, an
    Application for application actions, a User for VIEW_PROFILE_RESUME.
    """
    if user is None:
        return False

    role = user.role
    is_admin = role == "admin"

    if action == Action.SUBMIT_APPLICATION:
        return role == "jobseeker"
    if action == Action.LIST_OWN_APPLICATIONS:
        return role == "jobseeker"
    if action == Action.SAVE_JOB:
        return role == "jobseeker"

    if action == Action.POST_JOB:
        return role == "employer"
    if action == Action.EDIT_JOB:
        return _owns_job(user, resource)
    if action == Action.DELETE_JOB:
        return is_admin or _owns_job(user, resource)
    if action == Action.LIST_JOB_APPLICATIONS:
        return resource is not None and (is_admin or _owns_job(user, resource))

    if action == Action.VIEW_APPLICATION:
        if is_admin:
            return True
        if role == "jobseeker":
            return resource.applicant_id == user.id
        if role == "employer":
            return _owns_job(user, resource.job)
        return False
    if action == Action.UPDATE_APPLICATION_STATUS:
        # Admins go through the moderation routes instead
        return _owns_job(user, resource.job)
    if action == Action.DELETE_APPLICATION:
        return role == "jobseeker" and resource.applicant_id == user.id

    if action == Action.VIEW_PROFILE_RESUME:
        return is_admin or role == "employer" or resource.id == user.id

    return False


def authorize(user, action: Action, resource: Any = None, detail: str = "Unauthorized") -> None:
    """Raise Forbidden unless the policy allows the action."""
    if not is_allowed(user, action, resource):
        logger.warning(
            f"Denied {action.value} for user {getattr(user, 'id', None)} "
            f"(role={getattr(user, 'role', None)})"
        )
        raise Forbidden(detail)
