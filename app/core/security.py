"""
Access Control - Faculty Appraisal Dashboard
app/core/security.py

Resolves the session user and the appraisal scope their role grants.
The session layer upstream supplies the caller's email in X-User-Email.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header

from app.core.dependencies import get_user_repository
from app.core.exceptions import AuthorizationException
from app.models.appraisal import UserRecord
from app.models.enumerations import UserRole
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppraisalScope:
    """Which appraisals a reviewer may see."""
    reviewer: UserRecord
    faculty_role: UserRole          # role of the appraised faculty
    department_id: Optional[int]    # None means every department
    has_department: bool = True


def get_current_user(
    x_user_email: Optional[str] = Header(default=None),
    user_repo: UserRepository = Depends(get_user_repository),
) -> UserRecord:
    if not x_user_email:
        raise AuthorizationException("Missing session")
    user = user_repo.get_by_email(x_user_email.strip())
    if user is None:
        logger.info(f"Rejected unknown session email {x_user_email!r}")
        raise AuthorizationException()
    return user


def hod_scope(user: UserRecord = Depends(get_current_user)) -> AppraisalScope:
    """HODs see instructor appraisals in their own department."""
    if user.role != UserRole.HOD:
        raise AuthorizationException()
    return AppraisalScope(
        reviewer=user,
        faculty_role=UserRole.INSTRUCTOR,
        department_id=user.department_id,
        has_department=user.department_id is not None,
    )


def dean_scope(user: UserRecord = Depends(get_current_user)) -> AppraisalScope:
    """Deans see HOD appraisals across all departments."""
    if user.role != UserRole.DEAN:
        raise AuthorizationException()
    return AppraisalScope(reviewer=user, faculty_role=UserRole.HOD, department_id=None)
