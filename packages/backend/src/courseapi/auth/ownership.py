"""Course ownership checks.

Existence is checked before ownership, so a 403 is only ever returned for a
course that exists. Neither error message names the owner.
"""

from typing import Optional

import structlog

from courseapi.auth.dependencies import AuthenticatedIdentity
from courseapi.db.models import Course
from courseapi.errors import COURSE_NOT_FOUND, AuthorizationError, NotFoundError

logger = structlog.get_logger()

FORBIDDEN_MESSAGES = {
    "edit": "You are not authorized to edit this course.",
    "delete": "You are not authorized to delete this course.",
}


def authorize_course_change(
    identity: AuthenticatedIdentity,
    course: Optional[Course],
    action: str = "edit",
) -> Course:
    """Return the course if `identity` may change it.

    Raises NotFoundError when the course is missing and AuthorizationError
    when it belongs to someone else.
    """
    if course is None:
        raise NotFoundError(COURSE_NOT_FOUND)

    if course.user_id != identity.user_id:
        logger.warning(
            "auth.forbidden",
            action=action,
            course_id=course.id,
            user_id=identity.user_id,
        )
        raise AuthorizationError(FORBIDDEN_MESSAGES[action])

    return course
