"""Course API routes.

Reads are public. Writes require Basic auth; update and delete also require
that the caller owns the course (404 before 403). Bodies are taken raw and
validated only after those checks, so a bad payload never masks a 404 or 403.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from courseapi.auth.dependencies import AuthenticatedIdentity, get_current_user
from courseapi.auth.ownership import authorize_course_change
from courseapi.db.engine import get_db
from courseapi.db.models import Course
from courseapi.errors import COURSE_NOT_FOUND, NotFoundError, ValidationError
from courseapi.schemas.course import CourseRead, CourseWrite
from courseapi.services.course_service import CourseService
from courseapi.validation import COURSE_RULES, payload_object, validate_payload

router = APIRouter(prefix="/courses")

MAX_ID = 2**31 - 1


def _svc(db: AsyncSession = Depends(get_db)) -> CourseService:
    return CourseService(db)


async def _load_course(
    course_id: str, svc: CourseService = Depends(_svc)
) -> Optional[Course]:
    """Resolve the {course_id} path segment. Non-numeric ids don't exist."""
    try:
        pk = int(course_id)
    except ValueError:
        return None
    # ids are 32-bit integer columns
    if not 0 < pk <= MAX_ID:
        return None
    return await svc.get_course(pk)


def _validated_course(payload: Any) -> CourseWrite:
    """Check the raw body field by field, then build the schema from it."""
    data = payload_object(payload)
    errors = validate_payload(data, COURSE_RULES)
    if errors:
        raise ValidationError(errors)
    return CourseWrite.model_validate(data)


@router.get("", response_model=list[CourseRead])
async def list_courses(svc: CourseService = Depends(_svc)):
    return await svc.list_courses()


@router.get("/{course_id}", response_model=CourseRead)
async def get_course(course: Optional[Course] = Depends(_load_course)):
    if course is None:
        raise NotFoundError(COURSE_NOT_FOUND)
    return course


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
async def create_course(
    payload: Any = Body(None),
    identity: AuthenticatedIdentity = Depends(get_current_user),
    svc: CourseService = Depends(_svc),
):
    body = _validated_course(payload)
    course = await svc.create_course(
        owner_id=identity.user_id,
        title=body.title,
        description=body.description,
        estimated_time=body.estimated_time,
        materials_needed=body.materials_needed,
    )
    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/api/courses/{course.id}"},
    )


@router.put("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_course(
    payload: Any = Body(None),
    identity: AuthenticatedIdentity = Depends(get_current_user),
    course: Optional[Course] = Depends(_load_course),
    svc: CourseService = Depends(_svc),
):
    course = authorize_course_change(identity, course, action="edit")
    body = _validated_course(payload)

    # title/description are always replaced; optional columns only if sent
    changes = {"title": body.title, "description": body.description}
    for field in ("estimated_time", "materials_needed"):
        if field in body.model_fields_set:
            changes[field] = getattr(body, field)
    await svc.update_course(course, changes)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_course(
    identity: AuthenticatedIdentity = Depends(get_current_user),
    course: Optional[Course] = Depends(_load_course),
    svc: CourseService = Depends(_svc),
):
    course = authorize_course_change(identity, course, action="delete")
    await svc.delete_course(course)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
