"""Course service: business logic for the course catalog.

Ownership is not checked here; routes call auth.ownership first and only
hand authorized courses to update_course / delete_course.
"""

from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from courseapi.db.models import Course

logger = structlog.get_logger()


class CourseService:
    """Persistence operations for courses."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_courses(self) -> list[Course]:
        result = await self.db.execute(
            select(Course).options(selectinload(Course.user)).order_by(Course.id)
        )
        return list(result.scalars().all())

    async def get_course(self, course_id: int) -> Optional[Course]:
        """Fetch one course with its owner loaded, or None."""
        result = await self.db.execute(
            select(Course)
            .where(Course.id == course_id)
            .options(selectinload(Course.user))
        )
        return result.scalars().first()

    async def create_course(
        self,
        owner_id: int,
        title: str,
        description: str,
        estimated_time: Optional[str] = None,
        materials_needed: Optional[str] = None,
    ) -> Course:
        course = Course(
            user_id=owner_id,
            title=title,
            description=description,
            estimated_time=estimated_time,
            materials_needed=materials_needed,
        )
        self.db.add(course)
        await self.db.commit()
        await self.db.refresh(course)

        logger.info("course.created", course_id=course.id, owner_id=owner_id)
        return course

    async def update_course(self, course: Course, changes: dict) -> Course:
        """Apply column changes. The owner (user_id) is never changed here."""
        for field in ("title", "description", "estimated_time", "materials_needed"):
            if field in changes:
                setattr(course, field, changes[field])
        await self.db.commit()

        logger.info("course.updated", course_id=course.id, fields=sorted(changes))
        return course

    async def delete_course(self, course: Course) -> None:
        course_id = course.id
        await self.db.delete(course)
        await self.db.commit()
        logger.info("course.deleted", course_id=course_id)
