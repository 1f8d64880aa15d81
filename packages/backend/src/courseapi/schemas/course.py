"""Pydantic schemas for courses."""

from typing import Optional

from pydantic import BaseModel

from courseapi.schemas.user import UserRead, camel_config


class CourseWrite(BaseModel):
    """Body of POST /courses and PUT /courses/{id}.

    Owner is never taken from the body; it comes from the authenticated user.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    estimated_time: Optional[str] = None
    materials_needed: Optional[str] = None

    model_config = camel_config


class CourseRead(BaseModel):
    id: int
    title: str
    description: str
    estimated_time: Optional[str] = None
    materials_needed: Optional[str] = None
    user_id: int
    user: UserRead

    model_config = camel_config
