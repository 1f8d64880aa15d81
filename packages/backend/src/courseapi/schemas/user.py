"""Pydantic schemas for users.

Wire format is camelCase (firstName, emailAddress); Python attributes are
snake_case. Request schemas are built only after validation.validate_payload has
checked the raw body, so every field problem comes back as a readable
message instead of a schema error.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

camel_config = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


class UserCreate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email_address: Optional[str] = None
    password: Optional[str] = None

    model_config = camel_config


class UserRead(BaseModel):
    """Public user fields. The password hash is never serialized."""

    id: int
    first_name: str
    last_name: str
    email_address: str

    model_config = camel_config
