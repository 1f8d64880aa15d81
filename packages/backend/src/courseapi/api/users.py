"""User API routes.

- GET  /users → the authenticated user's public fields
- POST /users → signup; 201 with Location: / and no body
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from courseapi.auth.dependencies import AuthenticatedIdentity, get_current_user
from courseapi.auth.password import hash_password
from courseapi.db.engine import get_db
from courseapi.errors import ValidationError
from courseapi.schemas.user import UserCreate, UserRead
from courseapi.services.user_service import DuplicateEmailError, UserService
from courseapi.validation import (
    DUPLICATE_USER,
    USER_RULES,
    payload_object,
    validate_payload,
)

router = APIRouter(prefix="/users")


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


async def register_user(svc: UserService, payload: Any):
    """Validate a signup payload and insert the user.

    Shared by POST /users and the create-user CLI command. Raises
    ValidationError with every failed rule.
    """
    data = payload_object(payload)
    email = data.get("emailAddress")
    taken = {}
    if isinstance(email, str) and email:
        taken["emailAddress"] = await svc.email_exists(email)

    errors = validate_payload(data, USER_RULES, taken=taken)
    if errors:
        raise ValidationError(errors)

    body = UserCreate.model_validate(data)
    password_hash = await run_in_threadpool(hash_password, body.password)
    try:
        return await svc.create_user(
            first_name=body.first_name,
            last_name=body.last_name,
            email_address=body.email_address,
            password_hash=password_hash,
        )
    except DuplicateEmailError:
        raise ValidationError([DUPLICATE_USER])


@router.get("", response_model=UserRead)
async def get_authenticated_user(
    identity: AuthenticatedIdentity = Depends(get_current_user),
):
    return identity.user


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
async def create_user(payload: Any = Body(None), svc: UserService = Depends(_svc)):
    await register_user(svc, payload)
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": "/"})
