"""FastAPI auth dependencies.

Learn: Used as Depends() in route handlers. get_current_user is the
gate: it either returns an AuthenticatedIdentity for the handler or raises
AuthenticationError, which the error handlers render as
401 {"message": "Access Denied"}.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from courseapi.auth.credentials import parse_basic_authorization
from courseapi.auth.verifier import verify_credentials
from courseapi.config import settings
from courseapi.db.engine import get_db
from courseapi.db.models import User
from courseapi.errors import AuthenticationError
from courseapi.services.user_service import UserService

logger = structlog.get_logger()


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """The user resolved from this request's credentials.

    Lives for one request. Handlers receive it as a parameter instead of
    reading it off the request object.
    """

    user: User

    @property
    def user_id(self) -> int:
        return self.user.id


async def get_current_user(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> AuthenticatedIdentity:
    """Authenticate the request with HTTP Basic credentials (required)."""
    credentials = parse_basic_authorization(authorization)
    if credentials is None:
        logger.warning(
            "auth.header_missing" if not authorization else "auth.header_malformed"
        )
        raise AuthenticationError(realm=settings.auth_realm)

    result = await verify_credentials(
        UserService(db), credentials.username, credentials.password
    )
    if not result.ok:
        raise AuthenticationError(realm=settings.auth_realm)

    return AuthenticatedIdentity(user=result.user)
