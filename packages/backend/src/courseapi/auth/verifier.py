"""Credential verification against stored users.

The two failure outcomes are kept apart for the audit log only; the gate in
dependencies.py turns both into the same 401.
"""

import enum
from dataclasses import dataclass
from typing import Optional

import structlog
from starlette.concurrency import run_in_threadpool

from courseapi.auth.password import dummy_hash, verify_password
from courseapi.db.models import User
from courseapi.services.user_service import UserService

logger = structlog.get_logger()


class Outcome(str, enum.Enum):
    VERIFIED = "verified"
    UNKNOWN_USER = "unknown_user"
    PASSWORD_MISMATCH = "password_mismatch"


@dataclass(frozen=True)
class VerificationResult:
    outcome: Outcome
    user: Optional[User] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.VERIFIED


async def verify_credentials(
    users: UserService, email: str, password: str
) -> VerificationResult:
    """Look up the user by email and check the password.

    bcrypt runs in the threadpool. An unknown email still pays for one
    bcrypt comparison so response timing doesn't reveal which emails exist.
    """
    user = await users.find_user_by_email(email)

    if user is None:
        await run_in_threadpool(verify_password, password, dummy_hash())
        logger.warning("auth.unknown_user", email=email)
        return VerificationResult(Outcome.UNKNOWN_USER)

    if not await run_in_threadpool(verify_password, password, user.password):
        logger.warning("auth.password_mismatch", email=user.email_address)
        return VerificationResult(Outcome.PASSWORD_MISMATCH)

    logger.info("auth.succeeded", email=user.email_address, user_id=user.id)
    return VerificationResult(Outcome.VERIFIED, user)
