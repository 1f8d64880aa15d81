"""Payload validation for signup and course writes.

validate_payload is pure: it takes the raw JSON object, an ordered rule
table, and (for unique fields) the caller's answer to "is this value already
taken?". Every field is checked; messages come back in table order, at most
one per field (required, then type, then email format, then uniqueness).

Routes run this on the raw body, before any pydantic schema, so a wrong-typed
field gets its own message instead of hiding the other fields' problems.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from email_validator import EmailNotValidError, validate_email

from courseapi.errors import ValidationError

DUPLICATE_USER = "Sorry, this user already exists"
INVALID_EMAIL = "Please provide a valid email."
NOT_AN_OBJECT = "Please provide a JSON object."


@dataclass(frozen=True)
class FieldRule:
    name: str
    required: bool = True
    email: bool = False
    unique: bool = False


COURSE_RULES: tuple[FieldRule, ...] = (
    FieldRule("title"),
    FieldRule("description"),
    FieldRule("estimatedTime", required=False),
    FieldRule("materialsNeeded", required=False),
)

USER_RULES: tuple[FieldRule, ...] = (
    FieldRule("firstName"),
    FieldRule("lastName"),
    FieldRule("emailAddress", email=True, unique=True),
    FieldRule("password"),
)


def missing_value_message(field: str) -> str:
    return f'Please provide a value for "{field}".'


def wrong_type_message(field: str) -> str:
    return f'Please provide text for "{field}".'


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def is_well_formed_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def payload_object(payload: Any) -> dict:
    """Return the request body as a dict; no body counts as an empty object."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError([NOT_AN_OBJECT])
    return payload


def validate_payload(
    payload: Mapping[str, Any],
    rules: Sequence[FieldRule],
    taken: Optional[Mapping[str, bool]] = None,
) -> list[str]:
    """Check `payload` against `rules`. An empty list means valid."""
    taken = taken or {}
    errors = []

    for rule in rules:
        value = payload.get(rule.name)

        if is_blank(value):
            if rule.required:
                errors.append(missing_value_message(rule.name))
            continue

        if not isinstance(value, str):
            errors.append(wrong_type_message(rule.name))
        elif rule.email and not is_well_formed_email(value):
            errors.append(INVALID_EMAIL)
        elif rule.unique and taken.get(rule.name):
            errors.append(DUPLICATE_USER)

    return errors
