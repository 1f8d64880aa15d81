"""Signup tests: POST /api/users.

Pattern: test_<verb>_<noun>_<scenario>
"""

import pytest

from conftest import basic_auth
from courseapi.services.user_service import DuplicateEmailError, UserService


def _user(**overrides):
    body = {
        "firstName": "Grace",
        "lastName": "Hopper",
        "emailAddress": "grace@mail.com",
        "password": "cobol-4-ever",
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_create_user(client):
    r = await client.post("/api/users", json=_user())
    assert r.status_code == 201
    assert r.headers["Location"] == "/"
    assert r.content == b""


@pytest.mark.asyncio
async def test_create_user_stores_hash_not_password(client, db_session):
    await client.post("/api/users", json=_user())
    user = await UserService(db_session).find_user_by_email("grace@mail.com")
    assert user is not None
    assert user.password != "cobol-4-ever"
    assert user.password.startswith("$2")


@pytest.mark.asyncio
async def test_create_user_empty_body_lists_every_field(client):
    r = await client.post("/api/users", json={})
    assert r.status_code == 400
    assert r.json() == {
        "errors": [
            'Please provide a value for "firstName".',
            'Please provide a value for "lastName".',
            'Please provide a value for "emailAddress".',
            'Please provide a value for "password".',
        ]
    }


@pytest.mark.asyncio
async def test_create_user_invalid_email(client):
    r = await client.post("/api/users", json=_user(emailAddress="not-an-email"))
    assert r.status_code == 400
    assert r.json() == {"errors": ["Please provide a valid email."]}


@pytest.mark.asyncio
async def test_create_user_blank_strings_are_missing(client):
    r = await client.post("/api/users", json=_user(firstName="   ", password=""))
    assert r.status_code == 400
    assert r.json()["errors"] == [
        'Please provide a value for "firstName".',
        'Please provide a value for "password".',
    ]


@pytest.mark.asyncio
async def test_create_user_duplicate_email(client):
    r1 = await client.post("/api/users", json=_user())
    assert r1.status_code == 201

    # other fields differ, even in case; the email alone decides
    r2 = await client.post(
        "/api/users",
        json=_user(firstName="GRACE", lastName="hopper", password="different"),
    )
    assert r2.status_code == 400
    assert r2.json() == {"errors": ["Sorry, this user already exists"]}


@pytest.mark.asyncio
async def test_create_user_duplicate_alongside_other_errors(client):
    await client.post("/api/users", json=_user())
    r = await client.post("/api/users", json=_user(firstName=None, password=None))
    assert r.status_code == 400
    assert r.json()["errors"] == [
        'Please provide a value for "firstName".',
        "Sorry, this user already exists",
        'Please provide a value for "password".',
    ]


@pytest.mark.asyncio
async def test_create_user_wrong_type_is_400(client):
    r = await client.post("/api/users", json=_user(firstName=["not", "a", "string"]))
    assert r.status_code == 400
    assert r.json() == {"errors": ['Please provide text for "firstName".']}


@pytest.mark.asyncio
async def test_create_user_wrong_type_alongside_missing_field(client):
    body = _user(firstName=42)
    del body["lastName"]
    r = await client.post("/api/users", json=body)
    assert r.status_code == 400
    assert r.json() == {
        "errors": [
            'Please provide text for "firstName".',
            'Please provide a value for "lastName".',
        ]
    }


@pytest.mark.asyncio
async def test_create_user_body_must_be_object(client):
    r = await client.post("/api/users", json="grace@mail.com")
    assert r.status_code == 400
    assert r.json() == {"errors": ["Please provide a JSON object."]}


@pytest.mark.asyncio
async def test_create_user_then_authenticate(client):
    await client.post("/api/users", json=_user())
    r = await client.get("/api/users", headers=basic_auth("grace@mail.com", "cobol-4-ever"))
    assert r.status_code == 200
    assert r.json()["firstName"] == "Grace"


@pytest.mark.asyncio
async def test_unique_index_backs_up_validation(db_session):
    """A second insert that slipped past validation still fails cleanly."""
    svc = UserService(db_session)
    await svc.create_user("A", "One", "race@mail.com", "$2b$04$hash")
    with pytest.raises(DuplicateEmailError):
        await svc.create_user("B", "Two", "race@mail.com", "$2b$04$hash")
    assert await svc.email_exists("race@mail.com")
