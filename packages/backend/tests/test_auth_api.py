"""Basic auth gate tests.

Tests cover:
1. Missing / malformed / wrong-scheme headers → 401 Access Denied
2. Unknown email and wrong password are indistinguishable
3. Valid credentials → GET /api/users returns the caller
"""

import base64

import pytest

from conftest import basic_auth

ACCESS_DENIED = {"message": "Access Denied"}


# ═══════════════════════════════════════════════════════════
# Rejections
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_protected_route_without_header(client):
    r = await client.get("/api/users")
    assert r.status_code == 401
    assert r.json() == ACCESS_DENIED
    assert r.headers["WWW-Authenticate"].startswith("Basic realm=")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "header",
    [
        "Bearer some.jwt.token",
        "Basic",
        "Basic !!!not-base64!!!",
        "Basic " + base64.b64encode(b"no-colon-here").decode(),
        "Basic " + base64.b64encode(b"\xff\xfe:\xff").decode(),
    ],
)
async def test_malformed_headers_rejected(client, alice, header):
    r = await client.get("/api/users", headers={"Authorization": header})
    assert r.status_code == 401
    assert r.json() == ACCESS_DENIED


@pytest.mark.asyncio
async def test_every_write_route_requires_auth(client):
    """POST/PUT/DELETE on courses all sit behind the gate."""
    body = {"title": "T", "description": "D"}
    responses = [
        await client.post("/api/courses", json=body),
        await client.put("/api/courses/1", json=body),
        await client.delete("/api/courses/1"),
    ]
    for r in responses:
        assert r.status_code == 401
        assert r.json() == ACCESS_DENIED


@pytest.mark.asyncio
async def test_unknown_email_and_wrong_password_look_the_same(client, alice):
    """No user enumeration: both failures give the same status, body, headers."""
    unknown = await client.get(
        "/api/users", headers=basic_auth("nobody@mail.com", alice["password"])
    )
    wrong = await client.get(
        "/api/users", headers=basic_auth(alice["emailAddress"], "wrong-password")
    )
    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == ACCESS_DENIED
    assert unknown.headers["WWW-Authenticate"] == wrong.headers["WWW-Authenticate"]


@pytest.mark.asyncio
async def test_email_match_is_case_sensitive(client, alice):
    r = await client.get(
        "/api/users", headers=basic_auth("ALICE@mail.com", alice["password"])
    )
    assert r.status_code == 401


# ═══════════════════════════════════════════════════════════
# Success
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_get_current_user(client, alice, bob):
    """GET /api/users returns only the caller, without the password."""
    r = await client.get("/api/users", headers=alice["headers"])
    assert r.status_code == 200
    user = r.json()
    assert user["emailAddress"] == "alice@mail.com"
    assert user["firstName"] == "Alice"
    assert user["lastName"] == "Liddell"
    assert isinstance(user["id"], int)
    assert "password" not in user
    assert set(user) == {"id", "firstName", "lastName", "emailAddress"}


@pytest.mark.asyncio
async def test_lowercase_scheme_accepted(client, alice):
    header = basic_auth(alice["emailAddress"], alice["password"])["Authorization"]
    r = await client.get(
        "/api/users", headers={"Authorization": header.replace("Basic", "basic", 1)}
    )
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_password_with_colon(client):
    """Only the first colon separates email from password."""
    await client.post(
        "/api/users",
        json={
            "firstName": "Colin",
            "lastName": "Colon",
            "emailAddress": "colin@mail.com",
            "password": "a:b:c",
        },
    )
    r = await client.get("/api/users", headers=basic_auth("colin@mail.com", "a:b:c"))
    assert r.status_code == 200
