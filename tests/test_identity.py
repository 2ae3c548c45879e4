from __future__ import annotations

import re

import pytest

from ringledger.errors import AuthorizationError
from ringledger.services import identity

COOKIE = "ringledger_owner_key"


def test_generate_key_is_32_hex_chars():
    key = identity.generate_key()

    assert re.fullmatch(r"[0-9a-f]{32}", key)
    assert identity.generate_key() != key


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  abcdefgh  ", "abcdefgh"),
        ("a" * 64, "a" * 64),
        ("a" * 7, None),
        ("a" * 65, None),
        ("", None),
        (None, None),
        (12345678, None),
    ],
)
def test_normalize_key(raw, expected):
    assert identity.normalize_key(raw) == expected


def test_get_or_create_key_is_idempotent():
    store: dict = {}

    first = identity.get_or_create_key(store)
    second = identity.get_or_create_key(store)

    assert first == second
    assert store[identity.STORE_FIELD] == first


def test_get_or_create_key_replaces_malformed_value():
    store = {"custom": "bad"}

    key = identity.get_or_create_key(store, "custom")

    assert key != "bad"
    assert len(key) == 32
    assert store["custom"] == key


def test_peek_key_never_writes():
    store: dict = {}

    assert identity.peek_key(store) is None
    assert store == {}


def test_owner_context_from_header():
    assert identity.OwnerContext.from_header(" owner-key-1 ").owner_key == "owner-key-1"
    with pytest.raises(AuthorizationError):
        identity.OwnerContext.from_header(None)
    with pytest.raises(AuthorizationError):
        identity.OwnerContext.from_header("tiny")


def test_identity_route_issues_cookie(client):
    response = client.get("/api/identity")

    assert response.status_code == 200
    key = response.get_json()["userKey"]
    assert re.fullmatch(r"[0-9a-f]{32}", key)

    set_cookie = response.headers["Set-Cookie"]
    assert f"{COOKIE}={key}" in set_cookie
    assert "HttpOnly" in set_cookie
    assert "SameSite=Lax" in set_cookie
    assert "Path=/" in set_cookie
    assert "Max-Age=157680000" in set_cookie
    # Dev mode keeps plain-HTTP local servers working.
    assert "Secure" not in set_cookie


def test_identity_route_is_stable_for_existing_cookie(client):
    first = client.get("/api/identity").get_json()["userKey"]

    response = client.get("/api/identity")

    assert response.get_json()["userKey"] == first
    assert "Set-Cookie" not in response.headers


def test_identity_route_replaces_malformed_cookie(client):
    client.set_cookie(COOKIE, "x")

    response = client.get("/api/identity")

    key = response.get_json()["userKey"]
    assert key != "x"
    assert len(key) == 32
    assert f"{COOKIE}={key}" in response.headers["Set-Cookie"]


def test_identity_peek_does_not_issue(client):
    response = client.get("/api/identity?peek=1")

    assert response.status_code == 200
    assert response.get_json() == {"userKey": None}
    assert "Set-Cookie" not in response.headers

    issued = client.get("/api/identity").get_json()["userKey"]
    assert client.get("/api/identity?peek=1").get_json() == {"userKey": issued}


def test_issued_key_authorizes_ledger_calls(client):
    key = client.get("/api/identity").get_json()["userKey"]

    response = client.get("/api/transactions", headers={"X-User-Key": key})

    assert response.status_code == 200
    assert response.get_json() == []
