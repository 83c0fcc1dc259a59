"""Small request helpers shared by the API tests."""

from __future__ import annotations

from campus_connect.config.settings import settings
from tests.factories import DEFAULT_PASSWORD, StudentFactory, UserFactory


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def make_user(**kwargs):
    """Registered user plus the matching roster row."""
    user = UserFactory(**kwargs)
    StudentFactory(email=user.email, name=user.name)
    return user


def login(client, email: str, password: str = DEFAULT_PASSWORD) -> str:
    res = client.post("/api/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.get_json()
    return res.get_json()["accessToken"]


def refresh_cookie(client):
    return client.get_cookie(settings.refresh_cookie_name)
