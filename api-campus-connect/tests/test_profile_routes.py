import pytest

from campus_connect.services.user_service import extract_year_from_email
from tests.factories import StudentFactory, UserFactory
from tests.helpers import bearer, login, make_user


@pytest.fixture
def me(client):
    user = make_user(name="Asha Verma", email="asha.2024@rishihood.edu.in")
    return user, bearer(login(client, user.email))


@pytest.mark.parametrize(
    "email, expected",
    [
        ("asha.2024@rishihood.edu.in", "2024"),
        ("ravi23@rishihood.edu.in", "2023"),
        ("x2021y.5@rishihood.edu.in", "2021"),
        ("nodigits@rishihood.edu.in", None),
        (None, None),
    ],
)
def test_extract_year_from_email(email, expected):
    assert extract_year_from_email(email) == expected


def test_me_returns_sanitized_user_with_roster_meta(client, me):
    user, headers = me

    res = client.get("/api/auth/me", headers=headers)

    assert res.status_code == 200
    body = res.get_json()
    assert body["id"] == user.id
    assert body["email"] == "asha.2024@rishihood.edu.in"
    assert body["department"] == "Computer Science"
    assert body["year"] == "2024"
    assert body["connections_count"] == 0
    assert body["bio"] == ""
    assert body["profile_photo"] is None
    for secret in ("password_hash", "password_salt", "refresh_token_hash"):
        assert secret not in body


def test_me_falls_back_to_year_in_email(client):
    user = UserFactory(email="kiran22@rishihood.edu.in")
    StudentFactory(email=user.email, department=None, year=None)

    body = client.get("/api/auth/me", headers=bearer(login(client, user.email))).get_json()

    assert body["department"] == "Not available"
    assert body["year"] == "2022"


def test_search_matches_name_or_email_case_insensitively(client, me):
    _, headers = me
    UserFactory(name="Bhavna Rao", email="bhavna@rishihood.edu.in")
    UserFactory(name="Chetan", email="chetan.rao@rishihood.edu.in")
    UserFactory(name="Dev", email="dev@rishihood.edu.in")

    res = client.get("/api/auth/search", query_string={"query": "RAO"}, headers=headers)

    assert res.status_code == 200
    results = res.get_json()["results"]
    assert [r["name"] for r in results] == ["Bhavna Rao", "Chetan"]
    assert set(results[0]) == {"id", "name", "email"}


def test_search_with_empty_query_returns_nothing(client, me):
    _, headers = me

    assert client.get("/api/auth/search", query_string={"query": "  "}, headers=headers).get_json() == {"results": []}
    assert client.get("/api/auth/search", headers=headers).get_json() == {"results": []}


def test_search_is_limited_to_ten(client, me):
    _, headers = me
    for i in range(12):
        UserFactory(name=f"Zed {i:02d}")

    assert len(client.get("/api/auth/search", query_string={"query": "zed"}, headers=headers).get_json()["results"]) == 10


def test_search_treats_wildcards_literally(client, me):
    _, headers = me
    UserFactory(name="Percent")

    assert client.get("/api/auth/search", query_string={"query": "%"}, headers=headers).get_json() == {"results": []}


def test_view_other_profile(client, me):
    user, headers = me
    other = make_user(name="Other")

    body = client.get(f"/api/auth/profile/{other.id}", headers=headers).get_json()
    assert body["is_connected"] is False
    assert body["is_own_profile"] is False

    client.post(f"/api/auth/connect/{other.id}", headers=headers)

    body = client.get(f"/api/auth/profile/{other.id}", headers=headers).get_json()
    assert body["is_connected"] is True
    assert body["connections_count"] == 1

    own = client.get(f"/api/auth/profile/{user.id}", headers=headers).get_json()
    assert own["is_own_profile"] is True


def test_view_unknown_profile(client, me):
    _, headers = me

    res = client.get("/api/auth/profile/9999", headers=headers)

    assert res.status_code == 404
    assert res.get_json()["code"] == "UserNotFound"


def test_update_profile(client, me):
    _, headers = me

    res = client.put(
        "/api/auth/profile",
        json={"bio": "Hello", "github_link": "https://github.com/asha", "password_hash": "nope"},
        headers=headers,
    )

    assert res.status_code == 200
    assert res.get_json() == {"message": "Profile updated successfully"}
    body = client.get("/api/auth/me", headers=headers).get_json()
    assert body["bio"] == "Hello"
    assert body["github_link"] == "https://github.com/asha"


def test_update_profile_without_known_fields(client, me):
    _, headers = me

    res = client.put("/api/auth/profile", json={"role": "admin"}, headers=headers)

    assert res.status_code == 400
    assert res.get_json()["error"] == "No fields to update"


def test_update_profile_rejects_blank_name(client, me):
    _, headers = me

    assert client.put("/api/auth/profile", json={"name": "  "}, headers=headers).status_code == 400


def test_connect_rules(client, me):
    user, headers = me
    other = make_user()

    assert client.post(f"/api/auth/connect/{user.id}", headers=headers).status_code == 400
    assert client.post("/api/auth/connect/9999", headers=headers).status_code == 404

    res = client.post(f"/api/auth/connect/{other.id}", headers=headers)
    assert res.status_code == 200
    assert res.get_json() == {"message": "Connected successfully"}

    assert client.post(f"/api/auth/connect/{other.id}", headers=headers).status_code == 409

    # a aresta é não-direcionada
    other_headers = bearer(login(client, other.email))
    assert client.post(f"/api/auth/connect/{user.id}", headers=other_headers).status_code == 409


def test_connections_count_and_list(client, me):
    _, headers = me
    a = make_user(name="Anil")
    b = make_user(name="Bela")
    client.post(f"/api/auth/connect/{a.id}", headers=headers)
    client.post(f"/api/auth/connect/{b.id}", headers=headers)

    assert client.get("/api/auth/connections/count", headers=headers).get_json() == {"count": 2}

    connections = client.get("/api/auth/connections/list", headers=headers).get_json()["connections"]
    assert [c["name"] for c in connections] == ["Anil", "Bela"]
    assert set(connections[0]) == {"id", "name", "email", "profile_photo"}


def test_profile_routes_require_token(client):
    for path in ("/api/auth/me", "/api/auth/search", "/api/auth/connections/count", "/api/auth/connections/list"):
        assert client.get(path).status_code == 401
