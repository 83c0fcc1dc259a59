import pytest

from campus_connect.config.settings import settings
from tests.factories import PostFactory
from tests.helpers import bearer, login, make_user


@pytest.fixture
def author(client):
    user = make_user(name="Author")
    return user, bearer(login(client, user.email))


def _create(client, headers, **body):
    return client.post("/api/posts/", json=body, headers=headers)


def test_create_post(client, author):
    user, headers = author

    res = _create(client, headers, content="  Hello campus  ")

    assert res.status_code == 201
    post = res.get_json()["post"]
    assert post["content"] == "Hello campus"
    assert post["author"]["id"] == user.id
    assert post["likesCount"] == 0
    assert post["isLiked"] is False
    assert post["comments"] == []
    assert post["commentsCount"] == 0
    assert post["sharesCount"] == 0
    assert post["image"] is None
    assert post["createdAt"].endswith("+00:00")


@pytest.mark.parametrize("body", [{}, {"content": ""}, {"content": "   "}])
def test_create_post_requires_content(client, author, body):
    _, headers = author

    res = _create(client, headers, **body)

    assert res.status_code == 400
    assert res.get_json()["error"] == "Post content is required"


def test_create_post_rejects_oversized_image(client, author, monkeypatch):
    _, headers = author
    monkeypatch.setattr(settings, "max_post_image_chars", 10)

    assert _create(client, headers, content="x", image="data:image/png;base64,AAAA").status_code == 400
    assert _create(client, headers, content="x", image="data:,A").status_code == 201


def test_create_post_content_length_limit(client, author):
    user, headers = author

    res = _create(client, headers, content="x" * 2001)
    assert res.status_code == 400
    assert res.get_json()["error"] == "Post content cannot exceed 2000 characters"

    assert _create(client, headers, content="x" * 2000).status_code == 201
    posts = client.get("/api/posts/feed", headers=headers).get_json()["posts"]
    assert [len(p["content"]) for p in posts] == [2000]


def test_create_post_without_trailing_slash(client, author):
    _, headers = author

    res = client.post("/api/posts", json={"content": "no slash"}, headers=headers)

    assert res.status_code == 201
    assert res.get_json()["post"]["content"] == "no slash"


def test_feed_is_newest_first_and_capped(client, author):
    user, headers = author
    for i in range(52):
        PostFactory(author_id=user.id, content=f"post {i}")

    posts = client.get("/api/posts/feed", headers=headers).get_json()["posts"]

    assert len(posts) == 50
    assert posts[0]["content"] == "post 51"


def test_like_toggles(client, author):
    user, headers = author
    post = PostFactory(author_id=user.id)

    liked = client.post(f"/api/posts/{post.id}/like", headers=headers).get_json()["post"]
    assert (liked["likesCount"], liked["isLiked"]) == (1, True)

    unliked = client.post(f"/api/posts/{post.id}/like", headers=headers).get_json()["post"]
    assert (unliked["likesCount"], unliked["isLiked"]) == (0, False)


def test_like_is_per_viewer(client, author):
    user, headers = author
    other = make_user()
    post = PostFactory(author_id=user.id)
    client.post(f"/api/posts/{post.id}/like", headers=headers)

    seen = client.get("/api/posts/feed", headers=bearer(login(client, other.email))).get_json()["posts"][0]

    assert seen["likesCount"] == 1
    assert seen["isLiked"] is False


def test_comment(client, author):
    user, headers = author
    post = PostFactory(author_id=user.id)

    res = client.post(f"/api/posts/{post.id}/comment", json={"text": " nice "}, headers=headers)

    assert res.status_code == 200
    body = res.get_json()["post"]
    assert body["commentsCount"] == 1
    assert body["comments"][0]["text"] == "nice"
    assert body["comments"][0]["user"]["id"] == user.id

    assert client.post(f"/api/posts/{post.id}/comment", json={"text": ""}, headers=headers).status_code == 400


def test_comment_length_limit(client, author):
    user, headers = author
    post = PostFactory(author_id=user.id)

    res = client.post(f"/api/posts/{post.id}/comment", json={"text": "y" * 1001}, headers=headers)
    assert res.status_code == 400
    assert res.get_json()["error"] == "Comment cannot exceed 1000 characters"

    res = client.post(f"/api/posts/{post.id}/comment", json={"text": "y" * 1000}, headers=headers)
    assert res.status_code == 200
    assert res.get_json()["post"]["commentsCount"] == 1


def test_share_counts_distinct_targets(client, author):
    user, headers = author
    a = make_user()
    b = make_user()
    post = PostFactory(author_id=user.id)

    for target in (a.id, a.id, b.id):
        res = client.post(f"/api/posts/{post.id}/share", json={"targetUserId": target}, headers=headers)
        assert res.status_code == 200

    assert res.get_json()["post"]["sharesCount"] == 2


def test_share_without_target_keeps_count(client, author):
    user, headers = author
    post = PostFactory(author_id=user.id)

    res = client.post(f"/api/posts/{post.id}/share", json={}, headers=headers)

    assert res.get_json()["post"]["sharesCount"] == 0


def test_share_with_unknown_user(client, author):
    user, headers = author
    post = PostFactory(author_id=user.id)

    res = client.post(f"/api/posts/{post.id}/share", json={"targetUserId": 9999}, headers=headers)

    assert res.status_code == 400


@pytest.mark.parametrize("action", ["like", "comment", "share"])
def test_unknown_post(client, author, action):
    _, headers = author

    res = client.post(f"/api/posts/9999/{action}", json={"text": "hi"}, headers=headers)

    assert res.status_code == 404
    assert res.get_json()["error"] == "Post not found"


def test_posts_require_token(client):
    assert client.get("/api/posts/feed").status_code == 401
