# campus_connect/api/routes/post_routes.py

from flask import Blueprint, jsonify, request

from campus_connect.api.middlewares.auth_middleware import current_identity, require_auth
from campus_connect.api.schemas.post_schema import CommentRequest, CreatePostRequest, SharePostRequest, pack_post
from campus_connect.infrastructure.database.session import db_session
from campus_connect.repositories.post_repository import PostRepository
from campus_connect.repositories.user_repository import UserRepository
from campus_connect.services.post_service import PostService

bp_posts = Blueprint("posts", __name__)


def _build_service(session) -> PostService:
    return PostService(post_repo=PostRepository(session), user_repo=UserRepository(session))


@bp_posts.get("/feed")
@require_auth
def feed():
    identity = current_identity()
    with db_session() as session:
        posts = [pack_post(v) for v in _build_service(session).feed(viewer_id=identity.id)]
    return jsonify({"posts": posts}), 200


@bp_posts.post("/", strict_slashes=False)
@require_auth
def create_post():
    identity = current_identity()
    payload = CreatePostRequest.model_validate(request.get_json(silent=True) or {})

    with db_session() as session:
        view = _build_service(session).create_post(
            author_id=identity.id,
            content=payload.content,
            image=payload.image,
        )
        body = {"post": pack_post(view)}

    return jsonify(body), 201


@bp_posts.post("/<int:post_id>/like")
@require_auth
def toggle_like(post_id: int):
    identity = current_identity()
    with db_session() as session:
        body = {"post": pack_post(_build_service(session).toggle_like(post_id=post_id, user_id=identity.id))}
    return jsonify(body), 200


@bp_posts.post("/<int:post_id>/comment")
@require_auth
def comment(post_id: int):
    identity = current_identity()
    payload = CommentRequest.model_validate(request.get_json(silent=True) or {})

    with db_session() as session:
        view = _build_service(session).add_comment(post_id=post_id, user_id=identity.id, text=payload.text)
        body = {"post": pack_post(view)}

    return jsonify(body), 200


@bp_posts.post("/<int:post_id>/share")
@require_auth
def share(post_id: int):
    identity = current_identity()
    payload = SharePostRequest.model_validate(request.get_json(silent=True) or {})

    with db_session() as session:
        view = _build_service(session).share(
            post_id=post_id,
            user_id=identity.id,
            target_user_id=payload.target_user_id,
        )
        body = {"post": pack_post(view)}

    return jsonify(body), 200
