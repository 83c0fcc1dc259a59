# campus_connect/api/routes/profile_routes.py

from flask import Blueprint, jsonify, request

from campus_connect.api.middlewares.auth_middleware import current_identity, require_auth
from campus_connect.api.schemas.auth_schema import MessageResponse
from campus_connect.api.schemas.user_schema import (
    MeResponse,
    ProfileResponse,
    UpdateProfileRequest,
    UserMiniResponse,
    UserSearchResult,
)
from campus_connect.infrastructure.database.session import db_session
from campus_connect.repositories.connection_repository import ConnectionRepository
from campus_connect.repositories.student_repository import StudentRepository
from campus_connect.repositories.user_repository import UserRepository
from campus_connect.services.connection_service import ConnectionService
from campus_connect.services.user_service import UserService

bp_profile = Blueprint("profile", __name__)


def _user_service(session) -> UserService:
    return UserService(
        user_repo=UserRepository(session),
        student_repo=StudentRepository(session),
        connection_repo=ConnectionRepository(session),
    )


def _connection_service(session) -> ConnectionService:
    return ConnectionService(connection_repo=ConnectionRepository(session), user_repo=UserRepository(session))


@bp_profile.get("/me")
@require_auth
def me():
    identity = current_identity()
    with db_session() as session:
        body = MeResponse.from_view(_user_service(session).me(user_id=identity.id)).model_dump()
    return jsonify(body), 200


@bp_profile.get("/search")
@require_auth
def search():
    with db_session() as session:
        users = _user_service(session).search(query=request.args.get("query"))
        results = [UserSearchResult(id=u.id, name=u.name, email=u.email).model_dump() for u in users]
    return jsonify({"results": results}), 200


@bp_profile.get("/profile/<int:user_id>")
@require_auth
def get_profile(user_id: int):
    identity = current_identity()
    with db_session() as session:
        view = _user_service(session).get_profile(viewer_id=identity.id, user_id=user_id)
        body = ProfileResponse.from_view(view).model_dump()
    return jsonify(body), 200


@bp_profile.put("/profile")
@require_auth
def update_profile():
    identity = current_identity()
    payload = UpdateProfileRequest.model_validate(request.get_json(silent=True) or {})

    with db_session() as session:
        _user_service(session).update_profile(user_id=identity.id, values=payload.model_dump(exclude_unset=True))

    return jsonify(MessageResponse(message="Profile updated successfully").model_dump()), 200


@bp_profile.post("/connect/<int:user_id>")
@require_auth
def connect(user_id: int):
    identity = current_identity()
    with db_session() as session:
        _connection_service(session).connect(user_id=identity.id, target_id=user_id)
    return jsonify(MessageResponse(message="Connected successfully").model_dump()), 200


@bp_profile.get("/connections/count")
@require_auth
def connections_count():
    identity = current_identity()
    with db_session() as session:
        count = _connection_service(session).count(user_id=identity.id)
    return jsonify({"count": count}), 200


@bp_profile.get("/connections/list")
@require_auth
def connections_list():
    identity = current_identity()
    with db_session() as session:
        users = _connection_service(session).list_connections(user_id=identity.id)
        connections = [UserMiniResponse.from_model(u).model_dump() for u in users]
    return jsonify({"connections": connections}), 200
