# campus_connect/api/routes/auth_routes.py
import logging

from flask import Blueprint, jsonify, make_response, request
from sqlalchemy.exc import SQLAlchemyError

from campus_connect.api.middlewares.auth_middleware import current_identity, require_auth
from campus_connect.api.schemas.auth_schema import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RefreshResponse,
    SignupRequest,
)
from campus_connect.config.settings import settings
from campus_connect.core.exceptions import ForbiddenError, NoTokenError
from campus_connect.infrastructure.database.session import db_session
from campus_connect.infrastructure.security.jwt_provider import JwtProvider
from campus_connect.repositories.connection_repository import ConnectionRepository
from campus_connect.repositories.conversation_participant_repository import ConversationParticipantRepository
from campus_connect.repositories.message_repository import MessageRepository
from campus_connect.repositories.post_repository import PostRepository
from campus_connect.repositories.student_repository import StudentRepository
from campus_connect.repositories.user_repository import UserRepository
from campus_connect.services.auth_service import AuthService
from campus_connect.services.token_service import TokenService
from campus_connect.services.user_service import UserService

logger = logging.getLogger(__name__)

bp_auth = Blueprint("auth", __name__)


# -------------------------
# Cookie do refresh token
# -------------------------

def _cookie_options() -> dict:
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "None" if settings.is_production else "Lax",
        "path": "/",
    }


def _set_refresh_cookie(response, refresh_token: str) -> None:
    response.set_cookie(
        settings.refresh_cookie_name,
        refresh_token,
        max_age=settings.jwt_refresh_minutes * 60,
        **_cookie_options(),
    )


def _clear_refresh_cookie(response) -> None:
    response.delete_cookie(settings.refresh_cookie_name, **_cookie_options())


def _build_service(session) -> AuthService:
    user_repo = UserRepository(session)
    return AuthService(
        user_repo=user_repo,
        student_repo=StudentRepository(session),
        token_service=TokenService(jwt_provider=JwtProvider(), user_repo=user_repo),
    )


# -------------------------
# Rotas
# -------------------------

@bp_auth.post("/signup")
def signup():
    payload = SignupRequest.model_validate(request.get_json(silent=True) or {})

    with db_session() as session:
        _build_service(session).signup(name=payload.name, email=payload.email, password=payload.password)

    return jsonify(MessageResponse(message="User registered successfully").model_dump()), 200


@bp_auth.post("/login")
def login():
    payload = LoginRequest.model_validate(request.get_json(silent=True) or {})

    # o cookie só é emitido depois do commit do hash do refresh
    with db_session() as session:
        user, tokens = _build_service(session).login(email=payload.email, password=payload.password)
        user_id = user.id

    logger.info("login successful", extra={"user_id": user_id})

    body = LoginResponse(access_token=tokens.access_token).model_dump(by_alias=True)
    response = make_response(jsonify(body), 200)
    _set_refresh_cookie(response, tokens.refresh_token)
    return response


@bp_auth.post("/refresh")
def refresh():
    token = request.cookies.get(settings.refresh_cookie_name)
    if not token:
        raise NoTokenError("No refresh token")

    try:
        with db_session() as session:
            result = _build_service(session).refresh(refresh_token=token)
    except ForbiddenError as err:
        # refresh inválido, expirado ou substituído: o cookie não serve mais
        logger.info("refresh rejected: %s", err.code)
        response = make_response(jsonify({"error": str(err), "code": err.code}), err.status_code)
        _clear_refresh_cookie(response)
        return response

    response = make_response(jsonify(RefreshResponse(access_token=result.access_token).model_dump(by_alias=True)), 200)
    if result.refresh_token:
        _set_refresh_cookie(response, result.refresh_token)
    return response


@bp_auth.post("/logout")
def logout():
    token = request.cookies.get(settings.refresh_cookie_name)

    try:
        with db_session() as session:
            _build_service(session).logout(refresh_token=token)
    except SQLAlchemyError:
        # melhor esforço: o cookie é limpo mesmo se o banco falhar
        logger.warning("logout: failed to clear stored refresh token", exc_info=True)

    response = make_response(jsonify(MessageResponse(message="Logged out").model_dump()), 200)
    _clear_refresh_cookie(response)
    return response


@bp_auth.delete("/delete-account")
@require_auth
def delete_account():
    identity = current_identity()

    with db_session() as session:
        UserService(
            user_repo=UserRepository(session),
            student_repo=StudentRepository(session),
            connection_repo=ConnectionRepository(session),
            post_repo=PostRepository(session),
            participant_repo=ConversationParticipantRepository(session),
            message_repo=MessageRepository(session),
        ).delete_account(user_id=identity.id)

    response = make_response(jsonify(MessageResponse(message="Account deleted successfully").model_dump()), 200)
    _clear_refresh_cookie(response)
    return response
