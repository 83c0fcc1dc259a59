# campus_connect/api/middlewares/error_handler.py
import logging

from flask import Flask, jsonify
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from campus_connect.config.settings import settings
from campus_connect.core.exceptions import AppError, DatabaseError

logger = logging.getLogger(__name__)


def _error(message: str, code: str, status_code: int):
    return jsonify({"error": message, "code": code}), status_code


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        if err.status_code >= 500:
            logger.error("%s: %s", err.code, err, extra={"status_code": err.status_code})
        return _error(str(err), err.code, err.status_code)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        first = err.errors()[0] if err.error_count() else {}
        field = ".".join(str(p) for p in first.get("loc", ()))
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg", "Invalid payload"))
        return _error(message, "ValidationError", 400)

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return _error(err.description or err.name, err.name.replace(" ", ""), err.code or 500)

    @app.errorhandler(SQLAlchemyError)
    def handle_database_error(err: SQLAlchemyError):
        logger.exception("database error")
        db_err = DatabaseError()
        return _error(str(db_err), db_err.code, db_err.status_code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        logger.exception("unhandled error")

        if settings.debug:
            return _error(str(err), "InternalServerError", 500)

        return _error("Internal server error", "InternalServerError", 500)
