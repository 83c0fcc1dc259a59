# campus_connect/api/routes/health_routes.py
from flask import Blueprint, jsonify
from sqlalchemy import text

from campus_connect.infrastructure.database.session import db_session

bp_health = Blueprint("health", __name__)


@bp_health.get("")
def health():
    return jsonify({"status": "ok"}), 200


@bp_health.get("/db")
def health_db():
    with db_session() as session:
        session.execute(text("select 1"))
    return jsonify({"db": "ok"}), 200
