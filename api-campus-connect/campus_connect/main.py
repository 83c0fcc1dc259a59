# campus_connect/main.py
from __future__ import annotations

import click
from flask import Flask
from flask_cors import CORS

from campus_connect.api.middlewares.error_handler import register_error_handlers
from campus_connect.api.realtime.socket_handlers import register_socket_handlers
from campus_connect.api.routes import register_routes
from campus_connect.config.flask_config import configure_app
from campus_connect.config.settings import settings
from campus_connect.core import logger as request_logging
from campus_connect.infrastructure.database.session import create_tables
from campus_connect.infrastructure.realtime.socketio_server import socketio

import campus_connect.infrastructure.database.models  # noqa: F401


def create_app() -> Flask:
    request_logging.configure_logging(settings.log_level)

    app = Flask(__name__)

    # CORS aplicado cedo (antes das rotas lidarem com OPTIONS);
    # credenciais liberadas para o cookie do refresh
    CORS(
        app,
        resources={rf"{settings.api_prefix}/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    )

    configure_app(app)
    request_logging.init_app(app)

    register_routes(app, api_prefix=settings.api_prefix)

    register_error_handlers(app)

    socketio.init_app(app)
    register_socket_handlers()

    @app.cli.command("init-db")
    def init_db() -> None:
        """Cria as tabelas que ainda não existem."""
        create_tables()
        click.echo("Tables created.")

    return app
