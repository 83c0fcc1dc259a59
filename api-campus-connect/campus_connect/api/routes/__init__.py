# campus_connect/api/routes/__init__.py

from flask import Flask

from campus_connect.api.routes.auth_routes import bp_auth
from campus_connect.api.routes.chat_routes import bp_chat
from campus_connect.api.routes.health_routes import bp_health
from campus_connect.api.routes.post_routes import bp_posts
from campus_connect.api.routes.profile_routes import bp_profile


def register_routes(app: Flask, *, api_prefix: str) -> None:
    # health fora de /api
    app.register_blueprint(bp_health, url_prefix="/health")

    # sessão e perfil dividem o mesmo prefixo
    app.register_blueprint(bp_auth, url_prefix=f"{api_prefix}/auth")
    app.register_blueprint(bp_profile, url_prefix=f"{api_prefix}/auth")

    app.register_blueprint(bp_posts, url_prefix=f"{api_prefix}/posts")
    app.register_blueprint(bp_chat, url_prefix=f"{api_prefix}/chat")
