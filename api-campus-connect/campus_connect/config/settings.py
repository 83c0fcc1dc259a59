# campus_connect/config/settings.py
from urllib.parse import quote_plus
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    # Banco principal (PostgreSQL)
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "campus_connect"
    db_user: str = "postgres"
    db_password: str = "postgres"

    # URL completa (sobrescreve os campos acima, ex.: sqlite nos testes)
    db_url: str | None = None

    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    jwt_secret: str = "dev-secret-change-me"
    jwt_refresh_secret: str = "dev-refresh-secret-change-me"
    jwt_issuer: str = "campus-connect-api"
    jwt_audience: str = "campus-connect-front"
    jwt_access_minutes: int = 15
    jwt_refresh_minutes: int = 60 * 24 * 7

    refresh_cookie_name: str = "refreshToken"
    rotate_refresh_on_use: bool = False

    institution_domain: str = "rishihood.edu.in"
    password_iterations: int = 600_000

    max_post_image_chars: int = 2_000_000

    api_prefix: str = "/api"
    socketio_async_mode: str = "eventlet"

    cors_origins_raw: str = "http://localhost:5173,http://127.0.0.1:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("db_host", "db_name", "db_user", "db_password", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip().strip('"').strip("'")
        return v

    @field_validator("institution_domain", mode="before")
    @classmethod
    def normalize_domain(cls, v):
        if isinstance(v, str):
            return v.strip().lstrip("@").lower()
        return v

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def cors_origins(self) -> list[str]:
        origins = [o.strip().rstrip("/") for o in self.cors_origins_raw.split(",")]
        return list(dict.fromkeys(o for o in origins if o))

    @property
    def database_url(self) -> str:
        if self.db_url:
            return self.db_url

        user = quote_plus(self.db_user)
        password = quote_plus(self.db_password)
        host = self.db_host
        port = self.db_port
        db = self.db_name

        return f"postgresql+psycopg2://{user}:{password}@{host}:{port}/{db}"


settings = Settings()
