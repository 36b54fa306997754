# backoffice/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = os.getenv("APP_NAME", "Habari Back Office API")
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # CORS origins for the admin dashboard
    CORS_ORIGINS: list[str] = _env_list(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000",
    )

    # Database (Tortoise URL format)
    database_url: str = os.getenv("DATABASE_URL", "sqlite://db.sqlite3")

    # JWT signing; no default secret, startup fails when JWT_SECRET is missing
    jwt_secret: str | None = os.getenv("JWT_SECRET")
    jwt_algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")
    access_token_expire_hours: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_HOURS", "24"))

    # Reload the principal from the database on every authenticated request
    # instead of trusting the role snapshot embedded in the token.
    auth_recheck_principal: bool = _env_flag("AUTH_RECHECK_PRINCIPAL", "true")

    # Rate limiting (fixed window per client IP)
    rate_limit_enabled: bool = _env_flag("RATE_LIMIT_ENABLED", "true")
    rate_limit_window_sec: int = int(os.getenv("RATE_LIMIT_WINDOW_SEC", "900"))
    rate_limit_global_max: int = int(os.getenv("RATE_LIMIT_GLOBAL_MAX", "100"))
    rate_limit_login_max: int = int(os.getenv("RATE_LIMIT_LOGIN_MAX", "5"))
    # Key on X-Forwarded-For instead of the peer address (only behind a trusted proxy)
    rate_limit_trust_proxy: bool = _env_flag("RATE_LIMIT_TRUST_PROXY", "false")

    # Default admin created on first startup (only when ADMIN_PASSWORD is set)
    admin_email: str = os.getenv("ADMIN_EMAIL", "admin@habariadventure.com")
    admin_password: str | None = os.getenv("ADMIN_PASSWORD")
    admin_first_name: str = os.getenv("ADMIN_FIRST_NAME", "Super")
    admin_last_name: str = os.getenv("ADMIN_LAST_NAME", "Admin")

settings = Settings()  # Instantiate configuration
