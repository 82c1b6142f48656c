# storefront/core/config.py
"""
Application configuration - single source of truth for all settings.
"""
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class DatabaseSettings:
    """MongoDB connection configuration."""
    mongodb_url: str = field(default_factory=lambda: os.getenv("MONGODB_URL", "mongodb://localhost:27017"))
    db_name: str = field(default_factory=lambda: os.getenv("DB_NAME", "geeks_store"))
    server_selection_timeout_ms: int = 5000


@dataclass
class AuthSettings:
    """JWT and seeded admin configuration."""
    # Defaults are for local development only
    jwt_secret: str = field(default_factory=lambda: os.getenv("JWT_SECRET", "development_secret_key_change_me_0123456789"))
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = field(default_factory=lambda: os.getenv("JWT_ISSUER", "geeks-store"))
    jwt_audience: str = field(default_factory=lambda: os.getenv("JWT_AUDIENCE", "geeks-store-users"))
    token_expire_hours: int = field(default_factory=lambda: int(os.getenv("JWT_EXPIRE_HOURS", "8")))
    bcrypt_rounds: int = field(default_factory=lambda: int(os.getenv("BCRYPT_ROUNDS", "12")))
    cookie_name: str = "auth-token"
    cookie_secure: bool = field(default_factory=lambda: _env_bool("AUTH_COOKIE_SECURE"))
    admin_email: str = field(default_factory=lambda: os.getenv("ADMIN_EMAIL", "admin@example.com"))
    admin_password: str = field(default_factory=lambda: os.getenv("ADMIN_PASSWORD", "admin123"))


@dataclass
class LLMSettings:
    """LLM provider configuration for the chatbot."""
    default_provider: str = field(default_factory=lambda: os.getenv("DEFAULT_LLM_PROVIDER", "gemini"))
    default_model: Optional[str] = field(default_factory=lambda: os.getenv("DEFAULT_LLM_MODEL"))
    gemini_api_key: Optional[str] = field(default_factory=lambda: os.getenv("GEMINI_API_KEY"))
    openai_api_key: Optional[str] = field(default_factory=lambda: os.getenv("OPENAI_API_KEY"))
    temperature: float = field(default_factory=lambda: float(os.getenv("LLM_TEMPERATURE", "0.7")))
    max_tokens: int = field(default_factory=lambda: int(os.getenv("LLM_MAX_TOKENS", "1000")))
    timeout_seconds: int = 60


@dataclass
class UploadSettings:
    """Product image upload configuration."""
    uploads_dir: Path = field(default_factory=lambda: Path(os.getenv(
        "UPLOADS_DIR",
        str(Path(__file__).parent.parent.parent / "uploads")
    )))
    allowed_extensions: tuple = (".jpg", ".jpeg", ".png", ".gif", ".webp")
    max_file_size: int = 5 * 1024 * 1024

    @property
    def products_dir(self) -> Path:
        return self.uploads_dir / "products"


@dataclass
class PathSettings:
    """Path configuration."""
    frontend_dist: Path = field(default_factory=lambda: Path(os.getenv(
        "FRONTEND_DIST_PATH",
        str(Path(__file__).parent.parent.parent / "frontend" / "dist")
    )))


@dataclass
class Settings:
    """Main application settings."""
    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    auth: AuthSettings = field(default_factory=AuthSettings)
    llm: LLMSettings = field(default_factory=LLMSettings)
    uploads: UploadSettings = field(default_factory=UploadSettings)
    paths: PathSettings = field(default_factory=PathSettings)
    cors_origins: List[str] = field(default_factory=lambda: [
        o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()
    ])
    rate_limit: str = field(default_factory=lambda: os.getenv("RATE_LIMIT", "100/minute"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", 8000)))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG"))

    def ensure_directories(self):
        """Ensure required directories exist."""
        self.uploads.products_dir.mkdir(parents=True, exist_ok=True)


# Singleton instance
settings = Settings()
