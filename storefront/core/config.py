from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]
DEFAULT_CATALOG_PATH = BASE_DIR / "data" / "catalog.json"


class Settings(BaseSettings):
    # App Basics
    app_env: str = "dev"
    app_name: str = "Subscriptions Storefront"
    app_host: str = "0.0.0.0"
    app_port: int = 3000
    log_level: str = "info"
    app_base_url: str = "http://localhost:3000"
    public_dir: str = str(BASE_DIR / "public")

    # Database ("memory://" for the in-memory store, "" when not configured)
    database_url: str = "sqlite:///./storefront.db"
    db_echo: bool = False

    # JWT session cookie
    jwt_secret: str = "secret_key"
    jwt_alg: str = "HS256"
    jwt_access_ttl_min: int = 120
    session_cookie_name: str = "token"

    # CSRF (double submit cookie)
    csrf_cookie_name: str = "XSRF-TOKEN"
    csrf_header_name: str = "X-CSRF-Token"
    csrf_protect_public_forms: bool = False

    # Admin credentials
    admin_username: str = "admin"
    admin_password: str = ""
    admin_password_hash: str = ""

    # Telegram
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""
    telegram_api_base: str = "https://api.telegram.org"
    telegram_timeout: float = 10.0

    # Uploads
    upload_dir: str = "uploads"
    max_upload_bytes: int = 5 * 1024 * 1024
    screenshot_required: bool = False

    # Capabilities
    plans_enabled: bool = True
    suggestions_enabled: bool = True
    inquiries_enabled: bool = True
    require_contact_fields: bool = True
    unspecified_placeholder: str = "غير محدد"

    # Completed/cancelled records may be moved to any allowed status when true
    allow_any_status_transition: bool = True

    # Catalog ("" uses data/catalog.json)
    catalog_path: str = ""

    # Tell pydantic to read from .env file
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
    )

    @property
    def cookie_secure(self) -> bool:
        return self.app_env == "production"

    @property
    def resolved_catalog_path(self) -> Path:
        return Path(self.catalog_path) if self.catalog_path else DEFAULT_CATALOG_PATH


settings = Settings()
