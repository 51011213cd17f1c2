
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Personnel Directory API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:3000"
    max_upload_size_mb: int = 10

    # Database (SQLite via aiosqlite for local dev and tests)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./directory_dev.db",
        alias="DATABASE_URL",
    )

    # Listings
    page_size: int = Field(default=10, alias="PAGE_SIZE")  # persons per page when ?paging is set

    # Upper bound for a single request, storage calls included
    request_timeout_seconds: float = Field(default=30.0, alias="REQUEST_TIMEOUT_SECONDS")

    # Principals carrying this role may act on every company
    admin_role: str = Field(default="admin", alias="ADMIN_ROLE")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

settings = Settings()
