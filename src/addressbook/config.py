"""
Configuration management for the address book backend
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_database: str = "addressbook"
    mongodb_server_selection_timeout_ms: int = 5000

    # Auth
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    # Single shared password accepted by the login mutation (no per-user credentials)
    demo_password: str = "secret"

    # External REST service backing allPersonsREST
    rest_api_url: str = "http://localhost:3001"
    rest_api_timeout: float | None = None  # None disables the timeout

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 4000
    api_reload: bool = False
    cors_origins: list[str] = ["*"]

    # Diagnostics: debug serves GraphiQL and logs to a colored console instead of JSON
    debug: bool = True
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ADDRESSBOOK_",
        case_sensitive=False,
    )


# Global settings instance
settings = Settings()
