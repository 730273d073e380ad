"""Application settings and configuration.

This module defines all configuration options for the Gridrr API.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Gridrr API", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    admin_email: str | None = Field(default=None, alias="ADMIN_EMAIL")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    refresh_secret_key: str | None = Field(default=None, alias="REFRESH_SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./gridrr.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # JWT authentication settings
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=15, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    refresh_token_expire_days: int = Field(default=7, alias="REFRESH_TOKEN_EXPIRE_DAYS")
    refresh_cookie_name: str = Field(default="refreshToken", alias="REFRESH_COOKIE_NAME")
    secure_cookies: bool = Field(default=False, alias="SECURE_COOKIES")

    # Verification thresholds (all three must be met)
    verification_min_posts: int = Field(default=100, alias="VERIFICATION_MIN_POSTS")
    verification_min_followers: int = Field(default=1000, alias="VERIFICATION_MIN_FOLLOWERS")
    verification_min_likes: int = Field(default=1000, alias="VERIFICATION_MIN_LIKES")
    # Seconds between background sweeps; 0 disables the worker.
    verification_sweep_interval_seconds: float = Field(
        default=3600.0,
        alias="VERIFICATION_SWEEP_INTERVAL_SECONDS",
    )

    # Upper bound for images attached to a single post
    max_images_per_post: int = Field(default=10, alias="MAX_IMAGES_PER_POST")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["https://gridrr.com", "https://www.gridrr.com", "http://localhost:3000"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["Content-Type", "Authorization"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def effective_refresh_secret(self) -> str:
        """Return the secret used to sign refresh tokens."""
        return self.refresh_secret_key or self.secret_key


settings = Settings()  # type: ignore[call-arg]
