"""
FixNexus Backend: Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated when the app starts.

Environment variables kept from the original deployment:
    PORT, DB_USER, DB_PASS, ACCESS_TOKEN_SECRET, NODE_ENV
"""

from typing import List, Optional
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


DEFAULT_CORS_ORIGINS = ",".join(
    [
        "http://localhost:5173",
        "http://localhost:5174",
        "https://fixnexus-aa0eb.web.app",
        "https://fixnexus-aa0eb.firebaseapp.com",
        "https://fixnexus.netlify.app",
    ]
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for development except the token
    secret and database credentials, which production MUST provide.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Atlas credentials; combined with db_cluster_host into an SRV URI
    db_user: str = Field(default="")
    db_pass: str = Field(default="")
    db_cluster_host: str = Field(default="atlascluster.xgsegjb.mongodb.net")
    db_name: str = Field(default="fixnexus")

    # Full connection string override (local mongod, docker, tests).
    # Takes precedence over the Atlas credentials when set.
    mongodb_uri: Optional[str] = Field(default=None)

    # Startup ping retry (tenacity). Store operations themselves are never retried.
    db_connect_attempts: int = Field(default=3, ge=1, le=10)
    db_connect_min_wait: int = Field(default=1, ge=0, le=30)
    db_connect_max_wait: int = Field(default=8, ge=1, le=120)

    # ── Auth ──────────────────────────────────────────────────────────────
    access_token_secret: str = Field(default="")
    token_lifetime_days: int = Field(default=1, ge=1, le=30)
    token_algorithm: str = Field(default="HS256")

    # ── Runtime environment ───────────────────────────────────────────────
    # "production" switches the auth cookie to Secure + SameSite=None
    node_env: str = Field(default="development")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated allow-list; credentialed requests from anything else are rejected
    cors_origins: str = Field(default=DEFAULT_CORS_ORIGINS)

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.node_env.lower() == "production"

    @property
    def mongo_uri(self) -> str:
        """
        Connection string handed to AsyncMongoClient.

        Credentials are URL-quoted; '@' or ':' in a password would otherwise
        corrupt the SRV URI.
        """
        if self.mongodb_uri:
            return self.mongodb_uri
        return (
            f"mongodb+srv://{quote_plus(self.db_user)}:{quote_plus(self.db_pass)}"
            f"@{self.db_cluster_host}/?retryWrites=true&w=majority&appName=AtlasCluster"
        )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that critical settings are configured.
        When:  Called during app startup (lifespan).
        How:   Collects every problem and raises a single ValueError.
        """
        errors = []
        if not self.access_token_secret:
            errors.append("ACCESS_TOKEN_SECRET is not set; tokens cannot be issued or verified.")
        if not self.mongodb_uri and not (self.db_user and self.db_pass):
            errors.append("DB_USER/DB_PASS are not set and no MONGODB_URI override was given.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


settings = Settings()
