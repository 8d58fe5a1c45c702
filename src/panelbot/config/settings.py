"""
Application settings using Pydantic.

Provides environment-based configuration loading with PANELBOT_ prefix.
Settings are resolved once at process start and are immutable afterwards;
components receive them through their constructors.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Grafana
    grafana_host: str = "http://localhost:3000"
    grafana_api_key: str | None = None

    # S3 upload strategy (enabled when bucket and both keys are set)
    s3_bucket: str | None = None
    s3_access_key_id: str | None = None
    s3_secret_access_key: str | None = None
    s3_prefix: str | None = None
    s3_region: str = "us-east-1"

    # Image proxy strategy
    use_images_proxy: bool = False
    images_host: str | None = None
    images_api_key: str | None = None

    # HTTP client settings
    http_timeout: float = 30.0

    # Slack
    slack_bot_token: str | None = None
    slack_default_channel: str | None = None

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "PANELBOT_"
        frozen = True

    @property
    def s3_enabled(self) -> bool:
        return bool(self.s3_bucket and self.s3_access_key_id and self.s3_secret_access_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
