"""Configuration management for dav-objectstore."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "WARNING"
    otel_enabled: bool = False
    otel_service_name: str = "dav-objectstore"
    webdav_timeout: float = 30.0

    model_config = {
        "env_prefix": "DAV_OBJECTSTORE_",
        "case_sensitive": False,
    }


settings = Settings()
