"""Adapter configuration schemas for dav-objectstore."""

import logging
from enum import IntEnum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dav_objectstore.path import NATIVE_SEPARATOR


class LogLevel(IntEnum):
    """Adapter verbosity, ordered from quietest to noisiest."""

    WARN = 0
    INFO = 1
    DEBUG = 2

    @property
    def logging_level(self) -> int:
        """Equivalent stdlib logging threshold."""
        return _LOGGING_LEVELS[self]

    @classmethod
    def parse(cls, value: Optional[str]) -> "LogLevel":
        """Parse a case-insensitive level name, falling back to WARN."""
        if not value:
            return cls.WARN
        return cls.__members__.get(value.strip().upper(), cls.WARN)


_LOGGING_LEVELS = {
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


class WebDAVStoreConfig(BaseModel):
    """Connection and layout settings for a WebDAV-backed object store.

    Built from the plugin configuration map, whose keys use the camelCase names
    (``webDAVPassword``, ``bucketsDir``, ``logLevel``). Missing values never fail
    validation; an empty root or user only surfaces on the first connection.

    Example:
        config = WebDAVStoreConfig.from_config_map(
            {"root": "https://dav.example.com/remote.php/dav", "user": "velero",
             "webDAVPassword": "secret", "bucketsDir": "backups"}
        )
        config.buckets_dir  # "backups/"
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    root: str = Field("", description="WebDAV server base URL")
    user: str = Field("", description="WebDAV username")
    password: str = Field(
        "", alias="webDAVPassword", description="WebDAV password", repr=False
    )
    buckets_dir: str = Field(
        "", alias="bucketsDir", description="Directory prepended to every bucket"
    )
    bucket: str = Field("", description="Bucket name, informational only")
    delimiter: str = Field(NATIVE_SEPARATOR, description="Logical key delimiter")
    log_level: LogLevel = Field(
        LogLevel.WARN, alias="logLevel", description="Adapter verbosity"
    )

    @field_validator("buckets_dir", mode="before")
    @classmethod
    def _normalize_buckets_dir(cls, value: Optional[str]) -> str:
        if value and not value.endswith(NATIVE_SEPARATOR):
            return f"{value}{NATIVE_SEPARATOR}"
        return value or ""

    @field_validator("delimiter", mode="before")
    @classmethod
    def _default_delimiter(cls, value: Optional[str]) -> str:
        return value or NATIVE_SEPARATOR

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_log_level(cls, value: Any) -> LogLevel:
        if isinstance(value, LogLevel):
            return value
        return LogLevel.parse(value)

    @property
    def uses_native_delimiter(self) -> bool:
        """True when keys fold into directories on the native separator."""
        return self.delimiter == NATIVE_SEPARATOR

    @classmethod
    def from_config_map(cls, config: Mapping[str, str]) -> "WebDAVStoreConfig":
        """Build a configuration from the plugin's string map."""
        return cls.model_validate(dict(config))
