"""Tests for store configuration schemas."""

import logging

import pytest
from pydantic import ValidationError

from dav_objectstore.schemas import LogLevel, WebDAVStoreConfig


class TestLogLevel:
    """Test the LogLevel enum."""

    def test_levels_are_ordered(self):
        """Test WARN < INFO < DEBUG."""
        assert LogLevel.WARN < LogLevel.INFO < LogLevel.DEBUG

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("WARN", LogLevel.WARN),
            ("info", LogLevel.INFO),
            (" Debug ", LogLevel.DEBUG),
            ("", LogLevel.WARN),
            (None, LogLevel.WARN),
            ("verbose", LogLevel.WARN),
        ],
    )
    def test_parse(self, value, expected):
        """Test case-insensitive parsing with WARN fallback."""
        assert LogLevel.parse(value) is expected

    def test_logging_levels(self):
        """Test mapping onto stdlib logging thresholds."""
        assert LogLevel.WARN.logging_level == logging.WARNING
        assert LogLevel.INFO.logging_level == logging.INFO
        assert LogLevel.DEBUG.logging_level == logging.DEBUG


class TestWebDAVStoreConfig:
    """Test WebDAV store configuration."""

    def test_config_from_map(self):
        """Test building configuration from the plugin's camelCase map."""
        config = WebDAVStoreConfig.from_config_map(
            {
                "root": "https://dav.example.com",
                "user": "velero",
                "webDAVPassword": "secret",
                "bucketsDir": "backups/",
                "bucket": "velero",
                "delimiter": "-",
                "logLevel": "debug",
            }
        )
        assert config.root == "https://dav.example.com"
        assert config.user == "velero"
        assert config.password == "secret"
        assert config.buckets_dir == "backups/"
        assert config.bucket == "velero"
        assert config.delimiter == "-"
        assert config.log_level is LogLevel.DEBUG

    def test_config_defaults(self):
        """Test an empty map is accepted with defaults."""
        config = WebDAVStoreConfig.from_config_map({})
        assert config.root == ""
        assert config.user == ""
        assert config.password == ""
        assert config.buckets_dir == ""
        assert config.delimiter == "/"
        assert config.log_level is LogLevel.WARN
        assert config.uses_native_delimiter is True

    def test_buckets_dir_gets_trailing_separator(self):
        """Test the buckets directory is normalized to end with '/'."""
        config = WebDAVStoreConfig.from_config_map({"bucketsDir": "backups"})
        assert config.buckets_dir == "backups/"

    def test_empty_delimiter_defaults_to_separator(self):
        """Test an empty delimiter falls back to '/'."""
        config = WebDAVStoreConfig.from_config_map({"delimiter": ""})
        assert config.delimiter == "/"

    def test_custom_delimiter_is_not_native(self):
        """Test a non-'/' delimiter is flagged as non-native."""
        config = WebDAVStoreConfig.from_config_map({"delimiter": "-"})
        assert config.uses_native_delimiter is False

    def test_unknown_keys_ignored(self):
        """Test unrecognized configuration keys are ignored."""
        config = WebDAVStoreConfig.from_config_map({"region": "eu", "user": "u"})
        assert config.user == "u"

    def test_config_is_immutable(self):
        """Test configuration cannot change after creation."""
        config = WebDAVStoreConfig.from_config_map({"root": "https://dav.example.com"})
        with pytest.raises(ValidationError):
            config.root = "https://other.example.com"

    def test_password_hidden_from_repr(self):
        """Test the password does not leak into repr."""
        config = WebDAVStoreConfig.from_config_map({"webDAVPassword": "hunter2"})
        assert "hunter2" not in repr(config)

    def test_python_field_names(self):
        """Test configuration can be built with python field names."""
        config = WebDAVStoreConfig(password="secret", buckets_dir="data")
        assert config.password == "secret"
        assert config.buckets_dir == "data/"
