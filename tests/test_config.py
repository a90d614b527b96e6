"""
Tests for configuration models and environment-driven settings.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

import object_poller.config
from object_poller.config import FetcherConfig, Settings, get_settings


class TestFetcherConfig:
    """Test the FetcherConfig model."""

    def test_defaults(self):
        config = FetcherConfig()

        assert config.bucket == ""
        assert config.key == ""
        assert config.region is None
        assert config.use_embedded_cert is False
        assert config.poll_interval_seconds is None

    def test_is_immutable(self):
        config = FetcherConfig(bucket="test-bucket", key="data.json")

        with pytest.raises(ValidationError):
            config.bucket = "other"

    @pytest.mark.parametrize("interval", [0, -1, -0.5])
    def test_rejects_non_positive_interval(self, interval):
        with pytest.raises(ValidationError, match="poll_interval_seconds"):
            FetcherConfig(bucket="b", key="k", poll_interval_seconds=interval)


class TestSettings:
    """Test the Settings class."""

    def test_from_environment(self):
        with patch.dict(
            os.environ,
            {
                "S3_BUCKET": "env-bucket",
                "S3_KEY": "feeds/data.json.gz",
                "S3_REGION": "us-west-2",
                "S3_USE_EMBEDDED_CERT": "true",
                "POLL_INTERVAL_SECONDS": "60",
                "OUTPUT_PATH": "/tmp/data.json",
                "MAX_CONSECUTIVE_FAILURES": "3",
                "LOG_LEVEL": "debug",
                "LOG_FORMAT": "Console",
            },
            clear=True,
        ):
            settings = Settings(_env_file=None)

        assert settings.s3_bucket == "env-bucket"
        assert settings.s3_key == "feeds/data.json.gz"
        assert settings.s3_use_embedded_cert is True
        assert settings.poll_interval_seconds == 60
        assert settings.max_consecutive_failures == 3
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "console"

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.poll_interval_seconds == 300
        assert settings.max_consecutive_failures == 0
        assert settings.output_path == ""
        assert settings.log_format == "json"

    def test_invalid_log_level(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "verbose"}, clear=True):
            with pytest.raises(ValidationError, match="Invalid log level"):
                Settings(_env_file=None)

    def test_invalid_log_format(self):
        with pytest.raises(ValidationError, match="Invalid log format"):
            Settings(_env_file=None, log_format="xml")

    def test_negative_failure_limit(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_consecutive_failures=-1)

    @pytest.mark.parametrize("interval", ["0", "-5"])
    def test_rejects_non_positive_interval(self, interval):
        with patch.dict(os.environ, {"POLL_INTERVAL_SECONDS": interval}, clear=True):
            with pytest.raises(ValidationError, match="must be positive"):
                Settings(_env_file=None)

    def test_fetcher_config(self):
        """Test that empty optional settings become unset config values."""
        settings = Settings(
            _env_file=None,
            s3_bucket="test-bucket",
            s3_key="data.json",
            poll_interval_seconds=45,
        )

        config = settings.fetcher_config

        assert config.bucket == "test-bucket"
        assert config.key == "data.json"
        assert config.access_key is None
        assert config.secret_key is None
        assert config.region is None
        assert config.poll_interval_seconds == 45

    def test_fetcher_config_with_credentials(self):
        settings = Settings(
            _env_file=None,
            s3_bucket="test-bucket",
            s3_key="data.json",
            s3_access_key="AKIA",
            s3_secret_key="secret",
            s3_region="eu-central-1",
        )

        config = settings.fetcher_config

        assert config.access_key == "AKIA"
        assert config.secret_key == "secret"
        assert config.region == "eu-central-1"


def test_get_settings_is_cached():
    object_poller.config._settings_instance = None

    try:
        with patch.dict(os.environ, {"S3_BUCKET": "cached-bucket"}, clear=True):
            first = get_settings()
            second = get_settings()

        assert first is second
        assert first.s3_bucket == "cached-bucket"
    finally:
        object_poller.config._settings_instance = None
