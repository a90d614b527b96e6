"""
Pytest configuration and fixtures for object poller tests.
"""

import gzip
import io
from unittest.mock import Mock

import pytest

from object_poller.config import FetcherConfig, Settings
from object_poller.polling.fetcher import PollingFetcher
from object_poller.storage.base import ObjectContent, ObjectMetadata, ObjectStore


class FakeDelay:
    """Records requested waits instead of sleeping."""

    def __init__(self) -> None:
        self.waits: list[float] = []
        self.cancelled = False

    def wait(self, seconds: float) -> bool:
        self.waits.append(seconds)
        return self.cancelled

    def cancel(self) -> None:
        self.cancelled = True


def make_metadata(token: str, content_encoding: str | None = None) -> ObjectMetadata:
    return ObjectMetadata(change_token=token, content_encoding=content_encoding)


def make_content(data: bytes, content_encoding: str | None = None) -> ObjectContent:
    return ObjectContent(body=io.BytesIO(data), content_encoding=content_encoding)


@pytest.fixture
def fake_delay() -> FakeDelay:
    return FakeDelay()


@pytest.fixture
def mock_store() -> Mock:
    """Mock object store returning a fixed version."""
    store = Mock(spec=ObjectStore)
    store.head_object.return_value = make_metadata('"v1"')
    store.get_object.side_effect = lambda bucket, key: make_content(b"payload-v1")
    return store


@pytest.fixture
def fetcher_config() -> FetcherConfig:
    return FetcherConfig(
        bucket="test-bucket", key="feeds/data.json", poll_interval_seconds=30
    )


@pytest.fixture
def gzip_config() -> FetcherConfig:
    return FetcherConfig(
        bucket="test-bucket", key="feeds/data.json.gz", poll_interval_seconds=30
    )


@pytest.fixture
def make_fetcher(mock_store: Mock, fake_delay: FakeDelay):
    """Build an initialized fetcher over the mock store."""

    def _make(config: FetcherConfig, environ: dict[str, str] | None = None):
        fetcher = PollingFetcher(
            config,
            store_factory=lambda cfg, creds: mock_store,
            delay=fake_delay,
            environ=environ or {},
        )
        fetcher.initialize()
        return fetcher

    return _make


@pytest.fixture
def gzip_payload() -> bytes:
    return gzip.compress(b'{"version": 1}')


@pytest.fixture
def mock_settings() -> Settings:
    """Mock settings for testing."""
    return Settings(
        _env_file=None,
        s3_bucket="test-bucket",
        s3_key="feeds/data.json",
        poll_interval_seconds=30,
        log_level="DEBUG",
        log_format="console",
    )
