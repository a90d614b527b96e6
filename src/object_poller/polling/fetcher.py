"""
Polling fetcher for a single remote object.

This module implements the change-detection and fetch protocol: pace calls to
one probe per interval, compare the object's ETag against the last one seen,
and only transfer and decode the object when it has changed.
"""

from collections.abc import Callable, Mapping
from typing import BinaryIO

import structlog

from ..config import DEFAULT_POLL_INTERVAL_SECONDS, DEFAULT_REGION, FetcherConfig
from ..exceptions import (
    ConfigurationError,
    DecodeError,
    FetchCancelledError,
    ProbeError,
    RetrievalError,
)
from ..storage.base import ObjectStore
from ..storage.credentials import Credentials, resolve_credentials
from ..storage.s3 import S3ObjectStore
from .decoding import DECODE_ERRORS, expects_compressed, open_decompressed
from .delay import CancellableDelay
from .metrics import FetchMetrics
from .session import DecodeState, FetcherSession

logger = structlog.get_logger(__name__)

StoreFactory = Callable[[FetcherConfig, Credentials], ObjectStore]


class PollingFetcher:
    """
    Fetches an object whenever its change token moves.

    Call ``initialize`` once, then ``fetch`` repeatedly from a single loop.
    ``fetch`` returns ``None`` while the object is unchanged and an open
    content stream when it changed. The stream must be consumed and closed
    before the next ``fetch``.

    Instances are not thread-safe. ``cancel`` is the only method that may be
    called from another thread.
    """

    def __init__(
        self,
        config: FetcherConfig,
        store_factory: StoreFactory | None = None,
        delay: CancellableDelay | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        """
        Initialize the polling fetcher.

        Args:
            config: Object and polling configuration
            store_factory: Builds the storage backend from the resolved
                configuration and credentials (defaults to S3)
            delay: Cancellable delay used for pacing
            environ: Environment used for credential discovery
        """
        self.config = config
        self.store_factory = store_factory or S3ObjectStore.from_config
        self.delay = delay or CancellableDelay()
        self.environ = environ
        self.metrics = FetchMetrics()

        self._session = FetcherSession()
        self._store: ObjectStore | None = None
        self._credentials: Credentials | None = None
        self._interval_seconds = DEFAULT_POLL_INTERVAL_SECONDS

    @property
    def initialized(self) -> bool:
        return self._store is not None

    @property
    def region(self) -> str:
        return self.config.region or DEFAULT_REGION

    @property
    def interval_seconds(self) -> float:
        return self._interval_seconds

    @property
    def credentials(self) -> Credentials | None:
        return self._credentials

    @property
    def last_change_token(self) -> str:
        """ETag of the last version seen, empty before the first change."""
        return self._session.last_change_token

    @property
    def has_polled_before(self) -> bool:
        return self._session.has_polled_before

    @property
    def decode_state(self) -> DecodeState:
        return self._session.decode_state

    def initialize(self) -> None:
        """
        Validate configuration, apply defaults and build the storage client.

        No network requests are made.

        Raises:
            ConfigurationError: If the bucket or key is missing
        """
        if not self.config.bucket:
            raise ConfigurationError("S3 bucket not set", field="bucket")
        if not self.config.key:
            raise ConfigurationError("S3 key not set", field="key")

        self.config = self.config.model_copy(
            update={
                "region": self.config.region or DEFAULT_REGION,
                "poll_interval_seconds": self.config.poll_interval_seconds
                or DEFAULT_POLL_INTERVAL_SECONDS,
            }
        )
        self._interval_seconds = self.config.poll_interval_seconds
        self._credentials = resolve_credentials(self.config, self.environ)
        self._store = self.store_factory(self.config, self._credentials)

        logger.info(
            "Polling fetcher initialized",
            bucket=self.config.bucket,
            key=self.config.key,
            region=self.config.region,
            interval_seconds=self._interval_seconds,
            credentials_source=self._credentials.source,
            embedded_cert=self.config.use_embedded_cert,
        )

    def cancel(self) -> None:
        """Interrupt a pending or future wait; ``fetch`` then raises."""
        logger.info("Cancelling polling fetcher", key=self.config.key)
        self.delay.cancel()

    def fetch(self) -> BinaryIO | None:
        """
        Check the object and return its content if it changed.

        The first call probes immediately; every later call first waits the
        poll interval. The interval runs from the end of the previous call, so
        the cadence drifts with request latency.

        Returns:
            Content stream for a new version, or None if unchanged

        Raises:
            ProbeError: If the metadata request failed
            RetrievalError: If the content request failed
            DecodeError: If gzip decoding could not be started
            FetchCancelledError: If the fetcher was cancelled
        """
        if self._store is None:
            raise RuntimeError("Fetcher not initialized")

        bucket, key = self.config.bucket, self.config.key
        session = self._session

        if session.has_polled_before:
            if self.delay.wait(self._interval_seconds):
                raise FetchCancelledError("Fetch cancelled while waiting")
        session.has_polled_before = True
        self._check_cancelled()

        try:
            metadata = self._store.head_object(bucket, key)
        except Exception as e:
            self.metrics.record_probe(success=False)
            logger.warning("HEAD request failed", bucket=bucket, key=key, error=str(e))
            raise ProbeError(
                f"HEAD request failed ({e})",
                cause=e,
                context={"bucket": bucket, "key": key},
            ) from e
        self.metrics.record_probe(success=True)

        token = metadata.change_token
        if session.is_known_token(token):
            self.metrics.record_unchanged()
            logger.debug("Object unchanged", key=key, change_token=token)
            return None

        previous_token = session.last_change_token
        session.commit_token(token)
        logger.info(
            "Object changed",
            key=key,
            change_token=token,
            previous_change_token=previous_token or None,
        )
        self._check_cancelled()

        try:
            content = self._store.get_object(bucket, key)
        except Exception as e:
            self.metrics.record_retrieval(token, success=False)
            logger.warning("GET request failed", bucket=bucket, key=key, error=str(e))
            raise RetrievalError(
                f"GET request failed ({e})",
                cause=e,
                context={"bucket": bucket, "key": key, "change_token": token},
            ) from e
        self.metrics.record_retrieval(token, success=True)

        if (
            session.decoding_enabled
            and expects_compressed(key)
            and not content.is_transport_compressed
        ):
            try:
                stream = open_decompressed(content.body)
            except DECODE_ERRORS as e:
                session.disable_decoding()
                self.metrics.record_decode(success=False)
                logger.warning("Gzip decode failed", key=key, error=str(e))
                raise DecodeError(
                    f"gzip decode failed ({e})",
                    cause=e,
                    context={"key": key, "change_token": token},
                ) from e
            session.mark_decoded()
            self.metrics.record_decode(success=True)
            return stream

        return content.body

    def _check_cancelled(self) -> None:
        if self.delay.cancelled:
            raise FetchCancelledError("Fetch cancelled")
