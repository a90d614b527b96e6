#!/usr/bin/env python3
"""
Standalone application entry point for the object poller.

This module runs a polling fetcher in a loop and writes every new version of
the watched object to a file or to stdout until it is stopped by a signal or
by too many consecutive failures.
"""

import logging
import os
import shutil
import signal
import sys
import tempfile
import zlib
from pathlib import Path
from typing import BinaryIO, Protocol

import structlog
from botocore.exceptions import (
    IncompleteReadError,
    ReadTimeoutError,
    ResponseStreamingError,
)
from pydantic import ValidationError

from .config import Settings
from .exceptions import (
    ConfigurationError,
    DecodeError,
    FetchCancelledError,
    ProbeError,
    RetrievalError,
)
from .polling.fetcher import PollingFetcher

logger = structlog.get_logger(__name__)

# Raised while reading a live content stream, after the version was committed.
STREAM_ERRORS = (
    OSError,
    EOFError,
    zlib.error,
    ReadTimeoutError,
    IncompleteReadError,
    ResponseStreamingError,
)


def setup_logging(settings: Settings) -> None:
    """Configure structured logging."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(message)s",
        stream=sys.stderr,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.processors.JSONRenderer()
                if settings.log_format == "json"
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class ContentSink(Protocol):
    """Receives each new version of the object."""

    def write(self, stream: BinaryIO) -> int: ...


class FileSink:
    """Writes each update to a file, replacing it atomically."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def write(self, stream: BinaryIO) -> int:
        """
        Copy ``stream`` into the target file and close it.

        Returns:
            Number of bytes written
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as out:
                shutil.copyfileobj(stream, out)
                size = out.tell()
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        finally:
            stream.close()
        return size


class StdoutSink:
    """Writes each update to stdout."""

    def __init__(self, output: BinaryIO | None = None):
        self.output = output or sys.stdout.buffer

    def write(self, stream: BinaryIO) -> int:
        size = 0
        try:
            while chunk := stream.read(64 * 1024):
                self.output.write(chunk)
                size += len(chunk)
        finally:
            stream.close()
        self.output.flush()
        return size


class StandaloneApp:
    """Main application class for standalone mode."""

    def __init__(
        self,
        settings: Settings,
        fetcher: PollingFetcher | None = None,
        sink: ContentSink | None = None,
    ):
        """
        Initialize the standalone application.

        Args:
            settings: Application settings
            fetcher: Pre-built fetcher (created from settings if omitted)
            sink: Destination for updates (file or stdout from settings)
        """
        self.settings = settings
        self.fetcher = fetcher
        self.sink = sink
        self.running = False
        self.failed = False
        self.consecutive_failures = 0

    def initialize(self) -> None:
        """Initialize the fetcher and the output sink."""
        logger.info("Initializing object poller in standalone mode")

        if self.fetcher is None:
            self.fetcher = PollingFetcher(self.settings.fetcher_config)
        self.fetcher.initialize()

        if self.sink is None:
            if self.settings.output_path:
                self.sink = FileSink(self.settings.output_path)
            else:
                self.sink = StdoutSink()

        logger.info(
            "Standalone configuration",
            bucket=self.settings.s3_bucket,
            key=self.settings.s3_key,
            output_path=self.settings.output_path or "<stdout>",
            max_consecutive_failures=self.settings.max_consecutive_failures,
        )

    def run(self) -> None:
        """Poll until stopped or until the failure limit is reached."""
        if self.fetcher is None or self.sink is None:
            raise RuntimeError("Application not initialized")

        self.running = True
        logger.info("Starting polling loop")

        while self.running:
            try:
                stream = self.fetcher.fetch()
            except FetchCancelledError:
                logger.info("Polling cancelled")
                break
            except (ProbeError, RetrievalError, DecodeError) as e:
                self._record_failure(e)
                continue

            if stream is None:
                self.consecutive_failures = 0
                continue

            try:
                size = self.sink.write(stream)
            except STREAM_ERRORS as e:
                self._record_failure(e, event="Writing update failed")
                continue

            self.consecutive_failures = 0
            logger.info(
                "Update written",
                size=size,
                change_token=self.fetcher.last_change_token,
            )

        self.running = False
        logger.info("Polling loop stopped", metrics=self.fetcher.metrics.to_dict())

    def stop(self) -> None:
        """Stop the polling loop, interrupting any pending wait."""
        logger.info("Stopping object poller")
        self.running = False
        if self.fetcher is not None:
            self.fetcher.cancel()

    def setup_signal_handlers(self) -> None:
        """Set up signal handlers for graceful shutdown."""

        def signal_handler(signum: int, frame) -> None:  # type: ignore
            logger.info("Received signal, initiating shutdown", signal=signum)
            self.stop()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def _record_failure(self, error: Exception, event: str = "Fetch failed") -> None:
        self.consecutive_failures += 1
        logger.error(
            event,
            error=str(error),
            error_type=type(error).__name__,
            error_code=getattr(error, "code", None),
            consecutive_failures=self.consecutive_failures,
        )

        limit = self.settings.max_consecutive_failures
        if limit and self.consecutive_failures >= limit:
            logger.error("Too many consecutive failures, stopping", limit=limit)
            self.failed = True
            self.running = False


def main() -> None:
    """Main entry point for standalone mode."""
    try:
        settings = Settings()
    except ValidationError as e:
        logger.error("Invalid configuration", error=str(e))
        sys.exit(2)
    setup_logging(settings)

    app = StandaloneApp(settings)

    try:
        app.setup_signal_handlers()
        app.initialize()
        app.run()
    except ConfigurationError as e:
        logger.error("Invalid configuration", error=str(e), field=e.field)
        sys.exit(2)
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    except Exception as e:
        logger.error("Application failed", error=str(e))
        sys.exit(1)

    if app.failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
