"""
Storage backend abstraction for the object poller.

The fetcher only needs two operations from a backend: a cheap metadata probe
and a full content retrieval. Both are defined here so the polling logic can
be exercised against any implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO


@dataclass(frozen=True)
class ObjectMetadata:
    """Result of a metadata probe."""

    change_token: str
    content_encoding: str | None = None


@dataclass
class ObjectContent:
    """Result of a full retrieval. ``body`` is a live, unread stream."""

    body: BinaryIO
    content_encoding: str | None = None

    @property
    def is_transport_compressed(self) -> bool:
        """Check if the response declares gzip content encoding."""
        return "gzip" in (self.content_encoding or "").lower()


class ObjectStore(ABC):
    """Abstract base class for object storage backends."""

    @abstractmethod
    def head_object(self, bucket: str, key: str) -> ObjectMetadata:
        """
        Fetch object metadata without transferring the body.

        Args:
            bucket: Bucket name
            key: Object key

        Returns:
            Object metadata with the current change token
        """
        pass

    @abstractmethod
    def get_object(self, bucket: str, key: str) -> ObjectContent:
        """
        Fetch the full object.

        Args:
            bucket: Bucket name
            key: Object key

        Returns:
            Object content with an open body stream
        """
        pass
