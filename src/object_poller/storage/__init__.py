"""
Storage backends for the object poller.

This package defines the backend boundary used by the polling fetcher and
its Amazon S3 implementation.
"""

from .base import ObjectContent, ObjectMetadata, ObjectStore
from .credentials import Credentials, resolve_credentials
from .s3 import S3ObjectStore, build_s3_client

__all__ = [
    "Credentials",
    "ObjectContent",
    "ObjectMetadata",
    "ObjectStore",
    "S3ObjectStore",
    "build_s3_client",
    "resolve_credentials",
]
