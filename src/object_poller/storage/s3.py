"""
Amazon S3 backend for the object poller.

This module implements the metadata probe with ``HeadObject`` and the full
retrieval with ``GetObject`` on a boto3 S3 client.
"""

from typing import Any

import boto3
import certifi
import structlog
from botocore import UNSIGNED
from botocore.config import Config

from ..config import DEFAULT_REGION, FetcherConfig
from .base import ObjectContent, ObjectMetadata, ObjectStore
from .credentials import Credentials

logger = structlog.get_logger(__name__)


def build_s3_client(
    credentials: Credentials, region: str, use_embedded_cert: bool = False
) -> Any:
    """
    Create a boto3 S3 client. No requests are sent.

    Args:
        credentials: Resolved credentials (anonymous requests are unsigned)
        region: AWS region name
        use_embedded_cert: Verify TLS against the CA bundle shipped with
            certifi instead of the system trust store

    Returns:
        boto3 S3 client
    """
    client_kwargs: dict[str, Any] = {"region_name": region}

    if credentials.anonymous:
        client_kwargs["config"] = Config(signature_version=UNSIGNED)
    else:
        client_kwargs["aws_access_key_id"] = credentials.access_key
        client_kwargs["aws_secret_access_key"] = credentials.secret_key
        client_kwargs["aws_session_token"] = credentials.session_token

    if use_embedded_cert:
        client_kwargs["verify"] = certifi.where()

    logger.debug(
        "Creating S3 client",
        region=region,
        credentials_source=credentials.source,
        embedded_cert=use_embedded_cert,
    )
    return boto3.client("s3", **client_kwargs)


class S3ObjectStore(ObjectStore):
    """Object store backed by Amazon S3."""

    def __init__(self, client: Any):
        """
        Initialize the S3 object store.

        Args:
            client: boto3 S3 client
        """
        self.client = client

    @classmethod
    def from_config(
        cls, config: FetcherConfig, credentials: Credentials
    ) -> "S3ObjectStore":
        """Create a store for a fetcher configuration."""
        client = build_s3_client(
            credentials,
            region=config.region or DEFAULT_REGION,
            use_embedded_cert=config.use_embedded_cert,
        )
        return cls(client)

    def head_object(self, bucket: str, key: str) -> ObjectMetadata:
        response = self.client.head_object(Bucket=bucket, Key=key)
        return ObjectMetadata(
            change_token=response.get("ETag", ""),
            content_encoding=response.get("ContentEncoding"),
        )

    def get_object(self, bucket: str, key: str) -> ObjectContent:
        response = self.client.get_object(Bucket=bucket, Key=key)
        return ObjectContent(
            body=response["Body"],
            content_encoding=response.get("ContentEncoding"),
        )
