"""
Object Poller

Watches a single versioned object in an S3 bucket and yields its decoded
content each time the object changes.
"""

__version__ = "0.1.0"
__author__ = "Object Poller"
__email__ = "support@example.com"

from .config import FetcherConfig, Settings
from .exceptions import (
    ConfigurationError,
    DecodeError,
    FetchCancelledError,
    ObjectPollerError,
    ProbeError,
    RetrievalError,
)
from .polling import PollingFetcher

__all__ = [
    "ConfigurationError",
    "DecodeError",
    "FetchCancelledError",
    "FetcherConfig",
    "ObjectPollerError",
    "PollingFetcher",
    "ProbeError",
    "RetrievalError",
    "Settings",
]
