"""
Polling system for the object poller.

This package contains the fetcher that turns a remote object into a stream of
content updates, along with its session state, pacing and decoding helpers.
"""

from .delay import CancellableDelay
from .fetcher import PollingFetcher
from .session import DecodeState, FetcherSession

__all__ = ["CancellableDelay", "DecodeState", "FetcherSession", "PollingFetcher"]
