"""
Session state for a polling fetcher.

The session records the last seen change token, whether a poll has happened
yet and whether client-side gzip decoding may still be attempted. It belongs
to exactly one fetcher and is mutated only by that fetcher's ``fetch``.
"""

from enum import Enum

import structlog

logger = structlog.get_logger(__name__)


class DecodeState(str, Enum):
    """Client-side decode fallback state.

    ``DISABLED`` is terminal: once a decode attempt fails it is never tried
    again for the life of the fetcher.
    """

    UNTRIED = "untried"
    ACTIVE = "active"
    DISABLED = "disabled"


class FetcherSession:
    """Mutable polling state owned by a single fetcher."""

    def __init__(self) -> None:
        self.last_change_token = ""
        self.has_polled_before = False
        self.decode_state = DecodeState.UNTRIED

    def is_known_token(self, token: str) -> bool:
        """Check if ``token`` matches the last committed change token."""
        return token == self.last_change_token

    def commit_token(self, token: str) -> None:
        """Record ``token`` as seen."""
        self.last_change_token = token

    @property
    def decoding_enabled(self) -> bool:
        return self.decode_state is not DecodeState.DISABLED

    def mark_decoded(self) -> None:
        """Record a successful decode."""
        if self.decode_state is DecodeState.UNTRIED:
            self.decode_state = DecodeState.ACTIVE

    def disable_decoding(self) -> None:
        """Permanently disable decode fallback."""
        if self.decode_state is not DecodeState.DISABLED:
            logger.warning(
                "Disabling gzip decode fallback", previous_state=self.decode_state.value
            )
        self.decode_state = DecodeState.DISABLED

    def __repr__(self) -> str:
        return (
            f"FetcherSession(last_change_token={self.last_change_token!r}, "
            f"has_polled_before={self.has_polled_before}, "
            f"decode_state={self.decode_state.value})"
        )
