"""
Gzip decode fallback for polled objects.

Objects whose key ends in ``.gz`` are expected to be gzip archives. When the
response did not declare gzip content encoding the body is still compressed
and is decoded client-side.
"""

import gzip
import zlib
from typing import BinaryIO

from ..config import COMPRESSED_SUFFIX

DECODE_ERRORS = (OSError, EOFError, zlib.error)


def expects_compressed(key: str) -> bool:
    """Check if the object key names a gzip archive."""
    return key.endswith(COMPRESSED_SUFFIX)


class GzipStream(gzip.GzipFile):
    """Gzip reader that also closes the stream it reads from."""

    def __init__(self, source: BinaryIO):
        super().__init__(fileobj=source, mode="rb")
        self._source = source

    def close(self) -> None:
        try:
            super().close()
        finally:
            self._source.close()


def open_decompressed(body: BinaryIO) -> GzipStream:
    """
    Wrap ``body`` in a gzip reader.

    The gzip header is read immediately, so a body that is not gzip data
    fails here instead of on the caller's first read. On failure ``body`` is
    closed.

    Args:
        body: Raw object body

    Returns:
        Decompressing stream over ``body``

    Raises:
        OSError: If the body is not gzip data
        EOFError: If the body ends inside the gzip header
        zlib.error: If the compressed data is corrupt
    """
    reader = GzipStream(body)
    try:
        reader.peek(1)
    except DECODE_ERRORS:
        reader.close()
        raise
    return reader
