#!/usr/bin/env python3
"""
Check access to the configured S3 object.

This script sends a single HEAD request for the object configured through
the environment (S3_BUCKET, S3_KEY, ...) and prints what the poller would see.
"""

import sys
from pathlib import Path

# Add the src directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from object_poller.config import get_settings
from object_poller.exceptions import ObjectPollerError
from object_poller.polling.decoding import expects_compressed
from object_poller.polling.fetcher import PollingFetcher


def check_s3_object() -> bool:
    """Probe the configured object once."""
    print("🔍 Checking S3 object...")

    try:
        settings = get_settings()
        fetcher = PollingFetcher(settings.fetcher_config)
        fetcher.initialize()

        print("📋 Configuration:")
        print(f"   Bucket: {fetcher.config.bucket}")
        print(f"   Key: {fetcher.config.key}")
        print(f"   Region: {fetcher.region}")
        print(f"   Credentials: {fetcher.credentials.source}")
        print(f"   Embedded cert: {fetcher.config.use_embedded_cert}")

        store = fetcher.store_factory(fetcher.config, fetcher.credentials)
        metadata = store.head_object(fetcher.config.bucket, fetcher.config.key)

        print(f"✅ ETag: {metadata.change_token}")
        print(f"   Content-Encoding: {metadata.content_encoding or '-'}")
        if expects_compressed(fetcher.config.key):
            if "gzip" in (metadata.content_encoding or ""):
                print("   Gzip handled by transport, no client-side decoding")
            else:
                print("   Gzip will be decoded client-side")
        return True

    except ObjectPollerError as e:
        print(f"❌ Configuration error: {e}")
        return False
    except Exception as e:
        print(f"❌ HEAD request failed: {e}")
        return False


if __name__ == "__main__":
    print("🚀 Object Poller - S3 Object Check")
    print("=" * 50)

    success = check_s3_object()
    sys.exit(0 if success else 1)
