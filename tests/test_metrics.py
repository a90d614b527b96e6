"""
Tests for fetcher metrics.
"""

from object_poller.polling.metrics import FetchMetrics


def test_counters():
    metrics = FetchMetrics()

    metrics.record_probe(success=True)
    metrics.record_probe(success=False)
    metrics.record_unchanged()
    metrics.record_retrieval('"v1"', success=True)
    metrics.record_retrieval('"v2"', success=False)
    metrics.record_decode(success=False)

    assert metrics.probes == 2
    assert metrics.probe_failures == 1
    assert metrics.unchanged == 1
    assert metrics.retrievals == 2
    assert metrics.retrieval_failures == 1
    assert metrics.updates == 1
    assert metrics.decode_failures == 1
    assert metrics.last_change_token == '"v1"'
    assert metrics.last_update_time is not None


def test_to_dict():
    metrics = FetchMetrics()
    assert metrics.to_dict()["last_update_time"] is None

    metrics.record_retrieval("etag", success=True)
    data = metrics.to_dict()

    assert data["updates"] == 1
    assert isinstance(data["last_update_time"], str)
