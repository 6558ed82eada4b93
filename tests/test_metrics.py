from __future__ import annotations

from s3roundtrip.infrastructure.metrics import MetricsStore


def test_snapshot_includes_counters_and_timestamps() -> None:
    store = MetricsStore()
    store.incr('bytes_uploaded', 11)
    store.incr('bytes_uploaded', 4)

    snapshot = store.snapshot()

    assert snapshot['bytes_uploaded'] == 15
    assert 'run_started_ts' in snapshot
    assert store.get('missing') == 0
