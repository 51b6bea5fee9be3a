"""Tests for running metrics."""

from __future__ import annotations

import pytest

from ensresolver.services.metrics import MetricsRecorder


class TestMetricsRecorder:
    """Tests for counter bookkeeping and derived rates."""

    def test_empty_snapshot(self):
        """A fresh recorder should report zeros."""
        snapshot = MetricsRecorder().snapshot()

        assert snapshot.requests == 0
        assert snapshot.cache_hit_rate == 0.0
        assert snapshot.average_request_time_ms == 0.0

    def test_derived_rates(self):
        recorder = MetricsRecorder()
        for _ in range(4):
            recorder.record_request()
        recorder.record_hit()
        recorder.record_miss()
        recorder.record_miss()
        recorder.record_miss()
        recorder.record_latency(100.0)
        recorder.record_latency(300.0)

        snapshot = recorder.snapshot()

        assert snapshot.hits == 1
        assert snapshot.misses == 3
        assert snapshot.cache_hit_rate == pytest.approx(0.25)
        assert snapshot.total_time_ms == pytest.approx(400.0)
        assert snapshot.average_request_time_ms == pytest.approx(100.0)

    def test_errors_counted(self):
        recorder = MetricsRecorder()
        recorder.record_request()
        recorder.record_error()

        assert recorder.snapshot().errors == 1

    def test_disabled_recorder_ignores_everything(self):
        recorder = MetricsRecorder(enabled=False)
        recorder.record_request()
        recorder.record_hit()
        recorder.record_error()
        recorder.record_latency(50.0)

        snapshot = recorder.snapshot()

        assert snapshot.requests == 0
        assert snapshot.hits == 0
        assert snapshot.errors == 0
        assert snapshot.total_time_ms == 0.0

    def test_reset(self):
        recorder = MetricsRecorder()
        recorder.record_request()
        recorder.record_hit()

        recorder.reset()

        assert recorder.snapshot().requests == 0
        assert recorder.snapshot().hits == 0
