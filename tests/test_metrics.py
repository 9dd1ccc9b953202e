from __future__ import annotations

from company_directory.config import settings
from company_directory.observability import metrics as metrics_module


class _RecordingStatsClient:
    def __init__(self, *, host: str, port: int, prefix: str) -> None:
        self.prefix = prefix
        self.calls: list[tuple[str, str, float]] = []

    def timing(self, metric, value):
        self.calls.append(("timing", metric, value))

    def gauge(self, metric, value):
        self.calls.append(("gauge", metric, value))

    def incr(self, metric, value):
        self.calls.append(("incr", metric, value))


def test_statsd_backend_forwards_each_metric_type(monkeypatch):
    monkeypatch.setattr(metrics_module, "StatsClient", _RecordingStatsClient)
    monkeypatch.setattr(settings, "metrics_backend", "statsd")
    reporter = metrics_module.MetricsReporter()

    reporter.increment("cache.hit")
    reporter.gauge("snapshot.size", 20)
    reporter.timing("refresh.latency_ms", 12.5)

    statsd = reporter._statsd
    assert statsd.prefix == "directory"
    assert statsd.calls == [
        ("incr", "cache.hit", 1.0),
        ("gauge", "snapshot.size", 20),
        ("timing", "refresh.latency_ms", 12.5),
    ]


def test_disabled_reporter_emits_nothing(monkeypatch):
    monkeypatch.setattr(metrics_module, "StatsClient", _RecordingStatsClient)
    monkeypatch.setattr(settings, "metrics_backend", "statsd")
    monkeypatch.setattr(settings, "metrics_disable", True)
    reporter = metrics_module.MetricsReporter()

    reporter.increment("cache.hit")

    assert reporter._statsd is None
