"""Counters, gauges and timings for the directory, logged and optionally sent to StatsD."""

from __future__ import annotations

import logging
from typing import Any

from statsd import StatsClient

from company_directory.config import settings

logger = logging.getLogger("company_directory.metrics")


class MetricsReporter:
    def __init__(self) -> None:
        self._disabled = settings.metrics_disable
        self._namespace = settings.metrics_namespace or "directory"
        self._statsd: StatsClient | None = None
        if settings.metrics_backend.lower() == "statsd" and not self._disabled:
            try:
                self._statsd = StatsClient(
                    host=settings.metrics_statsd_host,
                    port=settings.metrics_statsd_port,
                    prefix=self._namespace,
                )
            except OSError as exc:  # pragma: no cover - unresolvable statsd host
                logger.warning("metrics.statsd_unavailable", extra={"error": str(exc)})

    def timing(self, metric: str, value_ms: float, *, tags: dict[str, Any] | None = None) -> None:
        self._emit("timing", metric, value_ms, tags)

    def gauge(self, metric: str, value: float, *, tags: dict[str, Any] | None = None) -> None:
        self._emit("gauge", metric, value, tags)

    def increment(
        self, metric: str, value: float = 1.0, *, tags: dict[str, Any] | None = None
    ) -> None:
        self._emit("counter", metric, value, tags)

    def _emit(self, metric_type: str, metric: str, value: float, tags: dict[str, Any] | None) -> None:
        if self._disabled:
            return
        logger.debug(
            "directory.metric",
            extra={
                "metrics": {
                    "metric": f"{self._namespace}.{metric}",
                    "value": round(float(value), 4),
                    "type": metric_type,
                    "tags": tags or {},
                }
            },
        )
        if self._statsd is None:
            return
        try:
            if metric_type == "timing":
                self._statsd.timing(metric, value)
            elif metric_type == "gauge":
                self._statsd.gauge(metric, value)
            else:
                self._statsd.incr(metric, value)
        except OSError as exc:  # pragma: no cover - socket failures
            logger.warning("metrics.backend_error", extra={"metric": metric, "error": type(exc).__name__})


metrics = MetricsReporter()
