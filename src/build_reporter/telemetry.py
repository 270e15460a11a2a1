"""Telemetry sink backed by Prometheus counters.

Metrics are created once per process and shared by every sink instance,
avoiding duplicate registration errors when several reporters exist.
"""

from __future__ import annotations

from typing import Any

from prometheus_client import REGISTRY, Counter

from build_reporter.logging_utils import create_reporter_logger

logger = create_reporter_logger("telemetry")

TRACKED_ERRORS_METRIC = "reporter_tracked_errors"

# Global metrics instances (created once, shared by all sinks)
_metrics: dict[str, Any] | None = None


def get_metrics() -> dict[str, Any]:
    """Get or create the shared metrics instances.

    Returns:
        Dictionary of metric instances keyed by metric name
    """
    global _metrics

    if _metrics is None:
        _metrics = _create_metrics()
        logger.debug("Telemetry metrics initialized", metrics=list(_metrics.keys()))

    return _metrics


def _create_metrics() -> dict[str, Any]:
    try:
        return {
            "tracked_errors_total": Counter(
                TRACKED_ERRORS_METRIC,
                "Error events recorded by the reporter",
                ["event"],
                registry=REGISTRY,
            ),
        }
    except ValueError as e:
        if "Duplicated timeseries" in str(e):
            logger.warning("Metrics already exist in registry, reusing existing collectors")
            return {"tracked_errors_total": REGISTRY._names_to_collectors[TRACKED_ERRORS_METRIC]}
        raise


class MetricsTelemetrySink:
    """Counts tracked error events and logs them."""

    def track_error(self, event_name: str, payload: dict[str, Any]) -> None:
        get_metrics()["tracked_errors_total"].labels(event=event_name).inc()
        logger.debug("Tracked error event", telemetry_event=event_name, payload=repr(payload))
