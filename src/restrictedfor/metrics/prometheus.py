from __future__ import annotations

from typing import Any, Dict, Optional

try:
    from prometheus_client import Counter  # type: ignore
except Exception:  # pragma: no cover
    Counter = None  # type: ignore


class PrometheusMetrics:
    """Prometheus-based metrics sink.

    Exposes:
      - restricted_for_verdicts_total{visible="true|false", reason="..."}

    Pass a ``registry`` to keep the counter out of the default global registry.
    """

    _counter: Optional[Any]

    def __init__(self, registry: Any = None) -> None:
        self._counter = None

        if Counter is None:  # pragma: no cover
            return

        kwargs: Dict[str, Any] = {}
        if registry is not None:
            kwargs["registry"] = registry
        self._counter = Counter(
            "restricted_for_verdicts_total",
            "Total restricted-for verdicts by visibility and reason.",
            labelnames=("visible", "reason"),
            **kwargs,
        )

    # -- MetricsSink ------------------------------------------------------------

    def inc(self, name: str, labels: Dict[str, str] | None = None) -> None:
        """Increment the verdict counter.

        The *name* parameter is part of the sink protocol but ignored; this sink
        always increments ``restricted_for_verdicts_total``.
        """
        if self._counter is None:  # pragma: no cover
            return
        labels = labels or {}
        try:
            self._counter.labels(
                visible=labels.get("visible", "unknown"),
                reason=labels.get("reason", "none"),
            ).inc()
        except Exception:  # pragma: no cover
            # never raise from metrics path
            pass
