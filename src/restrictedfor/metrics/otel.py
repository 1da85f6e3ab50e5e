from __future__ import annotations

from typing import Any, Dict, Optional

try:
    from opentelemetry.metrics import get_meter  # type: ignore
except Exception:  # pragma: no cover
    get_meter = None  # type: ignore


class OpenTelemetryMetrics:
    """OpenTelemetry-based metrics sink.

    Creates a ``restricted_for_verdicts_total`` counter with ``visible`` and
    ``reason`` attributes on the ``restrictedfor.metrics`` meter.
    """

    _counter: Optional[Any]

    def __init__(self, meter: Any = None) -> None:
        self._counter = None

        if meter is None:
            if get_meter is None:  # pragma: no cover
                return
            meter = get_meter("restrictedfor.metrics")
        try:
            self._counter = meter.create_counter(
                name="restricted_for_verdicts_total",
                description="Total restricted-for verdicts by visibility and reason.",
            )
        except Exception:  # pragma: no cover
            self._counter = None

    # -- MetricsSink ------------------------------------------------------------

    def inc(self, name: str, labels: Dict[str, str] | None = None) -> None:
        if self._counter is None:  # pragma: no cover
            return
        labels = labels or {}
        try:
            self._counter.add(
                1,
                {
                    "visible": labels.get("visible", "unknown"),
                    "reason": labels.get("reason", "none"),
                },
            )
        except Exception:  # pragma: no cover
            pass
