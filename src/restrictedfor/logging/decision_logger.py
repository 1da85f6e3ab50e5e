from __future__ import annotations

import json
import logging
import random
from typing import Any, Dict


class DecisionLogger:
    """Decision log sink writing verdicts to the ``restrictedfor.audit`` logger.

    Args:
        sample_rate: fraction of verdicts to log, 0.0 to 1.0.
        level: logging level for emitted records.
        as_json: emit ``json.dumps(payload)`` instead of ``"decision <dict>"``.
        hidden_only: skip visible verdicts.
    """

    def __init__(
        self,
        *,
        sample_rate: float = 1.0,
        level: int = logging.INFO,
        as_json: bool = False,
        hidden_only: bool = False,
    ) -> None:
        self.sample_rate = max(0.0, min(1.0, float(sample_rate)))
        self.level = level
        self.as_json = as_json
        self.hidden_only = hidden_only
        self.logger = logging.getLogger("restrictedfor.audit")

    def log(self, payload: Dict[str, Any]) -> None:
        if self.hidden_only and payload.get("visible"):
            return
        if self.sample_rate <= 0.0:
            return
        if self.sample_rate < 1.0 and random.random() >= self.sample_rate:
            return

        if self.as_json:
            msg = json.dumps(payload, ensure_ascii=False, default=str)
        else:
            msg = f"decision {payload}"
        self.logger.log(self.level, msg)


__all__ = ["DecisionLogger"]
