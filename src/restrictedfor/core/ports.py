from __future__ import annotations

from typing import Any, Awaitable, Dict, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class Principal(Protocol):
    """Identity of the current request, as seen by the decider."""

    @property
    def is_authenticated(self) -> bool: ...

    def has_role(self, name: str) -> bool: ...


class PrincipalAccessor(Protocol):
    """Returns the principal for a host context (request, template context...), or None."""

    def __call__(self, host_ctx: Any) -> Optional[Principal]: ...


class PolicyEvaluator(Protocol):
    """Evaluates a named policy for a principal. May be sync or async."""

    def __call__(self, principal: Principal, policy: str) -> Union[bool, Awaitable[bool]]: ...


class DecisionLogSink(Protocol):
    def log(self, payload: Dict[str, Any]) -> Union[None, Awaitable[None]]: ...


class MetricsSink(Protocol):
    def inc(self, name: str, labels: Dict[str, str] | None = None) -> Union[None, Awaitable[None]]: ...


__all__ = [
    "Principal",
    "PrincipalAccessor",
    "PolicyEvaluator",
    "DecisionLogSink",
    "MetricsSink",
]
