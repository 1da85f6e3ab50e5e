from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Dict, Optional, Union

from .helpers import maybe_await, run_sync
from .model import DecisionRequest, Verdict
from .ports import DecisionLogSink, MetricsSink, Principal, PolicyEvaluator, PrincipalAccessor
from .roles import has_all, has_any

logger = logging.getLogger("restrictedfor.core.decider")

# Reasons reported on hidden verdicts
UNAUTHENTICATED = "unauthenticated"
POLICY_DENIED = "policy_denied"
POLICY_ERROR = "policy_error"
EXCLUDED_ROLE = "excluded_role"
MISSING_ROLE = "missing_role"

VISIBLE = Verdict(True)

Content = Union[str, Callable[[], Any]]


def _policy_name(request: DecisionRequest) -> str:
    return (request.policy or "").strip()


def _policy_error(policy: str) -> Verdict:
    logger.warning("restricted-for: policy %r evaluation failed; hiding content", policy, exc_info=True)
    return Verdict(False, POLICY_ERROR)


def _check_roles(principal: Principal, request: DecisionRequest) -> Verdict:
    # Exclusion is checked first and always wins over inclusion.
    if request.exclude_roles and has_any(principal, request.exclude_roles):
        return Verdict(False, EXCLUDED_ROLE)

    if request.include_roles:
        check = has_all if request.require_all_roles else has_any
        if not check(principal, request.include_roles):
            return Verdict(False, MISSING_ROLE)

    return VISIBLE


async def decide_async(
    principal: Optional[Principal],
    request: DecisionRequest,
    policy_evaluator: PolicyEvaluator,
    *,
    raise_on_evaluator_error: bool = False,
) -> Verdict:
    """Decide whether the content guarded by *request* is visible to *principal*.

    Checks run in order and the first failing one wins:

      1. the principal must be present and authenticated;
      2. the named policy, if any, must be satisfied;
      3. the principal must hold none of the excluded roles;
      4. the principal must hold any (or, with ``require_all_roles``, all)
         of the included roles, if any are listed.

    A failing policy evaluator hides the content unless
    ``raise_on_evaluator_error`` is set.
    """
    if principal is None or not getattr(principal, "is_authenticated", False):
        return Verdict(False, UNAUTHENTICATED)

    policy = _policy_name(request)
    if policy:
        try:
            satisfied = await maybe_await(policy_evaluator(principal, policy))
        except Exception:
            if raise_on_evaluator_error:
                raise
            return _policy_error(policy)
        if not satisfied:
            return Verdict(False, POLICY_DENIED)

    return _check_roles(principal, request)


def decide_sync(
    principal: Optional[Principal],
    request: DecisionRequest,
    policy_evaluator: PolicyEvaluator,
    *,
    raise_on_evaluator_error: bool = False,
) -> Verdict:
    """Synchronous twin of :func:`decide_async`.

    No event loop is involved unless the evaluator returns an awaitable, so
    sync-only hosts (e.g. the Django ORM) can be queried from the checks.
    """
    if principal is None or not getattr(principal, "is_authenticated", False):
        return Verdict(False, UNAUTHENTICATED)

    policy = _policy_name(request)
    if policy:
        try:
            result = policy_evaluator(principal, policy)
            satisfied = run_sync(result) if inspect.isawaitable(result) else result
        except Exception:
            if raise_on_evaluator_error:
                raise
            return _policy_error(policy)
        if not satisfied:
            return Verdict(False, POLICY_DENIED)

    return _check_roles(principal, request)


class VisibilityDecider:
    """Decides visibility of ``restricted-for`` blocks.

    Collaborators are passed explicitly:

      - ``principal_accessor(host_ctx)`` returns the current principal (or None);
      - ``policy_evaluator(principal, policy)`` returns a bool or an awaitable bool.

    Optional ``logger_sink`` and ``metrics`` receive every verdict; their
    failures never reach the render path.
    """

    def __init__(
        self,
        principal_accessor: PrincipalAccessor,
        policy_evaluator: PolicyEvaluator,
        *,
        logger_sink: DecisionLogSink | None = None,
        metrics: MetricsSink | None = None,
        raise_on_evaluator_error: bool = False,
    ) -> None:
        if principal_accessor is None:
            raise ValueError("VisibilityDecider requires a principal_accessor")
        if policy_evaluator is None:
            raise ValueError("VisibilityDecider requires a policy_evaluator")
        self.principal_accessor = principal_accessor
        self.policy_evaluator = policy_evaluator
        self.logger_sink = logger_sink
        self.metrics = metrics
        self.raise_on_evaluator_error = bool(raise_on_evaluator_error)

    # -- decisions --------------------------------------------------------------

    def principal_for(self, host_ctx: Any) -> Optional[Principal]:
        return self.principal_accessor(host_ctx)

    async def evaluate_async(self, principal: Optional[Principal], request: DecisionRequest) -> Verdict:
        verdict = await decide_async(
            principal,
            request,
            self.policy_evaluator,
            raise_on_evaluator_error=self.raise_on_evaluator_error,
        )
        for sink, method, args in self._observations(principal, request, verdict):
            try:
                await maybe_await(getattr(sink, method)(*args))
            except Exception:
                logger.debug("restricted-for: %s sink failed", method, exc_info=True)
        return verdict

    def evaluate_sync(self, principal: Optional[Principal], request: DecisionRequest) -> Verdict:
        verdict = decide_sync(
            principal,
            request,
            self.policy_evaluator,
            raise_on_evaluator_error=self.raise_on_evaluator_error,
        )
        for sink, method, args in self._observations(principal, request, verdict):
            try:
                result = getattr(sink, method)(*args)
                if inspect.isawaitable(result):
                    run_sync(result)
            except Exception:
                logger.debug("restricted-for: %s sink failed", method, exc_info=True)
        return verdict

    # -- rendering --------------------------------------------------------------

    async def render_async(self, host_ctx: Any, request: DecisionRequest, content: Content) -> Any:
        """Return *content* unchanged when visible, ``""`` otherwise.

        *content* may be a zero-argument callable (sync or async); it is only
        called when the verdict is visible.
        """
        principal = await maybe_await(self.principal_for(host_ctx))
        verdict = await self.evaluate_async(principal, request)
        if not verdict.visible:
            return ""
        if callable(content):
            return await maybe_await(content())
        return content

    def render_sync(self, host_ctx: Any, request: DecisionRequest, content: Content) -> Any:
        principal = self.principal_for(host_ctx)
        if inspect.isawaitable(principal):
            principal = run_sync(principal)
        verdict = self.evaluate_sync(principal, request)
        if not verdict.visible:
            return ""
        return content() if callable(content) else content

    # -- observability ----------------------------------------------------------

    def _observations(self, principal: Optional[Principal], request: DecisionRequest, verdict: Verdict):
        if self.metrics is not None:
            labels = {
                "visible": "true" if verdict.visible else "false",
                "reason": verdict.reason or "none",
            }
            yield self.metrics, "inc", ("restricted_for_verdicts_total", labels)
        if self.logger_sink is not None:
            yield self.logger_sink, "log", (_payload(principal, request, verdict),)


def _payload(principal: Optional[Principal], request: DecisionRequest, verdict: Verdict) -> Dict[str, Any]:
    return {
        "visible": verdict.visible,
        "reason": verdict.reason,
        "principal": getattr(principal, "id", None),
        "policy": _policy_name(request) or None,
        "include_roles": sorted(request.include_roles),
        "exclude_roles": sorted(request.exclude_roles),
        "require_all_roles": request.require_all_roles,
    }


__all__ = [
    "VisibilityDecider",
    "decide_async",
    "decide_sync",
    "UNAUTHENTICATED",
    "POLICY_DENIED",
    "POLICY_ERROR",
    "EXCLUDED_ROLE",
    "MISSING_ROLE",
]
