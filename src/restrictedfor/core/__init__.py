from .decider import VisibilityDecider, decide_async, decide_sync
from .model import DecisionRequest, SimplePrincipal, Verdict
from .roles import has_all, has_any, parse_roles

__all__ = [
    "VisibilityDecider",
    "decide_async",
    "decide_sync",
    "DecisionRequest",
    "SimplePrincipal",
    "Verdict",
    "parse_roles",
    "has_any",
    "has_all",
]
