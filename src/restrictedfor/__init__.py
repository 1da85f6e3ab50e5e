from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from . import adapters, core
from .core.decider import VisibilityDecider, decide_async, decide_sync
from .core.model import DecisionRequest, SimplePrincipal, Verdict
from .core.roles import parse_roles


def _detect_version() -> str:
    if version is None:
        return "0.1.0"
    try:
        return version("restricted-for")
    except PackageNotFoundError:
        return "0.1.0"


__version__ = _detect_version()

__all__ = [
    "VisibilityDecider",
    "decide_async",
    "decide_sync",
    "DecisionRequest",
    "SimplePrincipal",
    "Verdict",
    "parse_roles",
    "core",
    "adapters",
    "__version__",
]
