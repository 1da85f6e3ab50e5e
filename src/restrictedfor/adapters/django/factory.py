from __future__ import annotations

import importlib
import logging
from functools import lru_cache
from typing import Any, Callable

from django.conf import settings

from ...core.decider import VisibilityDecider
from .principal import context_principal, has_perm_evaluator

logger = logging.getLogger("restrictedfor.adapters.django")


def _load_dotted(path: str) -> Callable[..., Any]:
    module_name, _, attr = path.rpartition(".")
    if not module_name:
        raise ImportError(f"Invalid dotted path: {path!r}")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ImportError(f"{module_name!r} has no attribute {attr!r}") from e


def default_decider() -> VisibilityDecider:
    """Decider using Django groups as roles and ``user.has_perm`` for policies."""
    return VisibilityDecider(context_principal, has_perm_evaluator)


@lru_cache(maxsize=1)
def get_decider() -> VisibilityDecider:
    """Return the process-wide decider.

    Built once from ``settings.RESTRICTED_FOR_DECIDER_FACTORY`` (a dotted path to a
    zero-argument callable) or :func:`default_decider`. Call ``get_decider.cache_clear()``
    after changing the setting.
    """
    path = getattr(settings, "RESTRICTED_FOR_DECIDER_FACTORY", None)
    if not path:
        return default_decider()
    factory = _load_dotted(path)
    decider = factory()
    logger.info("restricted_for: decider loaded from %s", path)
    return decider


__all__ = ["default_decider", "get_decider"]
