from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..core.model import DecisionRequest
from ..core.roles import parse_roles

logger = logging.getLogger("restrictedfor.adapters")

# Attribute names as written on the element; underscores are accepted for
# template engines that cannot parse hyphenated keywords.
ATTRIBUTES = ("include-roles", "exclude-roles", "policy", "require-all-roles")

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off", ""}


def normalize_name(name: str) -> str:
    key = name.strip().lower().replace("_", "-")
    if key not in ATTRIBUTES:
        raise ValueError(
            f"Unknown restricted-for attribute {name!r}; expected one of {', '.join(ATTRIBUTES)}"
        )
    return key


def coerce_bool(value: Any) -> bool:
    """Coerce a ``require-all-roles`` value.

    ``None`` stands for a bare attribute (``<restricted-for require-all-roles>``) and means True.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Invalid boolean for require-all-roles: {value!r}")


def build_request(attrs: Mapping[str, Any]) -> DecisionRequest:
    """Build a :class:`DecisionRequest` from raw element attributes."""
    values = {normalize_name(k): v for k, v in attrs.items()}
    policy = values.get("policy")
    policy = str(policy).strip() if policy is not None else ""
    return DecisionRequest(
        include_roles=parse_roles(_as_text(values.get("include-roles"))),
        exclude_roles=parse_roles(_as_text(values.get("exclude-roles"))),
        policy=policy or None,
        require_all_roles=coerce_bool(values["require-all-roles"]) if "require-all-roles" in values else False,
    )


def request_or_none(attrs: Mapping[str, Any]) -> Optional[DecisionRequest]:
    """Like :func:`build_request`, but a malformed value yields None and a warning.

    Used at render time, where values bound from the template context must not
    break the page; callers hide the block on None.
    """
    try:
        return build_request(attrs)
    except ValueError as e:
        logger.warning("restricted-for: %s; hiding content", e)
        return None


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(str(v) for v in value)
    return str(value)


__all__ = ["ATTRIBUTES", "build_request", "coerce_bool", "normalize_name", "request_or_none"]
