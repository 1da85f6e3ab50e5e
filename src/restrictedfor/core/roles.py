from __future__ import annotations

from typing import Any, FrozenSet, Iterable, Optional


def parse_roles(raw: Optional[str]) -> FrozenSet[str]:
    """Parse a comma-separated role list.

    Entries are trimmed and empty ones dropped, so ``" admin , , editor ,"``
    yields ``{"admin", "editor"}``. ``None`` and blank strings yield an empty set.
    """
    if raw is None or not raw.strip():
        return frozenset()
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


def has_any(principal: Any, roles: Iterable[str]) -> bool:
    """True if *principal* holds at least one of *roles*."""
    return any(principal.has_role(r) for r in roles)


def has_all(principal: Any, roles: Iterable[str]) -> bool:
    """True if *principal* holds every role in *roles* (vacuously true when empty)."""
    return all(principal.has_role(r) for r in roles)


__all__ = ["parse_roles", "has_any", "has_all"]
