from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional


@dataclass(frozen=True)
class SimplePrincipal:
    """Minimal principal for hosts that do not provide one.

    Anything exposing ``is_authenticated`` and ``has_role(name)`` can be used
    instead; see :class:`restrictedfor.core.ports.Principal`.
    """

    id: str
    roles: FrozenSet[str] = field(default_factory=frozenset)
    is_authenticated: bool = True

    def has_role(self, name: str) -> bool:
        return name in self.roles


@dataclass(frozen=True)
class DecisionRequest:
    """Attributes of one ``restricted-for`` element, already parsed."""

    include_roles: FrozenSet[str] = field(default_factory=frozenset)
    exclude_roles: FrozenSet[str] = field(default_factory=frozenset)
    policy: Optional[str] = None
    require_all_roles: bool = False


@dataclass(frozen=True)
class Verdict:
    visible: bool
    reason: Optional[str] = None  # which check hid the content; None when visible


__all__ = ["SimplePrincipal", "DecisionRequest", "Verdict"]
