from __future__ import annotations

from typing import Any, FrozenSet, Optional


class DjangoUserPrincipal:
    """Adapts a Django user to the principal protocol.

    Roles are the names of the user's groups, loaded once per principal.
    """

    def __init__(self, user: Any) -> None:
        self.user = user
        self._roles: Optional[FrozenSet[str]] = None

    @property
    def id(self) -> Optional[str]:
        pk = getattr(self.user, "pk", None)
        return str(pk) if pk is not None else None

    @property
    def is_authenticated(self) -> bool:
        return bool(getattr(self.user, "is_authenticated", False))

    @property
    def roles(self) -> FrozenSet[str]:
        if self._roles is None:
            groups = getattr(self.user, "groups", None)
            if groups is None:
                self._roles = frozenset()
            else:
                self._roles = frozenset(groups.values_list("name", flat=True))
        return self._roles

    def has_role(self, name: str) -> bool:
        return name in self.roles


def context_principal(context: Any) -> Optional[DjangoUserPrincipal]:
    """Principal accessor reading ``request.user`` (or ``user``) from a template context."""
    request = context.get("request")
    user = getattr(request, "user", None) if request is not None else None
    if user is None:
        user = context.get("user")
    if user is None:
        return None
    return DjangoUserPrincipal(user)


def has_perm_evaluator(principal: Any, policy: str) -> bool:
    """Policy evaluator mapping a policy name to a Django permission (``app_label.codename``)."""
    user = getattr(principal, "user", None)
    if user is None:
        return False
    return bool(user.has_perm(policy))


__all__ = ["DjangoUserPrincipal", "context_principal", "has_perm_evaluator"]
