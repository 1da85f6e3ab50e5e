from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from ..core.decider import VisibilityDecider
from ..core.model import SimplePrincipal
from .jinja2 import install

if TYPE_CHECKING:  # pragma: no cover
    from starlette.requests import HTTPConnection
    from starlette.templating import Jinja2Templates


def request_principal(request: "HTTPConnection") -> Optional[SimplePrincipal]:
    """Principal accessor for Starlette/FastAPI requests.

    Reads what ``starlette.middleware.authentication.AuthenticationMiddleware``
    stores in the scope: ``user`` for identity and ``auth.scopes`` for roles.
    Returns None when the middleware is not installed.
    """
    scope = getattr(request, "scope", None) or {}
    user = scope.get("user")
    if user is None:
        return None
    auth = scope.get("auth")
    roles = frozenset(getattr(auth, "scopes", None) or ())
    return SimplePrincipal(
        id=str(getattr(user, "display_name", "") or ""),
        roles=roles,
        is_authenticated=bool(getattr(user, "is_authenticated", False)),
    )


def template_principal(context: Any) -> Optional[SimplePrincipal]:
    """Principal accessor for template contexts holding the ``request``."""
    request = context.get("request")
    if request is None:
        return None
    return request_principal(request)


def install_templates(templates: "Jinja2Templates", decider: VisibilityDecider) -> "Jinja2Templates":
    """Enable ``{% restricted_for %}`` on a :class:`starlette.templating.Jinja2Templates`."""
    install(templates.env, decider)
    return templates


__all__ = ["request_principal", "template_principal", "install_templates"]
