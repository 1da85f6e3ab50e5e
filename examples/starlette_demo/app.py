import jinja2
from starlette.applications import Starlette
from starlette.authentication import AuthCredentials, AuthenticationBackend, SimpleUser
from starlette.middleware import Middleware
from starlette.middleware.authentication import AuthenticationMiddleware
from starlette.routing import Route
from starlette.templating import Jinja2Templates

from restrictedfor.adapters.starlette import install_templates, template_principal
from restrictedfor.core.decider import VisibilityDecider
from restrictedfor.logging import DecisionLogger

PAGE = """
<h1>Documents</h1>
{% restricted_for include-roles="editor, admin" exclude-roles="suspended" %}
  <a href="/docs/new">New document</a>
{% endrestricted_for %}
{% restricted_for policy="billing" %}
  <a href="/billing">Billing</a>
{% endrestricted_for %}
"""


class DemoHeaderAuth(AuthenticationBackend):
    """Demo-only: identity from X-User, roles from comma-separated X-Roles."""

    async def authenticate(self, conn):
        user = conn.headers.get("x-user")
        if not user:
            return None
        roles = [r.strip() for r in conn.headers.get("x-roles", "").split(",") if r.strip()]
        return AuthCredentials(roles), SimpleUser(user)


def billing_policy(principal, policy: str) -> bool:
    return policy == "billing" and principal.has_role("finance")


templates = Jinja2Templates(env=jinja2.Environment(loader=jinja2.DictLoader({"index.html": PAGE})))
install_templates(
    templates,
    VisibilityDecider(template_principal, billing_policy, logger_sink=DecisionLogger(as_json=True)),
)


async def index(request):
    return templates.TemplateResponse(request, "index.html")


app = Starlette(
    routes=[Route("/", index)],
    middleware=[Middleware(AuthenticationMiddleware, backend=DemoHeaderAuth())],
)
