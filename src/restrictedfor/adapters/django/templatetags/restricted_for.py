from __future__ import annotations

from typing import Any, Dict, Optional

from django import template

from ..._common import coerce_bool, normalize_name, request_or_none
from ..factory import get_decider

register = template.Library()


class RestrictedForNode(template.Node):
    def __init__(self, attrs: Dict[str, Optional[Any]], nodelist: template.NodeList) -> None:
        self.attrs = attrs
        self.nodelist = nodelist

    def render(self, context: template.Context) -> str:
        values = {k: (v.resolve(context) if v is not None else None) for k, v in self.attrs.items()}
        request = request_or_none(values)
        if request is None:
            return ""
        return get_decider().render_sync(context, request, lambda: self.nodelist.render(context))



def _check_literal_flag(tag_name: str, expr: Any) -> None:
    # Quoted constants are resolved by compile_filter; numbers stay Variable literals.
    if expr.filters:
        return
    var = expr.var
    if isinstance(var, template.Variable):
        if var.literal is None:
            return
        var = var.literal
    try:
        coerce_bool(var)
    except ValueError as e:
        raise template.TemplateSyntaxError(f"{tag_name}: {e}") from e


@register.tag("restricted_for")
def do_restricted_for(parser: Any, token: Any) -> RestrictedForNode:
    """Render the enclosed block only for principals passing the checks.

    ``{% restricted_for include-roles="a,b" exclude-roles=x policy="app.change_doc" require-all-roles %}``
    """
    bits = token.split_contents()
    tag_name = bits.pop(0)
    attrs: Dict[str, Optional[Any]] = {}
    for bit in bits:
        name, sep, raw = bit.partition("=")
        try:
            key = normalize_name(name)
        except ValueError as e:
            raise template.TemplateSyntaxError(f"{tag_name}: {e}") from e
        if key in attrs:
            raise template.TemplateSyntaxError(f"{tag_name}: duplicate attribute {name!r}")
        attrs[key] = parser.compile_filter(raw) if sep else None
        if key == "require-all-roles" and attrs[key] is not None:
            _check_literal_flag(tag_name, attrs[key])

    nodelist = parser.parse(("endrestricted_for",))
    parser.delete_first_token()
    return RestrictedForNode(attrs, nodelist)
