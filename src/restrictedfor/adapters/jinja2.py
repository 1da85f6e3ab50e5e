from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

from jinja2 import nodes
from jinja2.ext import Extension

from ..core.decider import VisibilityDecider
from ._common import coerce_bool, normalize_name, request_or_none

logger = logging.getLogger(__name__)


class RestrictedForExtension(Extension):
    """Jinja2 extension providing the ``restricted_for`` block tag.

    Usage::

        {% restricted_for include-roles="admin, editor" policy="CanEdit" %}
          <a href="/edit">Edit</a>
        {% endrestricted_for %}

    Attribute names may be hyphenated or use underscores; ``require-all-roles``
    can be given bare. The decider is read from
    ``environment.restricted_for_decider`` (see :func:`install`) and receives the
    template context as host context. Works for sync and async environments.
    """

    tags = {"restricted_for"}

    def __init__(self, environment: Any) -> None:
        super().__init__(environment)
        environment.extend(restricted_for_decider=None)

    def parse(self, parser: Any) -> nodes.Node:
        lineno = next(parser.stream).lineno
        pairs: List[nodes.Pair] = []
        seen = set()

        while parser.stream.current.type != "block_end":
            if pairs:
                parser.stream.skip_if("comma")
            token = parser.stream.expect("name")
            parts = [token.value]
            while parser.stream.skip_if("sub"):
                parts.append(parser.stream.expect("name").value)
            key = "-".join(parts)
            try:
                name = normalize_name(key)
            except ValueError as e:
                parser.fail(str(e), token.lineno)
            if name in seen:
                parser.fail(f"restricted_for: duplicate attribute {key!r}", token.lineno)
            seen.add(name)

            if parser.stream.skip_if("assign"):
                value = parser.parse_expression()
            else:
                value = nodes.Const(None)
            if name == "require-all-roles" and isinstance(value, nodes.Const):
                try:
                    coerce_bool(value.value)
                except ValueError as e:
                    parser.fail(str(e), token.lineno)
            pairs.append(nodes.Pair(nodes.Const(key), value, lineno=token.lineno))

        body = parser.parse_statements(("name:endrestricted_for",), drop_needle=True)
        call = self.call_method("_render", [nodes.ContextReference(), nodes.Dict(pairs)])
        return nodes.CallBlock(call, [], [], body).set_lineno(lineno)

    def _render(self, context: Any, attrs: Dict[str, Any], caller: Callable[[], Any]) -> Any:
        decider = self.environment.restricted_for_decider
        if decider is None:
            raise RuntimeError(
                "restricted_for: no decider configured; call restrictedfor.adapters.jinja2.install()"
            )
        request = request_or_none(attrs)
        if request is None:
            return ""
        if self.environment.is_async:
            # Returned coroutine is awaited by the async template runtime; caller() is async there too.
            return decider.render_async(context, request, caller)
        return decider.render_sync(context, request, caller)


def install(environment: Any, decider: VisibilityDecider) -> Any:
    """Register the extension on *environment* and bind *decider* to it."""
    if RestrictedForExtension.identifier not in environment.extensions:
        environment.add_extension(RestrictedForExtension)
    environment.restricted_for_decider = decider
    logger.debug("restricted_for: decider installed on %r", environment)
    return environment


__all__ = ["RestrictedForExtension", "install"]
