from restrictedfor import DecisionRequest, SimplePrincipal, VisibilityDecider, parse_roles

POLICIES = {"CanEdit": lambda p: p.has_role("editor") or p.has_role("admin")}


def evaluate_policy(principal, name: str) -> bool:
    rule = POLICIES.get(name)
    return bool(rule and rule(principal))


def main() -> None:
    decider = VisibilityDecider(lambda ctx: ctx.get("user"), evaluate_policy)
    request = DecisionRequest(
        include_roles=parse_roles("admin, editor"),
        exclude_roles=parse_roles("suspended"),
        policy="CanEdit",
    )
    user = SimplePrincipal(id="u1", roles=frozenset({"editor"}))

    print(decider.evaluate_sync(user, request))  # Verdict(visible=True, reason=None)
    print(repr(decider.render_sync({"user": None}, request, "<a>Edit</a>")))  # ''


if __name__ == "__main__":
    main()
