from dataclasses import FrozenInstanceError

import pytest

from restrictedfor.core.model import DecisionRequest, SimplePrincipal, Verdict


def test_principal_defaults_and_immutability():
    p = SimplePrincipal(id="u1")
    assert p.id == "u1"
    assert p.roles == frozenset()
    assert p.is_authenticated is True
    assert p.has_role("admin") is False
    with pytest.raises(FrozenInstanceError):
        p.id = "u2"  # type: ignore


def test_request_defaults_and_immutability():
    r = DecisionRequest()
    assert r.include_roles == frozenset()
    assert r.exclude_roles == frozenset()
    assert r.policy is None
    assert r.require_all_roles is False
    with pytest.raises(FrozenInstanceError):
        r.policy = "CanEdit"  # type: ignore


def test_verdict_reason_defaults_to_none():
    assert Verdict(True).reason is None
    assert Verdict(False, "missing_role").visible is False
