import asyncio

import pytest

from restrictedfor.core.decider import VisibilityDecider
from restrictedfor.core.model import DecisionRequest, SimplePrincipal


class SyncMetrics:
    def __init__(self):
        self.inc_calls = []

    def inc(self, name, labels=None):
        self.inc_calls.append((name, labels))


class AsyncMetrics(SyncMetrics):
    async def inc(self, name, labels=None):
        await asyncio.sleep(0)
        self.inc_calls.append((name, labels))


class SyncLoggerSink:
    def __init__(self):
        self.payloads = []

    def log(self, payload):
        self.payloads.append(payload)


class AsyncLoggerSink(SyncLoggerSink):
    async def log(self, payload):
        await asyncio.sleep(0)
        self.payloads.append(payload)


class Broken:
    def inc(self, name, labels=None):
        raise RuntimeError("metrics down")

    def log(self, payload):
        raise RuntimeError("log down")


def _decider(**kw):
    return VisibilityDecider(lambda ctx: ctx, lambda p, name: name == "ok", **kw)


REQ = DecisionRequest(include_roles=frozenset({"admin"}), policy="ok")


def test_sync_sinks_receive_verdicts():
    metrics, sink = SyncMetrics(), SyncLoggerSink()
    d = _decider(metrics=metrics, logger_sink=sink)

    d.evaluate_sync(SimplePrincipal(id="u1", roles=frozenset({"user"})), REQ)

    assert metrics.inc_calls == [
        ("restricted_for_verdicts_total", {"visible": "false", "reason": "missing_role"})
    ]
    payload = sink.payloads[-1]
    assert payload["visible"] is False
    assert payload["reason"] == "missing_role"
    assert payload["principal"] == "u1"
    assert payload["policy"] == "ok"
    assert payload["include_roles"] == ["admin"]
    assert payload["exclude_roles"] == []


def test_payload_logs_stripped_policy_and_none_for_blank():
    sink = SyncLoggerSink()
    d = _decider(logger_sink=sink)
    principal = SimplePrincipal(id="u1", roles=frozenset({"admin"}))

    d.evaluate_sync(principal, DecisionRequest(policy="  ok "))
    d.evaluate_sync(principal, DecisionRequest(policy="   "))

    assert [p["policy"] for p in sink.payloads] == ["ok", None]


@pytest.mark.asyncio
async def test_async_sinks_are_awaited():
    metrics, sink = AsyncMetrics(), AsyncLoggerSink()
    d = _decider(metrics=metrics, logger_sink=sink)

    v = await d.evaluate_async(SimplePrincipal(id="u1", roles=frozenset({"admin"})), REQ)

    assert v.visible is True
    assert metrics.inc_calls[-1][1] == {"visible": "true", "reason": "none"}
    assert sink.payloads[-1]["visible"] is True


def test_async_sinks_on_sync_path():
    metrics, sink = AsyncMetrics(), AsyncLoggerSink()
    d = _decider(metrics=metrics, logger_sink=sink)
    d.evaluate_sync(None, REQ)
    assert metrics.inc_calls and sink.payloads
    assert sink.payloads[-1]["principal"] is None


def test_sink_failures_do_not_break_rendering():
    d = _decider(metrics=Broken(), logger_sink=Broken())
    p = SimplePrincipal(id="u1", roles=frozenset({"admin"}))
    assert d.render_sync(p, REQ, "content") == "content"


@pytest.mark.asyncio
async def test_sink_failures_do_not_break_async_rendering():
    d = _decider(metrics=Broken(), logger_sink=Broken())
    p = SimplePrincipal(id="u1", roles=frozenset({"admin"}))
    assert await d.render_async(p, REQ, "content") == "content"
