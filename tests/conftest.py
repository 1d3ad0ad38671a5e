"""
Pytest fixtures for dnsbench tests.

Nothing here touches the network: queries go through a scripted engine
that hands back prepared outcomes.
"""

from datetime import datetime

import pytest

from dnsbench.models import (
    BenchmarkResult,
    QueryOutcome,
    ResolverRunResult,
    ResolverTarget,
)
from dnsbench.statistics import summarize


class ScriptedEngine:
    """Stands in for DNSQueryEngine, replaying outcomes per resolver name."""

    def __init__(self, script, default=None):
        self.script = {name: list(outcomes) for name, outcomes in script.items()}
        self.default = default or QueryOutcome(elapsed_ms=1.0)
        self.calls = []

    async def query(self, target, query_name, record_type):
        self.calls.append((target.name, query_name, record_type))
        pending = self.script.get(target.name)
        if pending:
            outcome = pending.pop(0)
        else:
            outcome = self.default
        return QueryOutcome(
            elapsed_ms=outcome.elapsed_ms,
            error=outcome.error,
            query_name=query_name,
        )


def ok(ms):
    return QueryOutcome(elapsed_ms=float(ms))


def failed(ms, error="timeout after 1500ms"):
    return QueryOutcome(elapsed_ms=float(ms), error=error)


def make_run(name, outcomes, host="192.0.2.1"):
    return ResolverRunResult(
        target=ResolverTarget(name=name, host=host),
        outcomes=list(outcomes),
        stats=summarize(outcomes),
    )


@pytest.fixture
def targets():
    return [
        ResolverTarget("Cloudflare", "1.1.1.1"),
        ResolverTarget("Google", "8.8.8.8"),
        ResolverTarget("Quad9", "9.9.9.9"),
    ]


@pytest.fixture
def sample_result():
    """Two resolvers: one healthy, one with nothing but failures."""
    started = datetime(2024, 5, 1, 12, 0, 0)
    return BenchmarkResult(
        started_at=started,
        completed_at=datetime(2024, 5, 1, 12, 0, 3),
        domain="example.com",
        count=4,
        timeout=1.5,
        network="ip4",
        cold=False,
        results=[
            make_run("Fast", [ok(10), failed(1500.2), ok(20), failed(1500.4)]),
            make_run("Dead", [failed(1500, "NXDOMAIN from 192.0.2.9:53")] * 4, host="192.0.2.9"),
        ],
    )
