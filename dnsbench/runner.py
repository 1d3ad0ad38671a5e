"""
Test runner for DNS benchmarking.

Orchestrates test execution:
- Sequential queries per resolver, in issuance order
- Cold (random subdomain) or warm (fixed name) workloads
- Optional bounded concurrency across resolvers
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

from .exceptions import ConfigurationError
from .models import (
    BenchmarkResult,
    QueryOutcome,
    ResolverRunResult,
    ResolverTarget,
)
from .query_engine import DNSQueryEngine, record_type_for_network
from .statistics import summarize
from .workload import WorkloadGenerator


logger = logging.getLogger(__name__)

# Type for progress callback
ProgressCallback = Callable[[str, int, int], None]


class TestRunner:
    """
    Orchestrates DNS benchmark tests.

    Every resolver gets the same number of queries against the same
    base domain so results are comparable.
    """

    __test__ = False

    def __init__(
        self,
        targets: list[ResolverTarget],
        timeout: float = 1.5,
        network: str = "ip4",
        engine: Optional[DNSQueryEngine] = None,
    ):
        """
        Initialize the test runner.

        Args:
            targets: Resolvers to benchmark, in report order
            timeout: Per-query timeout in seconds
            network: ip4 (A records) or ip6 (AAAA records)
            engine: Query engine to use (default: UDP engine with ``timeout``)
        """
        if not targets:
            raise ConfigurationError("No resolvers provided.")
        self.targets = targets
        self.timeout = timeout
        self.network = network
        self.record_type = record_type_for_network(network)
        self.engine = engine or DNSQueryEngine(timeout=timeout)

    async def _run_resolver(
        self,
        target: ResolverTarget,
        domain: str,
        count: int,
        cold: bool,
        progress: Callable[[str], None],
    ) -> ResolverRunResult:
        """Run ``count`` sequential queries against one resolver."""
        workload = WorkloadGenerator(domain, cache_bypass=cold)
        outcomes: list[QueryOutcome] = []

        for run in range(count):
            outcome = await self.engine.query(
                target,
                workload.next_query_name(),
                self.record_type,
            )
            outcomes.append(outcome)
            progress(f"{target.name}: query {run + 1}/{count}")

        stats = summarize(outcomes)
        logger.info(
            "%s: %d/%d queries succeeded",
            target.name,
            stats.success_count,
            stats.count,
        )
        return ResolverRunResult(target=target, outcomes=outcomes, stats=stats)

    async def run(
        self,
        domain: str = "example.com",
        count: int = 10,
        cold: bool = False,
        concurrency: int = 1,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> BenchmarkResult:
        """
        Run the benchmark against every resolver.

        Args:
            domain: Base query name
            count: Queries per resolver
            cold: Use a random subdomain per query to bypass caches
            concurrency: Resolvers benchmarked at the same time (1 = sequential)
            progress_callback: Optional callback for progress updates

        Returns:
            BenchmarkResult with one entry per resolver, in input order
        """
        if count < 1:
            raise ConfigurationError("Query count must be at least 1.", details={"count": count})
        if concurrency < 1:
            raise ConfigurationError("Concurrency must be at least 1.", details={"concurrency": concurrency})

        started_at = datetime.now()
        total = len(self.targets) * count
        completed = 0

        def progress(message: str) -> None:
            nonlocal completed
            completed += 1
            if progress_callback:
                progress_callback(message, completed, total)

        semaphore = asyncio.Semaphore(concurrency)

        async def limited_run(target: ResolverTarget) -> ResolverRunResult:
            async with semaphore:
                return await self._run_resolver(target, domain, count, cold, progress)

        # gather keeps input order regardless of completion order
        results = await asyncio.gather(*(limited_run(t) for t in self.targets))

        return BenchmarkResult(
            started_at=started_at,
            completed_at=datetime.now(),
            domain=domain,
            count=count,
            timeout=self.timeout,
            network=self.network,
            cold=cold,
            results=list(results),
        )

    def run_benchmark(self, **kwargs) -> BenchmarkResult:
        """Synchronous wrapper around :meth:`run`."""
        return asyncio.run(self.run(**kwargs))
