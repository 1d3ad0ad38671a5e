"""
DNS Bench - DNS resolver latency and reliability benchmarking.

Issues repeated queries against a set of resolvers and reports timing
statistics and success rates.
"""

__version__ = "1.0.0"

from .models import BenchmarkResult, QueryOutcome, ResolverRunResult, ResolverTarget, Statistics
from .query_engine import DNSQueryEngine
from .resolvers import parse_resolvers
from .runner import TestRunner
from .statistics import percentile, summarize

__all__ = [
    "__version__",
    "BenchmarkResult",
    "QueryOutcome",
    "ResolverRunResult",
    "ResolverTarget",
    "Statistics",
    "DNSQueryEngine",
    "TestRunner",
    "parse_resolvers",
    "percentile",
    "summarize",
]
