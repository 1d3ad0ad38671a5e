"""
Data models for DNS Bench.

Defines structured types for resolver targets, per-query outcomes,
statistics and benchmark outputs.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


DEFAULT_DNS_PORT = 53


class RecordType(Enum):
    """DNS record types to query."""
    A = "A"
    AAAA = "AAAA"


@dataclass(frozen=True)
class ResolverTarget:
    """A resolver to benchmark. The name is a display key only."""
    name: str
    host: str
    port: int = DEFAULT_DNS_PORT

    @property
    def address(self) -> str:
        """Host and port, with IPv6 literals bracketed."""
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class ResolverProfile:
    """A well-known public resolver."""
    name: str
    ipv4: str
    ipv6: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class QueryOutcome:
    """Result of a single resolution attempt."""
    elapsed_ms: float
    error: Optional[str] = None
    query_name: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """An outcome is a success iff no error was recorded."""
        return self.error is None


@dataclass(frozen=True)
class Statistics:
    """
    Summary of one resolver's outcomes.

    Latency fields are in milliseconds and are None when no query
    succeeded.
    """
    count: int
    success_count: int
    min_ms: Optional[float] = None
    max_ms: Optional[float] = None
    avg_ms: Optional[float] = None
    median_ms: Optional[float] = None
    p95_ms: Optional[float] = None
    errors: tuple[str, ...] = ()

    @property
    def failure_count(self) -> int:
        return self.count - self.success_count

    @property
    def success_rate(self) -> float:
        """Percentage of successful queries."""
        if self.count == 0:
            return 0.0
        return (self.success_count / self.count) * 100


@dataclass
class ResolverRunResult:
    """All outcomes for one resolver, in issuance order."""
    target: ResolverTarget
    outcomes: list[QueryOutcome]
    stats: Statistics


@dataclass
class BenchmarkResult:
    """Complete benchmark result for all resolvers."""
    started_at: datetime
    completed_at: datetime

    # Configuration used
    domain: str
    count: int
    timeout: float
    network: str
    cold: bool

    # Results per resolver, in input order
    results: list[ResolverRunResult] = field(default_factory=list)

    @property
    def duration_seconds(self) -> float:
        """Total benchmark duration in seconds."""
        return (self.completed_at - self.started_at).total_seconds()

    @property
    def mode(self) -> str:
        return "COLD" if self.cold else "WARM"
