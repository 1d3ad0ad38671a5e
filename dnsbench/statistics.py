"""
Statistical analysis engine for DNS benchmark results.

Calculates per-resolver statistics:
- Basic stats: min, max, average, median
- Percentiles: p95 by linear interpolation between closest ranks
- Reliability: success rate and distinct error messages
- Cross-resolver rankings
"""

from typing import Iterable, Optional, Sequence

import numpy as np

from .models import QueryOutcome, ResolverRunResult, Statistics


def percentile(sorted_values: Sequence[float], p: float) -> Optional[float]:
    """
    Percentile of an ascending sequence.

    Uses linear interpolation between the closest ranks, i.e. position
    ``(p / 100) * (n - 1)``. Returns None for an empty sequence.
    """
    if len(sorted_values) == 0:
        return None
    if p <= 0:
        return float(sorted_values[0])
    if p >= 100:
        return float(sorted_values[-1])
    return float(np.percentile(np.asarray(sorted_values, dtype=float), p, method="linear"))


def unique_errors(outcomes: Iterable[QueryOutcome]) -> tuple[str, ...]:
    """Distinct error messages in order of first occurrence."""
    seen: dict[str, None] = {}
    for outcome in outcomes:
        if outcome.error is not None and outcome.error not in seen:
            seen[outcome.error] = None
    return tuple(seen)


def summarize(outcomes: Sequence[QueryOutcome]) -> Statistics:
    """
    Calculate aggregated statistics for one resolver.

    Only successful outcomes contribute to the latency figures; with no
    successes they are all left as None.
    """
    successful = [o for o in outcomes if o.is_success]
    errors = unique_errors(outcomes)

    if not successful:
        return Statistics(
            count=len(outcomes),
            success_count=0,
            errors=errors,
        )

    latencies = np.sort(np.array([o.elapsed_ms for o in successful], dtype=float))

    return Statistics(
        count=len(outcomes),
        success_count=len(successful),
        min_ms=float(latencies[0]),
        max_ms=float(latencies[-1]),
        avg_ms=float(np.mean(latencies)),
        median_ms=percentile(latencies, 50),
        p95_ms=percentile(latencies, 95),
        errors=errors,
    )


class StatisticsEngine:
    """Cross-resolver comparisons built on per-resolver statistics."""

    @staticmethod
    def compare_resolvers(
        results: list[ResolverRunResult],
    ) -> dict:
        """
        Compare multiple resolvers and determine rankings.

        Args:
            results: Per-resolver run results

        Returns:
            Dictionary with rankings, the winner and, per other resolver,
            the share of its average latency the winner saves (percent)
        """
        valid = [r for r in results if r.stats.success_count > 0]

        if not valid:
            return {"rankings": {}, "winner": None, "improvements": {}}

        by_latency = sorted(valid, key=lambda r: r.stats.avg_ms)
        by_reliability = sorted(valid, key=lambda r: r.stats.success_rate, reverse=True)

        winner = by_latency[0]

        improvements = {}
        for result in by_latency[1:]:
            if result.stats.avg_ms > 0:
                improvement = ((result.stats.avg_ms - winner.stats.avg_ms) / result.stats.avg_ms) * 100
                improvements[result.target.name] = improvement

        return {
            "rankings": {
                "by_latency": [(r.target.name, r.stats.avg_ms) for r in by_latency],
                "by_reliability": [(r.target.name, r.stats.success_rate) for r in by_reliability],
            },
            "winner": winner,
            "improvements": improvements,
        }
