"""
Query name generation for DNS benchmarking.

Warm mode repeats the base domain so resolver caching is part of what
is measured. Cold mode prepends a fresh random label to every query,
which forces the resolver to go upstream.
"""

import secrets


def random_label(length: int = 16) -> str:
    """Random lowercase hex label from a cryptographically strong source."""
    return secrets.token_hex((length + 1) // 2)[:length]


class WorkloadGenerator:
    """Generates the query names for one resolver's run."""

    def __init__(self, domain: str, cache_bypass: bool = False):
        """
        Initialize the workload generator.

        Args:
            domain: Base query name
            cache_bypass: Generate random subdomains to bypass cache
        """
        self.domain = domain.strip().rstrip(".")
        self.cache_bypass = cache_bypass

    def next_query_name(self) -> str:
        """Query name for the next attempt."""
        if self.cache_bypass:
            return f"{random_label()}.{self.domain}"
        return self.domain

