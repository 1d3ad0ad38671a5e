"""
Core DNS query engine.

Executes one resolution attempt per call against a specific resolver
and turns whatever happens into a QueryOutcome with high-resolution
timing. Per-query failures never propagate.
"""

import logging
import time
from typing import Optional

import dns.exception
import dns.message
import dns.rcode
import dns.rdatatype

from .models import QueryOutcome, RecordType, ResolverTarget
from .transports import BaseTransport, UDPTransport


logger = logging.getLogger(__name__)

NETWORK_RECORD_TYPES = {
    "ip4": RecordType.A,
    "ipv4": RecordType.A,
    "ip6": RecordType.AAAA,
    "ipv6": RecordType.AAAA,
}


def record_type_for_network(network: str) -> RecordType:
    """Map a network name to a record type; unknown names mean A."""
    record_type = NETWORK_RECORD_TYPES.get(network.strip().lower())
    if record_type is None:
        logger.warning("Unknown network %r, falling back to A records", network)
        return RecordType.A
    return record_type


class DNSQueryEngine:
    """
    Single-attempt DNS query executor.

    Each call issues exactly one query with its own deadline; there are
    no retries and no fallback to other resolvers.
    """

    def __init__(
        self,
        timeout: float = 1.5,
        transport: Optional[BaseTransport] = None,
    ):
        """
        Initialize the query engine.

        Args:
            timeout: Per-query deadline in seconds
            transport: Transport to send queries with (default: UDP)
        """
        self.timeout = timeout
        self.transport = transport or UDPTransport()

    def _create_query_message(
        self,
        query_name: str,
        record_type: RecordType,
    ) -> dns.message.Message:
        """Create a recursive DNS query message."""
        rdtype = dns.rdatatype.from_text(record_type.value)
        return dns.message.make_query(query_name, rdtype)

    def _check_response(
        self,
        response: dns.message.Message,
        target: ResolverTarget,
        query_name: str,
        record_type: RecordType,
    ) -> Optional[str]:
        """Return an error message, or None when the response answers the query."""
        rcode = response.rcode()
        if rcode != dns.rcode.NOERROR:
            return f"{dns.rcode.to_text(rcode)} from {target.address}"

        rdtype = dns.rdatatype.from_text(record_type.value)
        if not any(rrset.rdtype == rdtype for rrset in response.answer):
            return f"no {record_type.value} records for {query_name}"

        return None

    async def query(
        self,
        target: ResolverTarget,
        query_name: str,
        record_type: RecordType = RecordType.A,
    ) -> QueryOutcome:
        """
        Execute a single DNS query.

        Args:
            target: Resolver to send the query to
            query_name: Domain name to query
            record_type: Type of DNS record to request

        Returns:
            QueryOutcome with elapsed time and the error, if any
        """
        error: Optional[str]
        start = time.perf_counter_ns()

        try:
            message = self._create_query_message(query_name, record_type)
            response = await self.transport.query(
                message,
                target.host,
                target.port,
                timeout=self.timeout,
            )
            error = self._check_response(response, target, query_name, record_type)
        except dns.exception.Timeout:
            error = f"timeout after {self.timeout * 1000:g}ms"
        except Exception as e:
            error = str(e) or type(e).__name__

        elapsed_ms = (time.perf_counter_ns() - start) / 1_000_000

        if error is not None:
            logger.debug("%s %s @%s failed: %s", record_type.value, query_name, target.address, error)

        return QueryOutcome(elapsed_ms=elapsed_ms, error=error, query_name=query_name)
