"""
DNS transport implementations.

Only connectionless transport is used: one datagram exchange per query,
directed at a specific resolver rather than the system default.
"""

import asyncio
from abc import ABC, abstractmethod

import dns.message
import dns.query


class BaseTransport(ABC):
    """Base class for DNS transports."""

    @abstractmethod
    async def query(
        self,
        message: dns.message.Message,
        host: str,
        port: int,
        timeout: float,
    ) -> dns.message.Message:
        """
        Send a DNS query and return the response.

        Raises dns.exception.Timeout when no response arrives in time.
        """


class UDPTransport(BaseTransport):
    """Standard DNS over UDP."""

    async def query(
        self,
        message: dns.message.Message,
        host: str,
        port: int,
        timeout: float,
    ) -> dns.message.Message:
        """Send DNS query over UDP."""
        # Run the synchronous UDP query in a thread pool
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(
            None,
            lambda: dns.query.udp(
                message,
                host,
                timeout=timeout,
                port=port,
            )
        )
