"""
Resolver configuration.

Provides pre-configured profiles for popular public DNS resolvers
and the parser for ``Name=Host[:Port]`` resolver lists.
"""

import logging
from typing import Optional

from .exceptions import ConfigurationError
from .models import DEFAULT_DNS_PORT, ResolverProfile, ResolverTarget


logger = logging.getLogger(__name__)


# Pre-configured resolver profiles
RESOLVERS: dict[str, ResolverProfile] = {
    "cloudflare": ResolverProfile(
        name="Cloudflare",
        ipv4="1.1.1.1",
        ipv6="2606:4700:4700::1111",
        description="Cloudflare's privacy-focused DNS resolver"
    ),
    "cloudflare-secondary": ResolverProfile(
        name="Cloudflare Secondary",
        ipv4="1.0.0.1",
        ipv6="2606:4700:4700::1001",
        description="Cloudflare's secondary DNS resolver"
    ),
    "google": ResolverProfile(
        name="Google",
        ipv4="8.8.8.8",
        ipv6="2001:4860:4860::8888",
        description="Google Public DNS"
    ),
    "google-secondary": ResolverProfile(
        name="Google Secondary",
        ipv4="8.8.4.4",
        ipv6="2001:4860:4860::8844",
        description="Google Public DNS secondary"
    ),
    "quad9": ResolverProfile(
        name="Quad9",
        ipv4="9.9.9.9",
        ipv6="2620:fe::fe",
        description="Quad9 with malware blocking"
    ),
    "opendns": ResolverProfile(
        name="OpenDNS",
        ipv4="208.67.222.222",
        ipv6="2620:119:35::35",
        description="Cisco OpenDNS"
    ),
    "adguard": ResolverProfile(
        name="AdGuard",
        ipv4="94.140.14.14",
        ipv6="2a10:50c0::ad1:ff",
        description="AdGuard DNS with ad blocking"
    ),
}

# Default resolvers for quick comparison
DEFAULT_RESOLVERS = ["cloudflare", "google", "quad9", "opendns", "adguard"]


def get_resolver(name: str) -> ResolverProfile:
    """Get a resolver by name (case-insensitive)."""
    key = name.lower()
    if key in RESOLVERS:
        return RESOLVERS[key]
    raise ValueError(f"Unknown resolver: {name}. Available: {list(RESOLVERS.keys())}")


def list_resolvers() -> list[str]:
    """List all available resolver names."""
    return list(RESOLVERS.keys())


def default_resolver_spec() -> str:
    """Build the default ``Name=Host`` list from the preset profiles."""
    profiles = [get_resolver(key) for key in DEFAULT_RESOLVERS]
    return ",".join(f"{profile.name}={profile.ipv4}" for profile in profiles)


def parse_address(address: str) -> Optional[tuple[str, int]]:
    """
    Split a resolver address into host and port.

    Accepts ``host``, ``host:port``, ``[v6]``, ``[v6]:port`` and bare
    IPv6 literals. Returns None when the address is malformed.
    """
    address = address.strip()
    port_text = None

    if address.startswith("["):
        host, sep, rest = address[1:].partition("]")
        if not sep:
            return None
        if rest:
            if not rest.startswith(":"):
                return None
            port_text = rest[1:]
    elif address.count(":") == 1:
        host, port_text = address.split(":")
    else:
        host = address

    host = host.strip()
    if not host:
        return None

    if port_text is None:
        return host, DEFAULT_DNS_PORT

    port_text = port_text.strip()
    if not port_text.isdigit():
        return None
    port = int(port_text)
    if not 0 < port < 65536:
        return None
    return host, port


def parse_resolvers(spec: str) -> list[ResolverTarget]:
    """
    Parse a comma separated ``Name=Host[:Port]`` list.

    Empty and malformed segments are skipped; the result keeps the
    input order and may be empty.
    """
    targets = []

    for segment in spec.split(","):
        segment = segment.strip()
        if not segment:
            continue

        if "=" not in segment:
            logger.warning("Skipping resolver entry without '=': %r", segment)
            continue

        name, address = segment.split("=", 1)
        parsed = parse_address(address)
        if parsed is None:
            logger.warning("Skipping resolver entry with bad address: %r", segment)
            continue

        host, port = parsed
        name = name.strip() or host
        targets.append(ResolverTarget(name=name, host=host, port=port))

    seen = set()
    for target in targets:
        if target.name in seen:
            logger.warning("Duplicate resolver name %r; reports will be ambiguous", target.name)
        seen.add(target.name)

    return targets


def require_resolvers(spec: str) -> list[ResolverTarget]:
    """Parse a resolver list, failing when nothing usable remains."""
    targets = parse_resolvers(spec)
    if not targets:
        raise ConfigurationError(
            "No resolvers provided.",
            details={"resolvers": spec},
        )
    return targets
