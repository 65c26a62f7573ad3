"""IP address family classification."""

import ipaddress

from endpoints2slice.core.constants import ADDRESS_TYPE_IPV4, ADDRESS_TYPE_IPV6


def is_ipv6(ip: str) -> bool:
    """Return True if *ip* is an IPv6 literal.

    Matches Kubernetes' notion of an IPv6 string: IPv4-mapped addresses
    (``::ffff:10.0.0.1``) count as IPv4, and zoned literals (``fe80::1%eth0``)
    are not valid IPs at all. Anything that fails to parse is not IPv6.
    """
    if not isinstance(ip, str) or "%" in ip:
        return False
    try:
        addr = ipaddress.IPv6Address(ip)
    except ValueError:
        return False
    return addr.ipv4_mapped is None


def all_ipv6(ips) -> bool:
    """True only for a non-empty iterable of IPv6 literals."""
    ips = list(ips)
    return bool(ips) and all(is_ipv6(ip) for ip in ips)


def address_family(ip: str) -> str:
    """IPv6 or IPv4; malformed literals fall on the IPv4 side."""
    return ADDRESS_TYPE_IPV6 if is_ipv6(ip) else ADDRESS_TYPE_IPV4
