"""
Private and reserved address classification.

An address is private when it is unspecified, loopback, in an RFC 1918 IPv4
range or in the RFC 4193 IPv6 unique local range.
"""

import ipaddress
from typing import Optional, Union

from ..normalization.url import CanonicalURL

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

# Accepted inputs: a parsed URL, an IP literal string, or an address object
IPInput = Union[CanonicalURL, str, ipaddress.IPv4Address, ipaddress.IPv6Address]

PRIVATE_NETWORKS = (
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("fc00::/7"),
)


def to_ip_address(value: IPInput) -> Optional[IPAddress]:
    """
    Convert an accepted input to an address object.

    Args:
        value: CanonicalURL, IP literal string or address object

    Returns:
        The address, or None if the input is not an IP

    Raises:
        TypeError: If value is not one of the accepted input types
    """
    if isinstance(value, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        return value

    if isinstance(value, CanonicalURL):
        if not value.is_ip:
            return None
        literal = value.host
    elif isinstance(value, str):
        literal = value.strip().strip("[]")
        # Remove zone id
        literal = literal.split("%", 1)[0]
    else:
        raise TypeError(f"Unsupported input type: {type(value).__name__}")

    try:
        return ipaddress.ip_address(literal)
    except ValueError:
        return None


def is_private(value: IPInput) -> bool:
    """
    Check whether an address is in an unspecified, loopback or private range.

    Link-local and other reserved ranges are not treated as private.

    Args:
        value: CanonicalURL, IP literal string or address object

    Returns:
        True if private, False otherwise (including for non-IP input)
    """
    ip = to_ip_address(value)
    if ip is None:
        return False

    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped

    if ip.is_unspecified or ip.is_loopback:
        return True

    return any(ip in network for network in PRIVATE_NETWORKS)
