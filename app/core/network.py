"""
Client address normalization.

Geolocation providers cannot locate loopback or private addresses, which is
all a server sees from a local client. Outside production such addresses are
swapped for a fixed public placeholder before any lookup; in production the
observed address is passed through untouched.
"""

import ipaddress
from dataclasses import dataclass

PRODUCTION = "production"


def is_routable(ip: str) -> bool:
    """True if ``ip`` parses as an IP address that is globally routable."""
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return False
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped is not None:
        address = address.ipv4_mapped
    return address.is_global


def normalize_address(ip: str, mode: str, placeholder: str) -> str:
    """
    Return the address to hand to the geolocation provider.

    Args:
        ip: Address observed on the connection (may also be a host name
            reported by a test transport)
        mode: Execution mode from settings.ENVIRONMENT
        placeholder: Public address used in place of local callers

    Returns:
        ``ip`` unchanged in production or when it is routable,
        ``placeholder`` otherwise
    """
    if mode == PRODUCTION:
        return ip
    if is_routable(ip):
        return ip
    return placeholder


@dataclass(frozen=True)
class AddressNormalizer:
    """Normalization strategy fixed at startup for the process lifetime."""
    mode: str
    placeholder: str

    def __call__(self, ip: str) -> str:
        return normalize_address(ip, self.mode, self.placeholder)
