"""
SUSPEND - Matchers - IP

Adresses IPv4/IPv6 et plages CIDR:
    "192.168.1.10"     -> adresse exacte
    "192.168.1.0/24"   -> plage IPv4
    "2001:db8::/32"    -> plage IPv6

La comparaison CIDR se fait sur les entiers (IPv4) ou octet par octet
(IPv6), sans jamais lever sur une entrée invalide.
"""

import ipaddress
from typing import Any, Optional, Tuple, Union

from .interfaces import IMatcher, MatchType, coerce_to_text


IPV4_MAX_PREFIX = 32
IPV6_MAX_PREFIX = 128

_Address = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def _parse_address(value: str) -> Optional[_Address]:
    try:
        return ipaddress.ip_address(value)
    except ValueError:
        return None


def _parse_prefix(value: str) -> Optional[int]:
    # int() accepte "+8", " 8" ou "٨": on exige des chiffres ASCII
    if not value or not value.isascii() or not value.isdigit():
        return None
    # forme canonique: "8", pas "08"
    if len(value) > 1 and value[0] == "0":
        return None
    return int(value)


def _split_cidr(value: str) -> Optional[Tuple[_Address, int]]:
    parts = value.split("/")
    if len(parts) != 2:
        return None

    subnet = _parse_address(parts[0])
    prefix = _parse_prefix(parts[1])
    if subnet is None or prefix is None:
        return None

    limit = IPV4_MAX_PREFIX if subnet.version == 4 else IPV6_MAX_PREFIX
    if prefix > limit:
        return None

    return subnet, prefix


def ipv4_in_cidr(subnet: ipaddress.IPv4Address, prefix: int, ip: ipaddress.IPv4Address) -> bool:
    """Appartenance IPv4 par masque sur 32 bits."""
    mask = (-1 << (IPV4_MAX_PREFIX - prefix)) & 0xFFFFFFFF
    return (int(subnet) & mask) == (int(ip) & mask)


def ipv6_in_cidr(subnet: ipaddress.IPv6Address, prefix: int, ip: ipaddress.IPv6Address) -> bool:
    """
    Appartenance IPv6 octet par octet.

    Les prefix // 8 premiers octets doivent être identiques; s'il reste
    des bits, l'octet suivant est comparé sous masque partiel.
    """
    subnet_bytes = subnet.packed
    ip_bytes = ip.packed

    full_bytes, remaining_bits = divmod(prefix, 8)

    if subnet_bytes[:full_bytes] != ip_bytes[:full_bytes]:
        return False

    if remaining_bits:
        mask = (0xFF << (8 - remaining_bits)) & 0xFF
        if (subnet_bytes[full_bytes] & mask) != (ip_bytes[full_bytes] & mask):
            return False

    return True


class IpMatcher(IMatcher):
    """Correspondance d'adresses IP exactes ou de plages CIDR."""

    def type(self) -> str:
        return MatchType.IP.value

    def normalize(self, value: Any) -> str:
        return coerce_to_text(value).strip()

    def matches(self, stored_value: str, candidate: Any) -> bool:
        suspended = self.normalize(stored_value)
        ip = self.normalize(candidate)

        if not suspended or not ip:
            return False

        if suspended == ip:
            return True

        if "/" in suspended:
            return self.in_cidr(suspended, ip)

        return False

    def in_cidr(self, cidr: str, ip: str) -> bool:
        """
        Vérifie qu'une adresse appartient à une plage CIDR.

        Familles différentes, adresse ou plage invalide -> False.
        """
        parsed = _split_cidr(cidr)
        address = _parse_address(ip)
        if parsed is None or address is None:
            return False

        subnet, prefix = parsed
        if subnet.version != address.version:
            return False

        if subnet.version == 4:
            return ipv4_in_cidr(subnet, prefix, address)
        return ipv6_in_cidr(subnet, prefix, address)

    def validate(self, value: Any) -> bool:
        normalized = self.normalize(value)

        if "/" in normalized:
            return _split_cidr(normalized) is not None

        return _parse_address(normalized) is not None

    def extract(self, value: Any) -> Optional[str]:
        return None
