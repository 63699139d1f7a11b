"""
SUSPEND - Strategies - IP Address

Suspension limitée à une adresse ou plage CIDR (metadata["ip"]).
"""

from typing import Any, Mapping, Optional

from ..core.interfaces import RequestContext
from ..matchers.ip_matcher import IpMatcher
from ..resolvers.interfaces import IIpResolver
from .interfaces import IStrategy, StrategyType


class IpAddressStrategy(IStrategy):
    """S'applique si l'IP cliente correspond à metadata["ip"]."""

    REQUIRED_METADATA = ("ip",)

    def __init__(self, ip_resolver: IIpResolver, ip_matcher: Optional[IpMatcher] = None):
        self._ip_resolver = ip_resolver
        self._ip_matcher = ip_matcher or IpMatcher()

    def identifier(self) -> str:
        return StrategyType.IP_ADDRESS.value

    def matches(self, request: RequestContext, metadata: Mapping[str, Any]) -> bool:
        pattern = metadata.get("ip")
        if not isinstance(pattern, str):
            return False

        client_ip = self._ip_resolver.resolve(request)
        if client_ip is None:
            return False

        return self._ip_matcher.matches(pattern, client_ip)
