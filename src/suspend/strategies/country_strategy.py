"""
SUSPEND - Strategies - Country

Suspension limitée aux clients localisés dans certains pays
(metadata["countries"]).
"""

from typing import Any, Mapping

from ..core.interfaces import RequestContext
from ..resolvers.interfaces import IGeoResolver, IIpResolver
from .interfaces import IStrategy, StrategyType


class CountryStrategy(IStrategy):
    """
    S'applique si le pays du client figure dans metadata["countries"].

    La comparaison est insensible à la casse.
    """

    REQUIRED_METADATA = ("countries",)

    def __init__(self, ip_resolver: IIpResolver, geo_resolver: IGeoResolver):
        self._ip_resolver = ip_resolver
        self._geo_resolver = geo_resolver

    def identifier(self) -> str:
        return StrategyType.COUNTRY.value

    def matches(self, request: RequestContext, metadata: Mapping[str, Any]) -> bool:
        countries = metadata.get("countries")
        if not isinstance(countries, (list, tuple)) or not countries:
            return False

        client_ip = self._ip_resolver.resolve(request)
        if client_ip is None:
            return False

        country = self._geo_resolver.country(client_ip)
        if not country:
            return False

        blocked = {code.strip().upper() for code in countries if isinstance(code, str)}
        return country.strip().upper() in blocked
