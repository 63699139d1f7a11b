"""
SUSPEND - Resolvers - Geo

Résolveurs de géolocalisation fournis:
    - NullGeoResolver: aucune information
    - ChainGeoResolver: premier résultat non nul d'une liste
    - CloudflareGeoResolver: en-têtes CF-* de la requête courante
    - StaticGeoResolver: table fixe adresse/plage -> localisation
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, TypeVar

from ..core.interfaces import RequestProvider, current_request
from ..matchers.ip_matcher import IpMatcher
from .coordinates import Coordinates
from .interfaces import IGeoResolver


T = TypeVar("T")

UNKNOWN_COUNTRY = "XX"


class NullGeoResolver(IGeoResolver):
    """Géolocalisation désactivée: toujours None."""

    def country(self, ip: str) -> Optional[str]:
        return None

    def region(self, ip: str) -> Optional[str]:
        return None

    def city(self, ip: str) -> Optional[str]:
        return None

    def coordinates(self, ip: str) -> Optional[Coordinates]:
        return None

    def identifier(self) -> str:
        return "null"


class ChainGeoResolver(IGeoResolver):
    """
    Interroge plusieurs résolveurs dans l'ordre.

    Chaque champ est résolu indépendamment: le pays peut venir du CDN
    et les coordonnées d'une base locale.
    """

    def __init__(self, resolvers: Iterable[IGeoResolver]):
        self._resolvers: List[IGeoResolver] = list(resolvers)

    def _first(self, lookup: Callable[[IGeoResolver], Optional[T]]) -> Optional[T]:
        for resolver in self._resolvers:
            result = lookup(resolver)
            if result is not None:
                return result
        return None

    def country(self, ip: str) -> Optional[str]:
        return self._first(lambda resolver: resolver.country(ip))

    def region(self, ip: str) -> Optional[str]:
        return self._first(lambda resolver: resolver.region(ip))

    def city(self, ip: str) -> Optional[str]:
        return self._first(lambda resolver: resolver.city(ip))

    def coordinates(self, ip: str) -> Optional[Coordinates]:
        return self._first(lambda resolver: resolver.coordinates(ip))

    def identifier(self) -> str:
        return "chain"


class CloudflareGeoResolver(IGeoResolver):
    """
    Lit la localisation posée par Cloudflare sur la requête.

    L'IP passée en argument est ignorée: les en-têtes décrivent déjà
    le client de la requête courante. Région, ville et coordonnées ne
    sont présentes que sur les offres Enterprise.

    Une seule instance sert toutes les requêtes: la requête est lue à
    chaque appel via le fournisseur (défaut: requête liée par
    bind_request). Sans requête courante, tout vaut None.

    Args:
        request_provider: Fournit la requête courante
    """

    def __init__(self, request_provider: Optional[RequestProvider] = None):
        self._request_provider = request_provider or current_request

    def _header(self, name: str) -> Optional[str]:
        request = self._request_provider()
        if request is None:
            return None
        value = request.header(name)
        return value if value else None

    def country(self, ip: str) -> Optional[str]:
        country = self._header("CF-IPCountry")
        if country == UNKNOWN_COUNTRY:
            return None
        return country

    def region(self, ip: str) -> Optional[str]:
        return self._header("CF-Region")

    def city(self, ip: str) -> Optional[str]:
        return self._header("CF-IPCity")

    def coordinates(self, ip: str) -> Optional[Coordinates]:
        latitude = self._header("CF-IPLatitude")
        longitude = self._header("CF-IPLongitude")
        if latitude is None or longitude is None:
            return None

        try:
            return Coordinates(float(latitude), float(longitude))
        except ValueError:
            return None

    def identifier(self) -> str:
        return "cloudflare"


@dataclass(frozen=True)
class GeoLocation:
    """Entrée d'une table de géolocalisation statique."""

    country: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    coordinates: Optional[Coordinates] = None


class StaticGeoResolver(IGeoResolver):
    """
    Table fixe adresse ou plage CIDR -> localisation.

    Les entrées sont testées dans l'ordre d'insertion; la première qui
    couvre l'IP l'emporte.

    Usage:
        geo = StaticGeoResolver({"203.0.113.0/24": GeoLocation(country="FR")})
    """

    def __init__(self, table: Optional[Dict[str, GeoLocation]] = None):
        self._table: Dict[str, GeoLocation] = dict(table or {})
        self._ip_matcher = IpMatcher()

    def add(self, pattern: str, location: GeoLocation) -> "StaticGeoResolver":
        self._table[pattern] = location
        return self

    def lookup(self, ip: str) -> Optional[GeoLocation]:
        for pattern, location in self._table.items():
            if self._ip_matcher.matches(pattern, ip):
                return location
        return None

    def country(self, ip: str) -> Optional[str]:
        location = self.lookup(ip)
        return location.country if location else None

    def region(self, ip: str) -> Optional[str]:
        location = self.lookup(ip)
        return location.region if location else None

    def city(self, ip: str) -> Optional[str]:
        location = self.lookup(ip)
        return location.city if location else None

    def coordinates(self, ip: str) -> Optional[Coordinates]:
        location = self.lookup(ip)
        return location.coordinates if location else None

    def identifier(self) -> str:
        return "static"
