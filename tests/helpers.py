"""
Outils de test partagés: horloge figée, faux résolveurs, requêtes.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from suspend.core import RequestContext
from suspend.resolvers import Coordinates, IDeviceResolver, IGeoResolver, IIpResolver


REFERENCE_NOW = datetime(2024, 6, 12, 14, 30, tzinfo=timezone.utc)  # mercredi


class FrozenClock:
    """Horloge figée, avançable manuellement."""

    def __init__(self, now: datetime = REFERENCE_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class FakeIpResolver(IIpResolver):
    """Retourne toujours la même IP."""

    def __init__(self, ip: Optional[str]) -> None:
        self.ip = ip

    def resolve(self, request: RequestContext) -> Optional[str]:
        return self.ip

    def identifier(self) -> str:
        return "fake"


class FakeGeoResolver(IGeoResolver):
    """Géolocalisation par table IP -> pays."""

    def __init__(self, countries: Optional[Dict[str, str]] = None) -> None:
        self.countries = dict(countries or {})
        self.calls: List[str] = []

    def country(self, ip: str) -> Optional[str]:
        self.calls.append(ip)
        return self.countries.get(ip)

    def region(self, ip: str) -> Optional[str]:
        return None

    def city(self, ip: str) -> Optional[str]:
        return None

    def coordinates(self, ip: str) -> Optional[Coordinates]:
        return None

    def identifier(self) -> str:
        return "fake"


class FakeDeviceResolver(IDeviceResolver):
    """Retourne toujours la même empreinte."""

    def __init__(self, fingerprint: Optional[str]) -> None:
        self.fingerprint = fingerprint

    def resolve(self, request: RequestContext) -> Optional[str]:
        return self.fingerprint

    def identifier(self) -> str:
        return "fake"


def make_request(
    remote_addr: Optional[str] = "203.0.113.10",
    path: str = "/",
    headers: Optional[Dict[str, str]] = None,
    method: str = "GET",
    user=None,
) -> RequestContext:
    """Construit un contexte de requête pour les tests."""
    return RequestContext(
        method=method,
        path=path,
        headers=headers or {},
        remote_addr=remote_addr,
        user=user,
    )
