"""
SUSPEND - Resolvers - IP

Résolution de l'IP cliente selon l'infrastructure en frontal:
    - standard: adresse de la connexion directe
    - cloudflare / fastly / akamai: en-tête dédié posé par le CDN
    - aws: première entrée de X-Forwarded-For (API Gateway, ALB)
    - trusted_proxy: parcours de X-Forwarded-For en ignorant les
      proxies de confiance
"""

from typing import Iterable, List, Optional

from ..core.interfaces import RequestContext, SuspendConfig
from ..matchers.ip_matcher import IpMatcher
from .interfaces import IIpResolver


FORWARDED_FOR_HEADER = "X-Forwarded-For"


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class StandardIpResolver(IIpResolver):
    """Adresse de la connexion directe (remote_addr)."""

    def resolve(self, request: RequestContext) -> Optional[str]:
        return _clean(request.remote_addr)

    def identifier(self) -> str:
        return "standard"


class HeaderIpResolver(IIpResolver):
    """
    IP lue dans un en-tête posé par un frontal de confiance.

    Si l'en-tête est absent ou vide, repli sur remote_addr.

    Args:
        header: Nom de l'en-tête
        name: Identifiant du résolveur
        first_entry: Ne garder que la première entrée d'une liste
            séparée par des virgules (X-Forwarded-For)
    """

    def __init__(self, header: str, name: str, first_entry: bool = False):
        self._header = header
        self._name = name
        self._first_entry = first_entry
        self._fallback = StandardIpResolver()

    @classmethod
    def cloudflare(cls) -> "HeaderIpResolver":
        return cls("CF-Connecting-IP", "cloudflare")

    @classmethod
    def fastly(cls) -> "HeaderIpResolver":
        return cls("Fastly-Client-IP", "fastly")

    @classmethod
    def akamai(cls) -> "HeaderIpResolver":
        return cls("True-Client-IP", "akamai")

    @classmethod
    def aws(cls) -> "HeaderIpResolver":
        return cls(FORWARDED_FOR_HEADER, "aws", first_entry=True)

    @property
    def header(self) -> str:
        return self._header

    def resolve(self, request: RequestContext) -> Optional[str]:
        value = request.header(self._header)
        if value and self._first_entry:
            value = value.split(",")[0]

        return _clean(value) or self._fallback.resolve(request)

    def identifier(self) -> str:
        return self._name


class TrustedProxyIpResolver(IIpResolver):
    """
    Client réel derrière une chaîne de proxies connus.

    La chaîne X-Forwarded-For, complétée par remote_addr, est parcourue
    de droite à gauche; la première adresse qui n'est pas un proxy de
    confiance est le client. Si toutes le sont, l'adresse la plus à
    gauche est retenue.

    Args:
        trusted_proxies: Adresses ou plages CIDR des proxies
    """

    def __init__(self, trusted_proxies: Iterable[str] = ()):
        self._trusted = [proxy.strip() for proxy in trusted_proxies if proxy.strip()]
        self._ip_matcher = IpMatcher()

    @property
    def trusted_proxies(self) -> List[str]:
        return list(self._trusted)

    def is_trusted(self, ip: str) -> bool:
        return any(self._ip_matcher.matches(proxy, ip) for proxy in self._trusted)

    def resolve(self, request: RequestContext) -> Optional[str]:
        forwarded_for = request.header(FORWARDED_FOR_HEADER)
        if not forwarded_for:
            return _clean(request.remote_addr)

        chain = [ip.strip() for ip in forwarded_for.split(",") if ip.strip()]
        direct = _clean(request.remote_addr)
        if direct is not None:
            chain.append(direct)

        if not chain:
            return None

        for ip in reversed(chain):
            if not self.is_trusted(ip):
                return ip

        return chain[0]

    def identifier(self) -> str:
        return "trusted_proxy"


def build_ip_resolver(config: SuspendConfig) -> IIpResolver:
    """Instancie le résolveur IP désigné par la configuration."""
    name = config.ip_resolver

    if name == "trusted_proxy":
        return TrustedProxyIpResolver(config.trusted_proxies)
    if name == "cloudflare":
        return HeaderIpResolver.cloudflare()
    if name == "fastly":
        return HeaderIpResolver.fastly()
    if name == "akamai":
        return HeaderIpResolver.akamai()
    if name == "aws":
        return HeaderIpResolver.aws()

    return StandardIpResolver()
