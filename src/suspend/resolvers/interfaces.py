"""
SUSPEND - Resolvers - Interfaces

Collaborateurs qui extraient de la requête les faits utilisés par les
stratégies: IP cliente, géolocalisation, empreinte d'appareil.

Un résolveur ne lève pas: une information indisponible vaut None, et
la stratégie concernée ne s'applique simplement pas.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..core.interfaces import RequestContext
from .coordinates import Coordinates


class IIpResolver(ABC):
    """Extraction de l'adresse IP cliente."""

    @abstractmethod
    def resolve(self, request: RequestContext) -> Optional[str]:
        """
        Retourne l'IP cliente de la requête.

        Args:
            request: Contexte de requête

        Returns:
            Adresse IP ou None si indéterminable
        """
        pass

    @abstractmethod
    def identifier(self) -> str:
        """Nom du résolveur ("standard", "cloudflare", ...)."""
        pass


class IGeoResolver(ABC):
    """
    Géolocalisation d'une adresse IP.

    Les appels peuvent impliquer des E/S (API, base locale): leur
    cache et leur timeout relèvent de l'implémentation.
    """

    @abstractmethod
    def country(self, ip: str) -> Optional[str]:
        """Code pays ISO 3166-1 alpha-2, ou None."""
        pass

    @abstractmethod
    def region(self, ip: str) -> Optional[str]:
        pass

    @abstractmethod
    def city(self, ip: str) -> Optional[str]:
        pass

    @abstractmethod
    def coordinates(self, ip: str) -> Optional[Coordinates]:
        pass

    @abstractmethod
    def identifier(self) -> str:
        pass


class IDeviceResolver(ABC):
    """Extraction de l'empreinte d'appareil."""

    @abstractmethod
    def resolve(self, request: RequestContext) -> Optional[str]:
        """
        Retourne l'empreinte transmise par le client.

        Returns:
            Empreinte ou None si absente
        """
        pass

    @abstractmethod
    def identifier(self) -> str:
        pass
