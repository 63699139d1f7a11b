"""
SUSPEND - Strategies - Interfaces

Une stratégie conditionne l'application d'une suspension à des faits
de la requête (heure, IP, pays, appareil) et aux métadonnées stockées
avec la suspension.

Comme les matchers, une stratégie ne lève jamais: une information
manquante ou mal formée vaut False.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Mapping, Tuple

from ..core.interfaces import RequestContext


class StrategyType(Enum):
    """Stratégies fournies par la bibliothèque."""

    SIMPLE = "simple"
    TIME_WINDOW = "time_window"
    IP_ADDRESS = "ip_address"
    COUNTRY = "country"
    DEVICE_FINGERPRINT = "device_fingerprint"
    CONDITIONAL = "conditional"


class IStrategy(ABC):
    """
    Interface d'une stratégie d'application.

    Attributes:
        REQUIRED_METADATA: Clés de métadonnées exigées à la création
            d'une suspension utilisant cette stratégie
    """

    REQUIRED_METADATA: Tuple[str, ...] = ()

    @abstractmethod
    def identifier(self) -> str:
        """Identifiant de la stratégie ("time_window", ...)."""
        pass

    @abstractmethod
    def matches(self, request: RequestContext, metadata: Mapping[str, Any]) -> bool:
        """
        Évalue la stratégie pour une requête.

        Args:
            request: Contexte de requête
            metadata: Métadonnées de la suspension

        Returns:
            True si la suspension s'applique à cette requête
        """
        pass
