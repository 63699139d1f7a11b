"""
SUSPEND - Matchers - Interfaces

Contrat des matchers: normalisation, correspondance, validation et
extraction d'une valeur de contexte (email, IP, domaine, ...).

Garanties communes à toutes les implémentations:
    - normalize() ne lève jamais; entrée non convertible -> ""
    - matches() ne lève jamais; motif ou valeur invalide -> False
    - normalize(normalize(x)) == normalize(x)
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class MatchType(Enum):
    """Types de matchers fournis par la bibliothèque."""

    EXACT = "exact"
    EMAIL = "email"
    DOMAIN = "domain"
    PHONE = "phone"
    IP = "ip"
    COUNTRY = "country"
    FINGERPRINT = "fingerprint"
    GLOB = "glob"
    REGEX = "regex"


_NON_TEXT_TYPES = (list, tuple, dict, set, frozenset, bytes, bytearray)


def coerce_to_text(value: Any) -> str:
    """
    Convertit une valeur candidate en chaîne sans jamais lever.

    Règles:
        - str: inchangée
        - bool: "1" pour True, "" pour False
        - int, float, Decimal: str(value)
        - objet définissant son propre __str__: str(value)
        - None, collections, objets sans __str__ propre: ""

    Args:
        value: Valeur quelconque

    Returns:
        Représentation textuelle ou chaîne vide
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, _NON_TEXT_TYPES):
        return ""
    if type(value).__str__ is object.__str__:
        return ""
    try:
        text = str(value)
    except Exception:
        return ""
    return text if isinstance(text, str) else ""


class IMatcher(ABC):
    """
    Interface d'un matcher de valeur de contexte.

    Un matcher est sans état: toutes ses méthodes sont des fonctions
    pures de leurs arguments.
    """

    @abstractmethod
    def type(self) -> str:
        """Identifiant du type de matcher ("email", "ip", ...)."""
        pass

    @abstractmethod
    def normalize(self, value: Any) -> str:
        """
        Normalise une valeur pour stockage et comparaison.

        Args:
            value: Valeur brute

        Returns:
            Valeur normalisée ("" si non convertible)
        """
        pass

    @abstractmethod
    def matches(self, stored_value: str, candidate: Any) -> bool:
        """
        Vérifie si la valeur candidate correspond au motif stocké.

        Args:
            stored_value: Motif ou valeur enregistré dans la suspension
            candidate: Valeur à tester

        Returns:
            True si correspondance
        """
        pass

    @abstractmethod
    def validate(self, value: Any) -> bool:
        """
        Vérifie qu'une valeur est un motif acceptable pour ce matcher.

        Args:
            value: Valeur ou motif à valider

        Returns:
            True si valide
        """
        pass

    @abstractmethod
    def extract(self, value: Any) -> Optional[str]:
        """
        Extrait un sous-composant de la valeur (ex: domaine d'un email).

        Returns:
            Sous-composant ou None si non applicable
        """
        pass
