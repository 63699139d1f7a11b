"""
SUSPEND - Logging - Sensitive Masker

Masquage des secrets et des données personnelles avant écriture
dans les logs.
"""

from typing import Any, Dict, List, Optional

from .interfaces import ISensitiveMasker


class SensitiveMasker(ISensitiveMasker):
    """
    Masquage récursif des données sensibles.

    Les secrets sont remplacés par MASK_VALUE. Les données personnelles
    gardent juste assez de contexte pour le diagnostic:
        - email: premier caractère + domaine ("j***@example.com")
        - autre: deux derniers caractères ("***42")

    Example:
        masker = SensitiveMasker()
        masker.mask({"email": "john@example.com", "token": "abc"})
        # {"email": "j***@example.com", "token": "***MASKED***"}
    """

    def __init__(self, additional_secrets: Optional[List[str]] = None) -> None:
        """
        Args:
            additional_secrets: Patterns de secrets supplémentaires
        """
        self._secrets: List[str] = list(self.SECRET_PATTERNS)
        self._pii: List[str] = list(self.PII_PATTERNS)
        if additional_secrets:
            for pattern in additional_secrets:
                if pattern and pattern.lower() not in self._secrets:
                    self._secrets.append(pattern.lower())

    @property
    def patterns(self) -> List[str]:
        """Retourne tous les patterns configurés."""
        return list(self._secrets) + list(self._pii)

    def mask(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Masque récursivement les données sensibles.

        Comportement:
            - Clé secrète -> MASK_VALUE
            - Clé personnelle -> masquage partiel
            - Valeurs dict -> récursion
            - Valeurs list -> chaque élément traité

        Args:
            data: Dictionnaire à masquer

        Returns:
            Copie avec données sensibles masquées
        """
        if not isinstance(data, dict):
            return data

        result: Dict[str, Any] = {}

        for key, value in data.items():
            if self.is_secret_key(key):
                result[key] = self.MASK_VALUE
            elif self.is_pii_key(key):
                result[key] = self.mask_pii(value)
            elif isinstance(value, dict):
                result[key] = self.mask(value)
            elif isinstance(value, list):
                result[key] = self._mask_list(value)
            else:
                result[key] = value

        return result

    def _mask_list(self, items: List[Any]) -> List[Any]:
        result = []
        for item in items:
            if isinstance(item, dict):
                result.append(self.mask(item))
            elif isinstance(item, list):
                result.append(self._mask_list(item))
            else:
                result.append(item)
        return result

    def mask_pii(self, value: Any) -> Any:
        """
        Masque partiellement une donnée personnelle.

        Args:
            value: Valeur à masquer (None conservé tel quel)

        Returns:
            Chaîne partiellement masquée
        """
        if value is None:
            return None

        text = str(value)
        if not text:
            return text

        if "@" in text:
            local, _, domain = text.rpartition("@")
            head = local[:1] if local else ""
            return f"{head}***@{domain}"

        if len(text) <= 4:
            return self.MASK_VALUE

        return "***" + text[-2:]

    def is_secret_key(self, key: str) -> bool:
        """
        Vérifie si la clé contient un pattern de secret (insensible à la casse).
        """
        return self._contains_pattern(key, self._secrets)

    def is_pii_key(self, key: str) -> bool:
        """
        Vérifie si la clé contient un pattern de donnée personnelle.
        """
        return self._contains_pattern(key, self._pii)

    @staticmethod
    def _contains_pattern(key: str, patterns: List[str]) -> bool:
        if not key:
            return False
        key_lower = key.lower()
        return any(pattern in key_lower for pattern in patterns)
