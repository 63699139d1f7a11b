"""
SUSPEND - Logging - Interfaces

Interfaces pour le logging structuré des opérations de suspension.

Chaque entrée porte: timestamp ISO 8601 UTC, niveau, correlation_id,
message et nom du logger. Les secrets et les données personnelles
(email, téléphone, empreinte) ne sont jamais écrits en clair.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class LogLevel(Enum):
    """
    Niveaux de log standard.

    Ordre de sévérité: DEBUG < INFO < WARN < ERROR < CRITICAL
    """

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @classmethod
    def get_priority(cls, level: "LogLevel") -> int:
        """Retourne la priorité du niveau (plus haut = plus sévère)."""
        priorities = {
            cls.DEBUG: 0,
            cls.INFO: 1,
            cls.WARN: 2,
            cls.ERROR: 3,
            cls.CRITICAL: 4,
        }
        return priorities.get(level, 0)

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """
        Résout un niveau depuis son nom (insensible à la casse).

        Raises:
            ValueError: Si le nom ne correspond à aucun niveau
        """
        normalized = name.strip().upper()
        if normalized == "WARNING":
            normalized = "WARN"
        return cls(normalized)


@dataclass
class LogEntry:
    """Entrée de log structurée."""

    timestamp: str  # ISO 8601 UTC
    level: LogLevel
    correlation_id: str
    message: str
    extra: Dict[str, Any] = field(default_factory=dict)
    logger_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convertit en dictionnaire."""
        result = {
            "timestamp": self.timestamp,
            "level": self.level.value,
            "correlation_id": self.correlation_id,
            "message": self.message,
        }
        if self.logger_name:
            result["logger"] = self.logger_name
        if self.extra:
            result["extra"] = self.extra
        return result

    def to_json(self) -> str:
        """Convertit en JSON structuré."""
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


@dataclass
class LogConfig:
    """Configuration du logger structuré."""

    min_level: LogLevel = LogLevel.INFO
    include_extra: bool = True
    mask_sensitive: bool = True
    default_correlation_id: Optional[str] = None
    max_entries: int = 1000  # Entrées conservées en mémoire


class IStructuredLogger(ABC):
    """Interface logger structuré."""

    @abstractmethod
    def log(
        self,
        level: LogLevel,
        message: str,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> Optional[LogEntry]:
        """
        Log structuré JSON.

        Args:
            level: Niveau de log
            message: Message à logger
            correlation_id: ID de corrélation (généré si absent)
            **extra: Données supplémentaires

        Returns:
            LogEntry créé ou None si filtré par niveau
        """
        pass

    @abstractmethod
    def debug(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau DEBUG."""
        pass

    @abstractmethod
    def info(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau INFO."""
        pass

    @abstractmethod
    def warn(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau WARN."""
        pass

    @abstractmethod
    def error(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau ERROR."""
        pass

    @abstractmethod
    def get_entries(self) -> List[LogEntry]:
        """Retourne les entrées de log conservées."""
        pass


class ISensitiveMasker(ABC):
    """
    Interface masquage des données sensibles.

    Deux familles de clés:
        - secrets: valeur remplacée entièrement par MASK_VALUE
        - données personnelles: valeur partiellement masquée
    """

    SECRET_PATTERNS: List[str] = [
        "password",
        "passwd",
        "token",
        "secret",
        "api_key",
        "apikey",
        "private_key",
        "credential",
        "authorization",
        "cookie",
        "session_id",
    ]

    PII_PATTERNS: List[str] = [
        "email",
        "phone",
        "fingerprint",
        "match_value",
    ]

    MASK_VALUE: str = "***MASKED***"

    @abstractmethod
    def mask(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Masque les données sensibles d'un dictionnaire (copie).

        Args:
            data: Dictionnaire à masquer

        Returns:
            Copie avec données sensibles masquées
        """
        pass

    @abstractmethod
    def mask_pii(self, value: Any) -> Any:
        """
        Masque partiellement une donnée personnelle.

        Args:
            value: Valeur à masquer

        Returns:
            Valeur partiellement masquée
        """
        pass

    @abstractmethod
    def is_secret_key(self, key: str) -> bool:
        """Vérifie si la clé désigne un secret."""
        pass

    @abstractmethod
    def is_pii_key(self, key: str) -> bool:
        """Vérifie si la clé désigne une donnée personnelle."""
        pass
