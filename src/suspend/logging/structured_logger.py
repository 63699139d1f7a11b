"""
SUSPEND - Logging - Structured Logger

Logger JSON structuré utilisé par le gestionnaire, le garde
et le chargeur de configuration.
"""

import threading
import uuid
from collections import deque
from datetime import datetime, timezone
from typing import Any, Callable, Deque, Dict, List, Optional

from .interfaces import (
    IStructuredLogger,
    ISensitiveMasker,
    LogConfig,
    LogEntry,
    LogLevel,
)
from .sensitive_masker import SensitiveMasker


class MissingMessageError(ValueError):
    """Message de log vide."""

    def __init__(self) -> None:
        super().__init__("Log message cannot be empty")


class StructuredLogger(IStructuredLogger):
    """
    Logger JSON structuré.

    Les entrées sont conservées en mémoire (bornées par
    LogConfig.max_entries) et envoyées à l'output_handler s'il est fourni.

    Example:
        logger = StructuredLogger("suspend.manager", output_handler=print)
        logger.info("Suspension created", suspension_id="s-1")
    """

    def __init__(
        self,
        name: str,
        config: Optional[LogConfig] = None,
        masker: Optional[ISensitiveMasker] = None,
        output_handler: Optional[Callable[[str], None]] = None,
    ) -> None:
        """
        Initialise le logger structuré.

        Args:
            name: Nom du logger (identifiant du composant)
            config: Configuration optionnelle
            masker: Masker pour données sensibles
            output_handler: Destination des lignes JSON

        Raises:
            ValueError: Si name vide
        """
        if not name or not name.strip():
            raise ValueError("Logger name cannot be empty")

        self._name = name.strip()
        self._config = config or LogConfig()
        self._masker = masker or SensitiveMasker()
        self._output_handler = output_handler
        self._entries: Deque[LogEntry] = deque(maxlen=max(1, self._config.max_entries))
        self._lock = threading.Lock()
        self._default_correlation_id: Optional[str] = self._config.default_correlation_id

    @property
    def name(self) -> str:
        """Retourne le nom du logger."""
        return self._name

    @property
    def config(self) -> LogConfig:
        """Retourne la configuration."""
        return self._config

    def set_default_correlation(self, correlation_id: str) -> None:
        """Définit le correlation_id par défaut."""
        self._default_correlation_id = correlation_id

    def clear_defaults(self) -> None:
        """Efface les valeurs par défaut."""
        self._default_correlation_id = None

    def child(self, suffix: str) -> "StructuredLogger":
        """
        Crée un logger enfant partageant config, masker et output.

        Args:
            suffix: Suffixe ajouté au nom ("suspend" -> "suspend.guard")
        """
        child = StructuredLogger(
            f"{self._name}.{suffix}",
            config=self._config,
            masker=self._masker,
            output_handler=self._output_handler,
        )
        child._default_correlation_id = self._default_correlation_id
        return child

    def log(
        self,
        level: LogLevel,
        message: str,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> Optional[LogEntry]:
        """
        Crée un log structuré JSON.

        Processus:
            1. Vérifie niveau >= min_level
            2. Génère timestamp ISO 8601 UTC
            3. Résout correlation_id
            4. Masque données sensibles dans extra
            5. Conserve l'entrée et l'envoie à l'output

        Returns:
            LogEntry créé ou None si filtré

        Raises:
            MissingMessageError: Si message vide
        """
        if not self._should_log(level):
            return None

        if not message:
            raise MissingMessageError()

        resolved_correlation = correlation_id or self._default_correlation_id
        if not resolved_correlation:
            resolved_correlation = str(uuid.uuid4())

        masked_extra: Dict[str, Any] = {}
        if extra and self._config.include_extra:
            if self._config.mask_sensitive:
                masked_extra = self._masker.mask(dict(extra))
            else:
                masked_extra = dict(extra)

        entry = LogEntry(
            timestamp=self._generate_timestamp(),
            level=level,
            correlation_id=resolved_correlation,
            message=message,
            extra=masked_extra,
            logger_name=self._name,
        )

        with self._lock:
            self._entries.append(entry)

        if self._output_handler:
            self._output_handler(entry.to_json())

        return entry

    def _generate_timestamp(self) -> str:
        """
        Timestamp ISO 8601 UTC avec millisecondes.

        Format: 2024-12-04T14:30:00.123Z
        """
        now = datetime.now(timezone.utc)
        return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"

    def _should_log(self, level: LogLevel) -> bool:
        return LogLevel.get_priority(level) >= LogLevel.get_priority(
            self._config.min_level
        )

    def debug(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau DEBUG."""
        return self.log(LogLevel.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau INFO."""
        return self.log(LogLevel.INFO, message, **extra)

    def warn(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau WARN."""
        return self.log(LogLevel.WARN, message, **extra)

    def error(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau ERROR."""
        return self.log(LogLevel.ERROR, message, **extra)

    def critical(self, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log niveau CRITICAL."""
        return self.log(LogLevel.CRITICAL, message, **extra)

    def get_entries(self) -> List[LogEntry]:
        """Retourne les entrées de log conservées."""
        with self._lock:
            return list(self._entries)

    def clear_entries(self) -> None:
        """Efface les entrées conservées."""
        with self._lock:
            self._entries.clear()

    def get_entries_by_level(self, level: LogLevel) -> List[LogEntry]:
        """Filtre les entrées par niveau."""
        return [e for e in self.get_entries() if e.level == level]

    def with_context(self, correlation_id: Optional[str] = None) -> "ContextualLogger":
        """
        Crée un logger avec correlation_id fixé.

        Args:
            correlation_id: ID corrélation pour ce contexte (généré si absent)
        """
        return ContextualLogger(
            self,
            correlation_id=correlation_id or self._default_correlation_id or str(uuid.uuid4()),
        )


class ContextualLogger:
    """
    Logger avec correlation_id pré-défini.

    Utilisé pour relier toutes les lignes d'une même vérification
    de requête.
    """

    def __init__(self, logger: StructuredLogger, correlation_id: str) -> None:
        self._logger = logger
        self._correlation_id = correlation_id

    @property
    def correlation_id(self) -> str:
        return self._correlation_id

    def log(self, level: LogLevel, message: str, **extra: Any) -> Optional[LogEntry]:
        """Log avec contexte."""
        return self._logger.log(
            level,
            message,
            correlation_id=self._correlation_id,
            **extra,
        )

    def debug(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.DEBUG, message, **extra)

    def info(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.INFO, message, **extra)

    def warn(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.WARN, message, **extra)

    def error(self, message: str, **extra: Any) -> Optional[LogEntry]:
        return self.log(LogLevel.ERROR, message, **extra)
