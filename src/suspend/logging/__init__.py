"""
SUSPEND - Logging

Logging structuré JSON:
- Timestamp ISO 8601 UTC, niveau, correlation_id, message
- Masquage des secrets et des données personnelles
- Entrées conservées en mémoire (bornées) pour inspection
"""

from .interfaces import (
    # Enums
    LogLevel,
    # Dataclasses
    LogEntry,
    LogConfig,
    # Interfaces
    IStructuredLogger,
    ISensitiveMasker,
)
from .sensitive_masker import SensitiveMasker
from .structured_logger import (
    StructuredLogger,
    ContextualLogger,
    MissingMessageError,
)

__all__ = [
    "LogLevel",
    "LogEntry",
    "LogConfig",
    "IStructuredLogger",
    "ISensitiveMasker",
    "SensitiveMasker",
    "StructuredLogger",
    "ContextualLogger",
    "MissingMessageError",
]
