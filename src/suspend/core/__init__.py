"""
SUSPEND - Core

Types transverses:
- Erreur racine SuspendError
- Contexte de requête abstrait (RequestContext)
- Configuration pydantic chargée depuis YAML
"""

from .interfaces import (
    # Erreurs
    SuspendError,
    RegistryFrozenError,
    # Horloge
    Clock,
    utc_now,
    ensure_aware,
    # Contexte
    RequestContext,
    RequestProvider,
    current_request,
    bind_request,
    # Configuration
    IP_RESOLVERS,
    GuardConfig,
    LoggingConfig,
    SuspendConfig,
    # Interfaces
    IConfigLoader,
)
from .config_loader import ConfigLoader, ConfigIntegrityError

__all__ = [
    "SuspendError",
    "RegistryFrozenError",
    "Clock",
    "utc_now",
    "ensure_aware",
    "RequestContext",
    "RequestProvider",
    "current_request",
    "bind_request",
    "IP_RESOLVERS",
    "GuardConfig",
    "LoggingConfig",
    "SuspendConfig",
    "IConfigLoader",
    "ConfigLoader",
    "ConfigIntegrityError",
]
