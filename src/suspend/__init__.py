"""
SUSPEND

Suspension et bannissement avec historique auditable:
- core: contexte de requête, configuration, erreurs
- logging: logs structurés JSON avec masquage
- matchers: correspondance par type de valeur (email, IP/CIDR, ...)
- resolvers: IP cliente, géolocalisation, empreinte d'appareil
- strategies: conditions d'application (horaire, IP, pays, ...)
- suspension: statut, stockage, événements, manager, garde

Assemblage par défaut:

    config = ConfigLoader("suspend.yaml").load()
    manager = build_manager(config)
    guard = build_guard(manager, config)
"""

from typing import Iterable, Optional

from .core import SuspendConfig, Clock
from .logging import LogConfig, LogLevel, SensitiveMasker, StructuredLogger
from .matchers import IMatcher, MatcherRegistry
from .resolvers import IGeoResolver, NullGeoResolver, HeaderDeviceResolver, build_ip_resolver
from .strategies import IStrategy, StrategyRegistry
from .suspension import (
    ISuspensionEventSink,
    ISuspensionRepository,
    InMemorySuspensionRepository,
    SuspendManager,
    SuspensionGuard,
)

__version__ = "1.0.0"


def build_logger(config: SuspendConfig, name: str = "suspend") -> StructuredLogger:
    """Logger structuré configuré depuis la section logging."""
    log_config = LogConfig(
        min_level=LogLevel.from_name(config.logging.min_level),
        mask_sensitive=config.logging.mask_sensitive,
    )
    return StructuredLogger(name, config=log_config, masker=SensitiveMasker())


def build_manager(
    config: Optional[SuspendConfig] = None,
    repository: Optional[ISuspensionRepository] = None,
    geo_resolver: Optional[IGeoResolver] = None,
    event_sink: Optional[ISuspensionEventSink] = None,
    clock: Optional[Clock] = None,
    logger: Optional[StructuredLogger] = None,
    extra_matchers: Iterable[IMatcher] = (),
    extra_strategies: Iterable[IStrategy] = (),
) -> SuspendManager:
    """
    Assemble un SuspendManager avec les composants par défaut.

    Args:
        config: Configuration (défaut: SuspendConfig())
        repository: Dépôt (défaut: en mémoire)
        geo_resolver: Géolocalisation (défaut: aucune)
        event_sink: Destination des événements
        clock: Horloge injectable
        logger: Logger (défaut: construit depuis la configuration)
        extra_matchers: Matchers applicatifs enregistrés avant le gel
        extra_strategies: Stratégies applicatives (ConditionalStrategy, ...)

    Returns:
        Manager prêt à l'emploi, registres figés
    """
    config = config or SuspendConfig()
    logger = logger or build_logger(config)
    ip_resolver = build_ip_resolver(config)
    geo_resolver = geo_resolver or NullGeoResolver()

    matchers = MatcherRegistry.with_defaults(regex_timeout=config.regex_timeout)
    for matcher in extra_matchers:
        matchers.register(matcher)

    strategies = StrategyRegistry.with_defaults(
        ip_resolver,
        geo_resolver,
        HeaderDeviceResolver(config.device_header),
        clock=clock,
        default_timezone=config.timezone,
    )
    for strategy in extra_strategies:
        strategies.register(strategy)

    return SuspendManager(
        repository=repository or InMemorySuspensionRepository(),
        matchers=matchers.freeze(),
        strategies=strategies.freeze(),
        ip_resolver=ip_resolver,
        geo_resolver=geo_resolver,
        event_sink=event_sink,
        logger=logger.child("manager"),
        clock=clock,
    )


def build_guard(manager: SuspendManager, config: Optional[SuspendConfig] = None) -> SuspensionGuard:
    """Garde de requêtes configuré depuis la section guard."""
    config = config or SuspendConfig()
    return SuspensionGuard(manager, config.guard)


__all__ = [
    "__version__",
    "build_logger",
    "build_manager",
    "build_guard",
]
