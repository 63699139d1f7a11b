"""
SUSPEND - Strategies - Registry

Table identifiant -> stratégie, remplie au démarrage puis figée.
"""

from typing import Any, Dict, List, Mapping, Optional

from ..core.interfaces import Clock, RegistryFrozenError, SuspendError
from ..resolvers.interfaces import IDeviceResolver, IGeoResolver, IIpResolver
from .interfaces import IStrategy
from .simple_strategy import SimpleStrategy
from .time_window_strategy import TimeWindowStrategy
from .ip_address_strategy import IpAddressStrategy
from .country_strategy import CountryStrategy
from .device_fingerprint_strategy import DeviceFingerprintStrategy


class InvalidStrategyError(SuspendError):
    """Stratégie inutilisable pour une suspension."""

    pass


class UnknownStrategyError(InvalidStrategyError):
    """Aucune stratégie enregistrée sous cet identifiant."""

    def __init__(self, strategy: str):
        self.strategy = strategy
        super().__init__(f"Unknown strategy: {strategy!r}")


class MissingStrategyMetadataError(InvalidStrategyError):
    """Métadonnée requise par la stratégie absente."""

    def __init__(self, strategy: str, field: str):
        self.strategy = strategy
        self.field = field
        super().__init__(f"Strategy {strategy!r} requires metadata field: {field}")


class StrategyRegistry:
    """
    Registre des stratégies indexées par identifiant.

    Usage:
        registry = StrategyRegistry.with_defaults(ip_resolver, geo_resolver, device_resolver)
        registry.register(ConditionalStrategy(is_beta_tester, identifier="beta"))
    """

    def __init__(self) -> None:
        self._strategies: Dict[str, IStrategy] = {}
        self._frozen = False

    @classmethod
    def with_defaults(
        cls,
        ip_resolver: IIpResolver,
        geo_resolver: IGeoResolver,
        device_resolver: IDeviceResolver,
        clock: Optional[Clock] = None,
        default_timezone: str = "UTC",
    ) -> "StrategyRegistry":
        """Registre pré-rempli avec les stratégies sans prédicat."""
        registry = cls()
        for strategy in (
            SimpleStrategy(),
            TimeWindowStrategy(clock=clock, default_timezone=default_timezone),
            IpAddressStrategy(ip_resolver),
            CountryStrategy(ip_resolver, geo_resolver),
            DeviceFingerprintStrategy(device_resolver),
        ):
            registry.register(strategy)
        return registry

    def register(self, strategy: IStrategy) -> "StrategyRegistry":
        """
        Enregistre une stratégie sous son identifiant (remplace l'existante).

        Raises:
            RegistryFrozenError: Si le registre a été figé
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register strategy {strategy.identifier()!r}: registry is frozen"
            )
        self._strategies[strategy.identifier()] = strategy
        return self

    def get(self, identifier: str) -> Optional[IStrategy]:
        return self._strategies.get(identifier)

    def require(self, identifier: str, metadata: Optional[Mapping[str, Any]] = None) -> IStrategy:
        """
        Retourne la stratégie après contrôle des métadonnées requises.

        Raises:
            UnknownStrategyError: Identifiant non enregistré
            MissingStrategyMetadataError: Clé requise absente ou nulle
        """
        strategy = self._strategies.get(identifier)
        if strategy is None:
            raise UnknownStrategyError(identifier)

        metadata = metadata or {}
        for field in strategy.REQUIRED_METADATA:
            if metadata.get(field) is None:
                raise MissingStrategyMetadataError(identifier, field)

        return strategy

    def has(self, identifier: str) -> bool:
        return identifier in self._strategies

    def identifiers(self) -> List[str]:
        return list(self._strategies)

    def all(self) -> List[IStrategy]:
        return list(self._strategies.values())

    def freeze(self) -> "StrategyRegistry":
        self._frozen = True
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen
