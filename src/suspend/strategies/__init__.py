"""
SUSPEND - Strategies

Conditions d'application d'une suspension: toujours, plage horaire,
IP, pays, empreinte d'appareil ou prédicat applicatif.
"""

from .interfaces import IStrategy, StrategyType
from .simple_strategy import SimpleStrategy
from .time_window_strategy import TimeWindowStrategy, InvalidTimeFormatError, weekday_sunday_first
from .ip_address_strategy import IpAddressStrategy
from .country_strategy import CountryStrategy
from .device_fingerprint_strategy import DeviceFingerprintStrategy
from .conditional_strategy import ConditionalStrategy, Predicate
from .strategy_registry import (
    StrategyRegistry,
    InvalidStrategyError,
    UnknownStrategyError,
    MissingStrategyMetadataError,
)

__all__ = [
    # Interfaces
    "IStrategy",
    "StrategyType",
    "Predicate",
    # Implementations
    "SimpleStrategy",
    "TimeWindowStrategy",
    "IpAddressStrategy",
    "CountryStrategy",
    "DeviceFingerprintStrategy",
    "ConditionalStrategy",
    "StrategyRegistry",
    # Helpers
    "weekday_sunday_first",
    # Exceptions
    "InvalidStrategyError",
    "UnknownStrategyError",
    "MissingStrategyMetadataError",
    "InvalidTimeFormatError",
]
