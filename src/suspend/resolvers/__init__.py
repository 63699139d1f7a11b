"""
SUSPEND - Resolvers

Extraction des faits de requête consommés par les stratégies:
IP cliente, géolocalisation, empreinte d'appareil.
"""

from .coordinates import (
    Coordinates,
    MissingLatitudeKeyError,
    MissingLongitudeKeyError,
)
from .interfaces import IIpResolver, IGeoResolver, IDeviceResolver
from .ip_resolvers import (
    StandardIpResolver,
    HeaderIpResolver,
    TrustedProxyIpResolver,
    build_ip_resolver,
)
from .geo_resolvers import (
    NullGeoResolver,
    ChainGeoResolver,
    CloudflareGeoResolver,
    StaticGeoResolver,
    GeoLocation,
)
from .device_resolver import HeaderDeviceResolver

__all__ = [
    # Interfaces
    "IIpResolver",
    "IGeoResolver",
    "IDeviceResolver",
    # Data classes
    "Coordinates",
    "GeoLocation",
    # Implementations
    "StandardIpResolver",
    "HeaderIpResolver",
    "TrustedProxyIpResolver",
    "NullGeoResolver",
    "ChainGeoResolver",
    "CloudflareGeoResolver",
    "StaticGeoResolver",
    "HeaderDeviceResolver",
    # Factories
    "build_ip_resolver",
    # Exceptions
    "MissingLatitudeKeyError",
    "MissingLongitudeKeyError",
]
