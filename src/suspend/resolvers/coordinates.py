"""
SUSPEND - Resolvers - Coordinates

Coordonnées géographiques et distance orthodromique (haversine).
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from ..core.interfaces import SuspendError


EARTH_RADIUS_KM = 6371.0


class MissingLatitudeKeyError(SuspendError):
    """Aucune clé latitude/lat dans les données."""

    pass


class MissingLongitudeKeyError(SuspendError):
    """Aucune clé longitude/lon/lng dans les données."""

    pass


@dataclass(frozen=True)
class Coordinates:
    """Latitude et longitude en degrés décimaux."""

    latitude: float
    longitude: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Coordinates":
        """
        Construit depuis un dictionnaire de fournisseur geo.

        Clés acceptées: latitude|lat et longitude|lon|lng.

        Raises:
            MissingLatitudeKeyError: Latitude absente
            MissingLongitudeKeyError: Longitude absente
        """
        if "latitude" in data:
            lat = data["latitude"]
        elif "lat" in data:
            lat = data["lat"]
        else:
            raise MissingLatitudeKeyError("Coordinates require a 'latitude' or 'lat' key")

        for key in ("longitude", "lon", "lng"):
            if key in data:
                lon = data[key]
                break
        else:
            raise MissingLongitudeKeyError(
                "Coordinates require a 'longitude', 'lon' or 'lng' key"
            )

        return cls(latitude=float(lat), longitude=float(lon))

    def to_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    def distance_to(self, other: "Coordinates") -> float:
        """Distance en kilomètres jusqu'à d'autres coordonnées."""
        lat_from = math.radians(self.latitude)
        lat_to = math.radians(other.latitude)
        lat_delta = lat_to - lat_from
        lon_delta = math.radians(other.longitude) - math.radians(self.longitude)

        a = (
            math.sin(lat_delta / 2) ** 2
            + math.cos(lat_from) * math.cos(lat_to) * math.sin(lon_delta / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        return EARTH_RADIUS_KM * c
