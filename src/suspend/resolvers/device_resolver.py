"""
SUSPEND - Resolvers - Device

Empreinte d'appareil transmise par le client dans un en-tête.
"""

from typing import Optional

from ..core.interfaces import RequestContext
from .interfaces import IDeviceResolver


DEFAULT_DEVICE_HEADER = "X-Device-Fingerprint"


class HeaderDeviceResolver(IDeviceResolver):
    """Lit l'empreinte dans un en-tête nommé (vide -> None)."""

    def __init__(self, header: str = DEFAULT_DEVICE_HEADER):
        self._header = header

    @property
    def header(self) -> str:
        return self._header

    def resolve(self, request: RequestContext) -> Optional[str]:
        value = request.header(self._header)
        if value is None:
            return None
        value = value.strip()
        return value or None

    def identifier(self) -> str:
        return "header"
