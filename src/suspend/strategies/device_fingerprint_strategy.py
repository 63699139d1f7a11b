"""
SUSPEND - Strategies - Device Fingerprint

Suspension limitée à un appareil (metadata["fingerprint"]).
"""

from typing import Any, Mapping, Optional

from ..core.interfaces import RequestContext
from ..matchers.fingerprint_matcher import FingerprintMatcher
from ..resolvers.interfaces import IDeviceResolver
from .interfaces import IStrategy, StrategyType


class DeviceFingerprintStrategy(IStrategy):
    """S'applique si l'empreinte du client est celle enregistrée."""

    REQUIRED_METADATA = ("fingerprint",)

    def __init__(
        self,
        device_resolver: IDeviceResolver,
        fingerprint_matcher: Optional[FingerprintMatcher] = None,
    ):
        self._device_resolver = device_resolver
        self._matcher = fingerprint_matcher or FingerprintMatcher()

    def identifier(self) -> str:
        return StrategyType.DEVICE_FINGERPRINT.value

    def matches(self, request: RequestContext, metadata: Mapping[str, Any]) -> bool:
        fingerprint = metadata.get("fingerprint")
        if not isinstance(fingerprint, str):
            return False

        device = self._device_resolver.resolve(request)
        if device is None:
            return False

        return self._matcher.matches(fingerprint, device)
