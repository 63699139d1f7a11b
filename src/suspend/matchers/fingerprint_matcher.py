"""
SUSPEND - Matchers - Fingerprint

Empreintes d'appareil: comparaison exacte, sensible à la casse,
sans motif.
"""

import re
from typing import Any, Optional

from .interfaces import IMatcher, MatchType, coerce_to_text


_FINGERPRINT_RE = re.compile(r"^[A-Za-z0-9_-]{8,128}$")


class FingerprintMatcher(IMatcher):
    """Correspondance exacte d'empreintes d'appareil."""

    def type(self) -> str:
        return MatchType.FINGERPRINT.value

    def normalize(self, value: Any) -> str:
        return coerce_to_text(value).strip()

    def matches(self, stored_value: str, candidate: Any) -> bool:
        suspended = self.normalize(stored_value)
        if not suspended:
            return False
        return suspended == self.normalize(candidate)

    def validate(self, value: Any) -> bool:
        return _FINGERPRINT_RE.match(self.normalize(value)) is not None

    def extract(self, value: Any) -> Optional[str]:
        return None
