"""
SUSPEND - Matchers - Phone

Numéros de téléphone réduits à leurs chiffres (et au "+" initial):
    "+1 (555) 123-4567" -> "+15551234567"

Un motif terminé par "*" suspend un préfixe: "+1555*".
"""

import re
from typing import Any, Optional

from .interfaces import IMatcher, MatchType, coerce_to_text


_NON_DIGITS_RE = re.compile(r"[^0-9]")
_COUNTRY_CODE_RE = re.compile(r"^\+([0-9]{1,3})")

MIN_DIGITS = 7
MAX_DIGITS = 15


class PhoneMatcher(IMatcher):
    """Correspondance de numéros, insensible au "+" initial."""

    def type(self) -> str:
        return MatchType.PHONE.value

    def normalize(self, value: Any) -> str:
        phone = coerce_to_text(value)
        digits = _NON_DIGITS_RE.sub("", phone)
        return "+" + digits if phone.startswith("+") else digits

    def matches(self, stored_value: str, candidate: Any) -> bool:
        suspended = self.normalize(stored_value)
        phone = self.normalize(candidate)

        if not phone.lstrip("+"):
            return False

        # Le joker disparaît à la normalisation: on le lit sur la valeur brute
        if coerce_to_text(stored_value).strip().endswith("*"):
            prefix = suspended.lstrip("+")
            return bool(prefix) and phone.lstrip("+").startswith(prefix)

        if not suspended.lstrip("+"):
            return False

        if suspended == phone:
            return True

        return suspended.lstrip("+") == phone.lstrip("+")

    def validate(self, value: Any) -> bool:
        digits = self.normalize(value).lstrip("+")

        # Un préfixe "+1555*" peut être plus court qu'un numéro complet
        if coerce_to_text(value).strip().endswith("*"):
            return 1 <= len(digits) <= MAX_DIGITS

        return MIN_DIGITS <= len(digits) <= MAX_DIGITS

    def extract(self, value: Any) -> Optional[str]:
        """
        Indicatif pays: 1 à 3 chiffres après le "+" initial.

        Returns:
            Indicatif ou None si le numéro n'est pas au format international
        """
        match = _COUNTRY_CODE_RE.match(self.normalize(value))
        return match.group(1) if match else None
