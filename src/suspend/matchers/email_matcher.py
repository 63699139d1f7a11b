"""
SUSPEND - Matchers - Email

Adresses email avec motifs joker:
    "*@spam.example"   -> toute adresse du domaine
    "admin@*"          -> la boîte "admin" sur tout domaine
    "*bot*@example.com" -> joker partiel dans la partie locale
"""

import re
from functools import lru_cache
from typing import Any, Optional, Pattern

from .interfaces import IMatcher, MatchType, coerce_to_text


_ATOM = r"[a-z0-9!#$%&'+/=?^_`{|}~-]+"
_LABEL = r"[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?"
_EMAIL_RE = re.compile(
    rf"^{_ATOM}(?:\.{_ATOM})*@(?:{_LABEL}\.)+{_LABEL}$",
    re.IGNORECASE,
)


@lru_cache(maxsize=512)
def _wildcard_to_regex(pattern: str) -> Pattern[str]:
    # Le joker ne franchit jamais le "@"
    escaped = re.escape(pattern).replace(r"\*", "[^@]*")
    return re.compile(f"^{escaped}$", re.IGNORECASE)


class EmailMatcher(IMatcher):
    """Correspondance d'adresses email, insensible à la casse."""

    def type(self) -> str:
        return MatchType.EMAIL.value

    def normalize(self, value: Any) -> str:
        return coerce_to_text(value).strip().lower()

    def matches(self, stored_value: str, candidate: Any) -> bool:
        suspended = self.normalize(stored_value)
        email = self.normalize(candidate)

        if not suspended or not email:
            return False

        if suspended == email:
            return True

        if "*" in suspended:
            return _wildcard_to_regex(suspended).match(email) is not None

        return False

    def validate(self, value: Any) -> bool:
        """
        Valide une adresse ou un motif joker.

        Un motif doit contenir exactement un "@" et au moins un côté
        avec un contenu autre que "*" ("*@*" est refusé).
        """
        normalized = self.normalize(value)

        if "*" in normalized:
            return self._validate_pattern(normalized)

        if normalized.count("@") != 1 or len(normalized) > 254:
            return False

        local = normalized.split("@")[0]
        if len(local) > 64:
            return False

        return _EMAIL_RE.match(normalized) is not None

    def extract(self, value: Any) -> Optional[str]:
        """Retourne le domaine situé après l'unique "@"."""
        parts = self.normalize(value).split("@")
        if len(parts) != 2:
            return None
        return parts[1]

    @staticmethod
    def _validate_pattern(pattern: str) -> bool:
        parts = pattern.split("@")
        if len(parts) != 2:
            return False

        local, domain = parts
        return (local not in ("", "*")) or (domain not in ("", "*"))
