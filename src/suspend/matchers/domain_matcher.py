"""
SUSPEND - Matchers - Domain

Noms de domaine. Un domaine suspendu couvre aussi ses sous-domaines:
    "example.com"    -> example.com, mail.example.com, a.b.example.com
    "*.example.com"  -> idem (forme explicite)
    "mail.*.com"     -> un label quelconque à la place du joker
"""

import re
from functools import lru_cache
from typing import Any, Optional, Pattern

from .interfaces import IMatcher, MatchType, coerce_to_text


_SCHEME_RE = re.compile(r"^https?://")
_DOMAIN_RE = re.compile(r"^(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,}$")


@lru_cache(maxsize=512)
def _wildcard_to_regex(pattern: str) -> Pattern[str]:
    escaped = re.escape(pattern).replace(r"\*", "[a-z0-9-]+")
    return re.compile(f"^{escaped}$")


class DomainMatcher(IMatcher):
    """Correspondance de domaines avec couverture des sous-domaines."""

    def type(self) -> str:
        return MatchType.DOMAIN.value

    def normalize(self, value: Any) -> str:
        """
        Minuscules, sans schéma http(s)://, sans chemin, sans point final.

        Les étapes sont répétées jusqu'à stabilité pour que la
        normalisation reste idempotente ("http://a.com./x" -> "a.com").
        """
        domain = coerce_to_text(value).lower()

        while True:
            reduced = self._reduce(domain)
            if reduced == domain:
                return reduced
            domain = reduced

    @staticmethod
    def _reduce(domain: str) -> str:
        domain = domain.strip()
        domain = _SCHEME_RE.sub("", domain, count=1)
        slash = domain.find("/")
        if slash != -1:
            domain = domain[:slash]
        return domain.rstrip(".")

    def matches(self, stored_value: str, candidate: Any) -> bool:
        suspended = self.normalize(stored_value)
        domain = self.normalize(candidate)

        if not suspended or not domain:
            return False

        if suspended == domain:
            return True

        if "*" in suspended:
            return self._matches_pattern(suspended, domain)

        # Sous-domaine du domaine suspendu
        return domain.endswith("." + suspended)

    def validate(self, value: Any) -> bool:
        normalized = self.normalize(value)

        if "*" in normalized:
            return self._validate_pattern(normalized)

        return _DOMAIN_RE.match(normalized) is not None

    def extract(self, value: Any) -> Optional[str]:
        """
        Domaine racine simplifié: les deux derniers labels.

        Note: ne tient pas compte des suffixes publics multi-labels (co.uk).
        """
        labels = self.normalize(value).split(".")
        if len(labels) < 2 or not all(labels[-2:]):
            return None
        return ".".join(labels[-2:])

    @staticmethod
    def _matches_pattern(pattern: str, domain: str) -> bool:
        if pattern.startswith("*."):
            base = pattern[2:]
            if "*" not in base:
                return domain == base or domain.endswith("." + base)

        return _wildcard_to_regex(pattern).match(domain) is not None

    @staticmethod
    def _validate_pattern(pattern: str) -> bool:
        if "." not in pattern:
            return False

        without_wildcards = pattern.replace("*", "")
        return without_wildcards not in ("", ".")
