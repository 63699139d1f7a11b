"""
SUSPEND - Matchers - Exact

Égalité stricte (sensible à la casse) après suppression des espaces.
"""

from typing import Any, Optional

from .interfaces import IMatcher, MatchType, coerce_to_text


class ExactMatcher(IMatcher):
    """Correspondance exacte sur une chaîne arbitraire."""

    def type(self) -> str:
        return MatchType.EXACT.value

    def normalize(self, value: Any) -> str:
        return coerce_to_text(value).strip()

    def matches(self, stored_value: str, candidate: Any) -> bool:
        stored = self.normalize(stored_value)
        if not stored:
            return False
        return stored == self.normalize(candidate)

    def validate(self, value: Any) -> bool:
        return self.normalize(value) != ""

    def extract(self, value: Any) -> Optional[str]:
        return None
