"""
SUSPEND - Matchers - Glob

Motifs de type shell, insensibles à la casse:
    "*"        -> toute suite de caractères
    "?"        -> un caractère
    "[abc]"    -> classe de caractères
    "[!abc]"   -> classe exclue
"""

from fnmatch import fnmatchcase
from typing import Any, Optional

from .interfaces import IMatcher, MatchType, coerce_to_text


class GlobMatcher(IMatcher):
    """Correspondance par motif glob sur une chaîne arbitraire."""

    def type(self) -> str:
        return MatchType.GLOB.value

    def normalize(self, value: Any) -> str:
        return coerce_to_text(value).strip()

    def matches(self, stored_value: str, candidate: Any) -> bool:
        pattern = self.normalize(stored_value)
        if not pattern:
            return False

        value = self.normalize(candidate)
        return fnmatchcase(value.lower(), pattern.lower())

    def validate(self, value: Any) -> bool:
        return self.normalize(value) != ""

    def extract(self, value: Any) -> Optional[str]:
        return None
