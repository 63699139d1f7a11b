"""
SUSPEND - Matchers - Regex

Expressions régulières délimitées, à la manière de PCRE:
    "/^spam.*$/i"
    "#^admin-[0-9]+$#"
    "{^bot}"

Modificateurs acceptés: i, m, s, x, u. Tout autre modificateur rend
le motif invalide.

L'exécution est bornée par le timeout par appel du module `regex`:
un motif à retour arrière catastrophique ne peut pas bloquer
l'appelant, il est simplement considéré comme non correspondant.
"""

from functools import lru_cache
from typing import Any, Optional, Pattern, Tuple

import regex

from .interfaces import IMatcher, MatchType, coerce_to_text


DEFAULT_TIMEOUT = 0.25

_BRACKET_DELIMITERS = {"(": ")", "[": "]", "{": "}", "<": ">"}

_FLAGS = {
    "i": regex.IGNORECASE,
    "m": regex.MULTILINE,
    "s": regex.DOTALL,
    "x": regex.VERBOSE,
    "u": 0,
}


class InvalidPatternError(ValueError):
    """Motif délimité mal formé."""
    pass


def parse_delimited(pattern: str) -> Tuple[str, int]:
    """
    Sépare un motif délimité en (corps, drapeaux).

    Raises:
        InvalidPatternError: Délimiteur absent ou modificateur inconnu
    """
    if len(pattern) < 2:
        raise InvalidPatternError("Pattern too short")

    opening = pattern[0]
    if opening.isalnum() or opening.isspace() or opening == "\\":
        raise InvalidPatternError(f"Invalid delimiter: {opening!r}")

    closing = _BRACKET_DELIMITERS.get(opening, opening)
    end = pattern.rfind(closing)
    if end <= 0:
        raise InvalidPatternError(f"Missing closing delimiter: {closing!r}")

    body = pattern[1:end]
    flags = 0
    for modifier in pattern[end + 1:]:
        if modifier not in _FLAGS:
            raise InvalidPatternError(f"Unknown modifier: {modifier!r}")
        flags |= _FLAGS[modifier]

    return body, flags


@lru_cache(maxsize=256)
def compile_delimited(pattern: str) -> Pattern:
    """Compile un motif délimité (mis en cache)."""
    body, flags = parse_delimited(pattern)
    return regex.compile(body, flags)


class RegexMatcher(IMatcher):
    """
    Correspondance par expression régulière délimitée.

    Args:
        timeout: Durée maximale d'une évaluation, en secondes
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    def type(self) -> str:
        return MatchType.REGEX.value

    def normalize(self, value: Any) -> str:
        return coerce_to_text(value).strip()

    def matches(self, stored_value: str, candidate: Any) -> bool:
        pattern = self.normalize(stored_value)
        if not pattern:
            return False

        # La valeur testée n'est pas tronquée: les ancres voient les espaces
        return self._search(pattern, coerce_to_text(candidate)) is True

    def validate(self, value: Any) -> bool:
        pattern = self.normalize(value)
        if not pattern:
            return False

        return self._search(pattern, "") is not None

    def extract(self, value: Any) -> Optional[str]:
        return None

    def _search(self, pattern: str, subject: str) -> Optional[bool]:
        """
        Exécute le motif sur la valeur.

        Returns:
            True/False selon la correspondance, None si le motif est
            invalide ou si l'exécution a dépassé le timeout
        """
        try:
            compiled = compile_delimited(pattern)
            return compiled.search(subject, timeout=self._timeout) is not None
        except (InvalidPatternError, regex.error, TimeoutError):
            return None
        except Exception:  # erreurs internes du moteur (RecursionError, ...)
            return None
