"""
SUSPEND - Matchers - Registry

Table type -> matcher, remplie au démarrage puis figée.

Un type inconnu n'est pas une erreur de lecture: get() retourne None
et c'est à l'appelant de traiter l'absence comme un échec de
validation.
"""

from typing import Dict, List, Optional

from ..core.interfaces import RegistryFrozenError, SuspendError
from .interfaces import IMatcher
from .exact_matcher import ExactMatcher
from .email_matcher import EmailMatcher
from .domain_matcher import DomainMatcher
from .phone_matcher import PhoneMatcher
from .ip_matcher import IpMatcher
from .country_matcher import CountryMatcher
from .fingerprint_matcher import FingerprintMatcher
from .glob_matcher import GlobMatcher
from .regex_matcher import RegexMatcher, DEFAULT_TIMEOUT


class InvalidMatcherError(SuspendError):
    """Critère de correspondance inutilisable."""

    pass


class UnknownMatcherTypeError(InvalidMatcherError):
    """Aucun matcher enregistré pour ce type."""

    def __init__(self, match_type: str):
        self.match_type = match_type
        super().__init__(f"Unknown matcher type: {match_type!r}")


class InvalidMatcherValueError(InvalidMatcherError):
    """Valeur refusée par validate() du matcher."""

    def __init__(self, match_type: str, value: str):
        self.match_type = match_type
        self.value = value
        super().__init__(f"Invalid value for matcher {match_type!r}")


class MatcherRegistry:
    """
    Registre des matchers indexés par type.

    Usage:
        registry = MatcherRegistry.with_defaults()
        registry.get("email").matches("*@spam.example", "bob@spam.example")
    """

    def __init__(self) -> None:
        self._matchers: Dict[str, IMatcher] = {}
        self._frozen = False

    @classmethod
    def with_defaults(cls, regex_timeout: float = DEFAULT_TIMEOUT) -> "MatcherRegistry":
        """Registre pré-rempli avec les neuf matchers fournis."""
        registry = cls()
        for matcher in (
            ExactMatcher(),
            EmailMatcher(),
            DomainMatcher(),
            PhoneMatcher(),
            IpMatcher(),
            CountryMatcher(),
            FingerprintMatcher(),
            GlobMatcher(),
            RegexMatcher(timeout=regex_timeout),
        ):
            registry.register(matcher)
        return registry

    def register(self, matcher: IMatcher) -> "MatcherRegistry":
        """
        Enregistre un matcher sous son type (remplace l'existant).

        Raises:
            RegistryFrozenError: Si le registre a été figé
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register matcher {matcher.type()!r}: registry is frozen"
            )
        self._matchers[matcher.type()] = matcher
        return self

    def get(self, match_type: str) -> Optional[IMatcher]:
        return self._matchers.get(match_type)

    def require(self, match_type: str) -> IMatcher:
        """
        Retourne le matcher ou lève si le type est inconnu.

        Raises:
            UnknownMatcherTypeError: Type non enregistré
        """
        matcher = self._matchers.get(match_type)
        if matcher is None:
            raise UnknownMatcherTypeError(match_type)
        return matcher

    def has(self, match_type: str) -> bool:
        return match_type in self._matchers

    def types(self) -> List[str]:
        return list(self._matchers)

    def all(self) -> List[IMatcher]:
        return list(self._matchers.values())

    def freeze(self) -> "MatcherRegistry":
        self._frozen = True
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen
