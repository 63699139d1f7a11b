"""
SUSPEND - Matchers

Normalisation, correspondance, validation et extraction par type de
valeur: exact, email, domain, phone, ip, country, fingerprint, glob,
regex.
"""

from .interfaces import IMatcher, MatchType, coerce_to_text
from .exact_matcher import ExactMatcher
from .email_matcher import EmailMatcher
from .domain_matcher import DomainMatcher
from .phone_matcher import PhoneMatcher
from .ip_matcher import IpMatcher, ipv4_in_cidr, ipv6_in_cidr
from .country_matcher import CountryMatcher, ISO_3166_ALPHA2
from .fingerprint_matcher import FingerprintMatcher
from .glob_matcher import GlobMatcher
from .regex_matcher import RegexMatcher, InvalidPatternError, parse_delimited
from .matcher_registry import (
    MatcherRegistry,
    InvalidMatcherError,
    UnknownMatcherTypeError,
    InvalidMatcherValueError,
)

__all__ = [
    # Interfaces
    "IMatcher",
    "MatchType",
    "coerce_to_text",
    # Implementations
    "ExactMatcher",
    "EmailMatcher",
    "DomainMatcher",
    "PhoneMatcher",
    "IpMatcher",
    "CountryMatcher",
    "FingerprintMatcher",
    "GlobMatcher",
    "RegexMatcher",
    "MatcherRegistry",
    # Helpers
    "ipv4_in_cidr",
    "ipv6_in_cidr",
    "parse_delimited",
    "ISO_3166_ALPHA2",
    # Exceptions
    "InvalidMatcherError",
    "UnknownMatcherTypeError",
    "InvalidMatcherValueError",
    "InvalidPatternError",
]
