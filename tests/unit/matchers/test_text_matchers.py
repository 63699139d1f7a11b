"""
Tests unitaires pour les matchers à motifs joker: email, domain,
phone et glob.
"""

import pytest

from suspend.matchers import DomainMatcher, EmailMatcher, GlobMatcher, PhoneMatcher


class TestEmailMatcher:
    def setup_method(self) -> None:
        self.matcher = EmailMatcher()

    def test_exact_case_insensitive(self) -> None:
        assert self.matcher.matches("John@Example.com", "john@example.COM")

    def test_domain_wildcard(self) -> None:
        assert self.matcher.matches("*@spam.example", "Bob@Spam.Example")
        assert not self.matcher.matches("*@spam.example", "bob@ham.example")

    def test_local_wildcard(self) -> None:
        assert self.matcher.matches("admin@*", "admin@foo.org")
        assert not self.matcher.matches("admin@*", "root@foo.org")

    def test_partial_wildcard(self) -> None:
        assert self.matcher.matches("*bot*@example.com", "mybot1@example.com")
        assert not self.matcher.matches("*bot*@example.com", "human@example.com")

    def test_wildcard_does_not_cross_at(self) -> None:
        assert not self.matcher.matches("*@example.com", "a@b@example.com")

    def test_empty_values(self) -> None:
        assert not self.matcher.matches("", "a@b.com")
        assert not self.matcher.matches("a@b.com", None)

    @pytest.mark.parametrize(
        "value", ["john@example.com", "first.last+tag@sub.example.org", "*@spam.example", "admin@*"]
    )
    def test_validate_accepts(self, value: str) -> None:
        assert self.matcher.validate(value)

    @pytest.mark.parametrize("value", ["*@*", "john", "a@b@c.com", "john@", "*", "john@localhost"])
    def test_validate_rejects(self, value: str) -> None:
        assert not self.matcher.validate(value)

    def test_extract_domain(self) -> None:
        assert self.matcher.extract("John@Example.com") == "example.com"
        assert self.matcher.extract("no-at-sign") is None

    def test_normalize_idempotent(self) -> None:
        once = self.matcher.normalize("  John@Example.COM ")

        assert once == "john@example.com"
        assert self.matcher.normalize(once) == once


class TestDomainMatcher:
    def setup_method(self) -> None:
        self.matcher = DomainMatcher()

    def test_subdomains_covered(self) -> None:
        assert self.matcher.matches("example.com", "example.com")
        assert self.matcher.matches("example.com", "mail.example.com")
        assert self.matcher.matches("example.com", "a.b.example.com")

    def test_suffix_without_dot_not_covered(self) -> None:
        assert not self.matcher.matches("example.com", "notexample.com")

    def test_leading_wildcard(self) -> None:
        assert self.matcher.matches("*.example.com", "example.com")
        assert self.matcher.matches("*.example.com", "mail.example.com")
        assert not self.matcher.matches("*.example.com", "example.org")

    def test_inner_wildcard_single_label(self) -> None:
        assert self.matcher.matches("mail.*.com", "mail.foo.com")
        assert not self.matcher.matches("mail.*.com", "mail.a.b.com")

    def test_normalize(self) -> None:
        assert self.matcher.normalize("HTTP://Example.COM./path") == "example.com"
        assert self.matcher.normalize("https://mail.example.com/") == "mail.example.com"

    def test_normalize_idempotent(self) -> None:
        once = self.matcher.normalize("http://a.com./x")

        assert self.matcher.normalize(once) == once

    @pytest.mark.parametrize("value", ["example.com", "sub.example.co.uk", "*.example.com", "mail.*.com"])
    def test_validate_accepts(self, value: str) -> None:
        assert self.matcher.validate(value)

    @pytest.mark.parametrize("value", ["localhost", "*", "*.", "-bad.com", ""])
    def test_validate_rejects(self, value: str) -> None:
        assert not self.matcher.validate(value)

    def test_extract_root(self) -> None:
        assert self.matcher.extract("a.b.example.com") == "example.com"
        assert self.matcher.extract("localhost") is None


class TestPhoneMatcher:
    def setup_method(self) -> None:
        self.matcher = PhoneMatcher()

    def test_normalize_keeps_digits_and_plus(self) -> None:
        assert self.matcher.normalize("+1 (555) 123-4567") == "+15551234567"
        assert self.matcher.normalize("555.123.4567") == "5551234567"

    def test_plus_ignored_for_comparison(self) -> None:
        assert self.matcher.matches("+15551234567", "1 555 123 4567")
        assert self.matcher.matches("15551234567", "+1-555-123-4567")
        assert not self.matcher.matches("+15551234567", "+15551234568")

    def test_prefix_wildcard(self) -> None:
        assert self.matcher.matches("+1555*", "+1 555 999 0000")
        assert not self.matcher.matches("+1555*", "+1 666 999 0000")

    def test_empty_candidate(self) -> None:
        assert not self.matcher.matches("+15551234567", "")
        assert not self.matcher.matches("+1555*", "abc")

    @pytest.mark.parametrize("value", ["+15551234567", "5551234", "+1555*", "44*"])
    def test_validate_accepts(self, value: str) -> None:
        assert self.matcher.validate(value)

    @pytest.mark.parametrize("value", ["123", "1" * 16, "", "*"])
    def test_validate_rejects(self, value: str) -> None:
        assert not self.matcher.validate(value)

    def test_extract_country_code(self) -> None:
        assert self.matcher.extract("+441234567890") == "441"
        assert self.matcher.extract("5551234567") is None


class TestGlobMatcher:
    def setup_method(self) -> None:
        self.matcher = GlobMatcher()

    @pytest.mark.parametrize(
        "pattern, value",
        [
            ("test-*", "Test-User"),
            ("user-?", "user-7"),
            ("[abc]*", "banana"),
            ("[!abc]*", "delta"),
        ],
    )
    def test_matches(self, pattern: str, value: str) -> None:
        assert self.matcher.matches(pattern, value)

    def test_no_match(self) -> None:
        assert not self.matcher.matches("user-?", "user-42")
        assert not self.matcher.matches("[!abc]*", "alpha")

    def test_empty_pattern(self) -> None:
        assert not self.matcher.matches("", "")
        assert not self.matcher.validate(" ")
