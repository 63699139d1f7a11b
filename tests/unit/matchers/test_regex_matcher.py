"""
Tests unitaires pour RegexMatcher: motifs délimités, modificateurs
et exécution bornée par timeout.
"""

import pytest

from suspend.matchers import InvalidPatternError, RegexMatcher, parse_delimited


class TestParseDelimited:
    def test_slash_with_flags(self) -> None:
        body, flags = parse_delimited("/^spam$/im")

        assert body == "^spam$"
        assert flags != 0

    def test_bracket_delimiters(self) -> None:
        assert parse_delimited("{^bot}")[0] == "^bot"
        assert parse_delimited("(a|b)")[0] == "a|b"

    @pytest.mark.parametrize("pattern", ["/", "abc", "\\a\\", "/abc", "/abc/z", " abc "])
    def test_invalid(self, pattern: str) -> None:
        with pytest.raises(InvalidPatternError):
            parse_delimited(pattern)


class TestRegexMatcher:
    def setup_method(self) -> None:
        self.matcher = RegexMatcher()

    def test_type_and_timeout(self) -> None:
        assert self.matcher.type() == "regex"
        assert self.matcher.timeout == 0.25

    @pytest.mark.parametrize(
        "pattern, value",
        [
            ("/^spam.*$/i", "SPAMMER"),
            ("#^admin-[0-9]+$#", "admin-42"),
            ("{^bot}", "botnet"),
            ("/first.second/s", "first\nsecond"),
            ("/^line2$/m", "line1\nline2"),
            ("/ a b c /x", "abc"),
        ],
    )
    def test_matches(self, pattern: str, value: str) -> None:
        assert self.matcher.matches(pattern, value)

    def test_no_match(self) -> None:
        assert not self.matcher.matches("/^spam$/", "SPAM")
        assert not self.matcher.matches("#^admin-[0-9]+$#", "admin-x")

    def test_candidate_not_trimmed(self) -> None:
        assert not self.matcher.matches("/^a$/", " a")

    def test_invalid_pattern_no_match(self) -> None:
        assert not self.matcher.matches("/[unclosed/", "[unclosed")
        assert not self.matcher.matches("abc", "abc")
        assert not self.matcher.matches("", "")

    def test_validate(self) -> None:
        assert self.matcher.validate("/^spam.*$/i")
        assert not self.matcher.validate("/[unclosed/")
        assert not self.matcher.validate("/abc/q")
        assert not self.matcher.validate("")

    def test_catastrophic_backtracking_bounded(self) -> None:
        matcher = RegexMatcher(timeout=0.05)

        assert not matcher.matches("/(a+)+$/", "a" * 5000 + "!")
