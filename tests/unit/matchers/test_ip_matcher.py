"""
Tests unitaires pour IpMatcher: adresses exactes et plages CIDR
IPv4/IPv6.
"""

import ipaddress

import pytest

from suspend.matchers import IpMatcher, ipv4_in_cidr, ipv6_in_cidr


class TestIpMatcherExact:
    def setup_method(self) -> None:
        self.matcher = IpMatcher()

    def test_type(self) -> None:
        assert self.matcher.type() == "ip"

    def test_exact_ipv4(self) -> None:
        assert self.matcher.matches("192.168.1.1", "192.168.1.1")
        assert not self.matcher.matches("192.168.1.1", "192.168.1.2")

    def test_exact_ipv6(self) -> None:
        assert self.matcher.matches("2001:db8::1", "2001:db8::1")

    def test_whitespace_trimmed(self) -> None:
        assert self.matcher.normalize("  192.168.1.1  ") == "192.168.1.1"
        assert self.matcher.matches(" 10.0.0.1", "10.0.0.1 ")

    def test_extract_none(self) -> None:
        assert self.matcher.extract("192.168.1.1") is None


class TestIpMatcherCidr:
    def setup_method(self) -> None:
        self.matcher = IpMatcher()

    @pytest.mark.parametrize(
        "cidr, ip, expected",
        [
            ("192.168.1.0/24", "192.168.1.1", True),
            ("192.168.1.0/24", "192.168.1.255", True),
            ("192.168.1.0/24", "192.168.2.1", False),
            ("10.0.0.0/16", "10.0.255.255", True),
            ("10.0.0.0/16", "10.1.0.1", False),
            ("10.0.0.0/8", "10.255.255.255", True),
            ("10.0.0.0/8", "11.0.0.1", False),
            ("0.0.0.0/0", "8.8.8.8", True),
            ("192.168.1.10/32", "192.168.1.10", True),
            ("192.168.1.10/32", "192.168.1.11", False),
        ],
    )
    def test_ipv4_ranges(self, cidr: str, ip: str, expected: bool) -> None:
        assert self.matcher.matches(cidr, ip) is expected

    @pytest.mark.parametrize(
        "cidr, ip, expected",
        [
            ("2001:db8::/32", "2001:db8::1", True),
            ("2001:db8::/32", "2001:db8:ffff::1", True),
            ("2001:db8::/32", "2001:db9::1", False),
            ("2001:db8::/36", "2001:db8:0000::1", True),
            ("2001:db8::/36", "2001:db8:f000::1", False),
            ("2001:db8::/36", "2001:db8:0fff::1", True),
            ("::/0", "2001:db8::1", True),
        ],
    )
    def test_ipv6_ranges(self, cidr: str, ip: str, expected: bool) -> None:
        assert self.matcher.matches(cidr, ip) is expected

    def test_family_mismatch(self) -> None:
        assert not self.matcher.matches("10.0.0.0/8", "::ffff:10.0.0.1")
        assert not self.matcher.matches("::/0", "10.0.0.1")

    @pytest.mark.parametrize(
        "cidr, ip",
        [
            ("192.168.1.0/24", "invalid-ip"),
            ("2001:db8::/32", "invalid-ip"),
            ("invalid/24", "192.168.1.1"),
            ("invalid::/32", "2001:db8::1"),
            ("10.0.0.0/+8", "10.0.0.1"),
        ],
    )
    def test_invalid_input_no_match(self, cidr: str, ip: str) -> None:
        assert not self.matcher.matches(cidr, ip)

    def test_in_cidr_direct(self) -> None:
        assert self.matcher.in_cidr("172.16.0.0/12", "172.31.255.255")
        assert not self.matcher.in_cidr("172.16.0.0/12", "172.32.0.0")


class TestIpMatcherValidate:
    def setup_method(self) -> None:
        self.matcher = IpMatcher()

    @pytest.mark.parametrize(
        "value",
        [
            "192.168.1.1",
            "0.0.0.0",
            "255.255.255.255",
            "2001:db8::1",
            "::1",
            "192.168.1.0/24",
            "192.168.1.0/0",
            "192.168.1.0/32",
            "2001:db8::/0",
            "2001:db8::/128",
        ],
    )
    def test_accepts(self, value: str) -> None:
        assert self.matcher.validate(value)

    @pytest.mark.parametrize(
        "value",
        [
            "not-an-ip",
            "256.256.256.256",
            "192.168.1.0/33",
            "192.168.1.0/abc",
            "192.168.1.0/24/16",
            "2001:db8::/129",
            "999.999.999.999/24",
            "10.0.0.0/ 8",
            "10.0.0.0/08",
            "2001:db8::/032",
            "",
        ],
    )
    def test_rejects(self, value: str) -> None:
        assert not self.matcher.validate(value)


class TestCidrHelpers:
    def test_ipv4_mask_arithmetic(self) -> None:
        subnet = ipaddress.IPv4Address("192.168.0.0")

        assert ipv4_in_cidr(subnet, 23, ipaddress.IPv4Address("192.168.1.200"))
        assert not ipv4_in_cidr(subnet, 23, ipaddress.IPv4Address("192.168.2.0"))

    def test_ipv6_partial_byte(self) -> None:
        subnet = ipaddress.IPv6Address("2001:db8::")

        assert ipv6_in_cidr(subnet, 33, ipaddress.IPv6Address("2001:db8:7fff::1"))
        assert not ipv6_in_cidr(subnet, 33, ipaddress.IPv6Address("2001:db8:8000::1"))
