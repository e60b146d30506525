"""Tests for the hostname pattern predicate.

Verifies:
1. "*" matches every host
2. "*.suffix" is a plain text suffix test (no dot boundary)
3. Other patterns are exact equality
4. Strict mode adds the dot boundary
"""

import pytest

from switcher.core.exceptions import InvalidInputError
from switcher.core.rule_resolver import extract_host, matches


HOSTS = ["example.com", "www.example.com", "localhost", "a.b.c.d", "", "evilexample.com"]


class TestUniversalWildcard:

    @pytest.mark.parametrize("host", HOSTS)
    def test_star_matches_everything(self, host):
        assert matches("*", host)

    @pytest.mark.parametrize("host", HOSTS)
    def test_star_matches_in_strict_mode(self, host):
        assert matches("*", host, strict=True)


class TestSuffixWildcard:

    def test_subdomain_matches(self):
        assert matches("*.example.com", "foo.example.com")
        assert matches("*.example.com", "a.b.example.com")

    def test_bare_domain_matches(self):
        """'*.example.com' also matches 'example.com' itself."""
        assert matches("*.example.com", "example.com")

    def test_no_dot_boundary(self):
        """Any host whose text ends in the suffix matches, dot or not."""
        assert matches("*.example.com", "evilexample.com")
        assert matches("*.example.com", "eviladexample.com")

    def test_different_suffix_does_not_match(self):
        assert not matches("*.example.com", "example.org")
        assert not matches("*.example.com", "example.com.evil.org")

    def test_suffix_comparison_is_case_sensitive(self):
        assert not matches("*.Example.com", "foo.example.com")


class TestStrictSuffixWildcard:

    def test_subdomain_matches(self):
        assert matches("*.example.com", "foo.example.com", strict=True)

    def test_bare_domain_matches(self):
        assert matches("*.example.com", "example.com", strict=True)

    def test_requires_dot_boundary(self):
        assert not matches("*.example.com", "evilexample.com", strict=True)


class TestExactPattern:

    def test_equal_host_matches(self):
        assert matches("news.com", "news.com")

    def test_subdomain_does_not_match(self):
        assert not matches("news.com", "www.news.com")

    def test_leading_star_without_dot_is_literal(self):
        assert not matches("*example.com", "www.example.com")
        assert matches("*example.com", "*example.com")


class TestExtractHost:

    def test_host_from_url(self):
        assert extract_host("http://foo.example.com/x") == "foo.example.com"

    def test_port_and_credentials_are_dropped(self):
        assert extract_host("https://user:pw@Example.COM:8443/path?q=1") == "example.com"

    def test_url_without_host(self):
        with pytest.raises(InvalidInputError):
            extract_host("http:///just/a/path")

    def test_not_a_url(self):
        with pytest.raises(InvalidInputError):
            extract_host("example.com")
