"""
Tests for input normalizers and format checks.
"""

import pytest

from site_analysis.validators import (
    extract_domain,
    is_valid_domain,
    is_valid_url,
    normalize_domain,
    normalize_url,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("example.com", "https://example.com"),
        ("https://example.com", "https://example.com"),
        ("HTTP://example.com/path", "HTTP://example.com/path"),
        ("  example.com/a  ", "https://example.com/a"),
    ],
)
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


@pytest.mark.parametrize(
    "url,valid",
    [
        ("https://example.com", True),
        ("http://localhost:8080/x", True),
        ("https://", False),
        ("example.com", False),
        ("https://exa mple.com", False),
        ("https://example.com:99999", False),
    ],
)
def test_is_valid_url(url, valid):
    assert is_valid_url(url) is valid


def test_extract_domain():
    assert extract_domain("https://www.example.com/about") == "www.example.com"
    assert extract_domain("example.com/path") == "example.com"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Example.COM", "example.com"),
        ("https://www.example.com/about", "www.example.com"),
        ("example.com.", "example.com"),
        ("example.com:443", "example.com"),
        (" example.org ", "example.org"),
    ],
)
def test_normalize_domain(raw, expected):
    assert normalize_domain(raw) == expected


@pytest.mark.parametrize(
    "domain,valid",
    [
        ("example.com", True),
        ("sub-domain.example.co.uk", True),
        ("xn--bcher-kva.example", True),
        ("localhost", False),
        ("-bad.com", False),
        ("bad-.com", False),
        ("exa_mple.com", False),
        ("", False),
        ("a" * 64 + ".com", False),
    ],
)
def test_is_valid_domain(domain, valid):
    assert is_valid_domain(domain) is valid
