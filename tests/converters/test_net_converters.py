from ipaddress import IPv4Address, IPv6Address
from urllib.parse import ParseResult, SplitResult, urlparse, urlsplit

import pytest

from omzetter import ConversionError
from omzetter.converters.net import url_to_str


# --- IP addresses ---


def test_str_to_ip_address(catalog_registry):
    assert catalog_registry.convert(" 192.168.0.1 ", IPv4Address) == IPv4Address("192.168.0.1")
    assert catalog_registry.convert("::1", IPv6Address) == IPv6Address("::1")


@pytest.mark.parametrize("text, target_type", [("::1", IPv4Address), ("10.0.0.256", IPv4Address), ("nope", IPv6Address)])
def test_str_to_ip_address_invalid(catalog_registry, text, target_type):
    with pytest.raises(ConversionError, match=target_type.__name__):
        catalog_registry.convert(text, target_type)


def test_ip_address_generics(catalog_registry):
    address = IPv4Address("10.0.0.1")
    assert catalog_registry.convert(address, str) == "10.0.0.1"
    assert catalog_registry.convert(address, list) == [address]
    assert catalog_registry.convert(IPv6Address("::1"), set) == {IPv6Address("::1")}


# --- URLs ---


def test_str_to_url(catalog_registry):
    result = catalog_registry.convert("https://example.com/path?q=1", ParseResult)
    assert result.scheme == "https"
    assert result.netloc == "example.com"
    assert result.query == "q=1"


def test_relative_url_is_rejected(catalog_registry):
    with pytest.raises(ConversionError, match="not an absolute URL"):
        catalog_registry.convert("example.com/path", ParseResult)


def test_url_to_str(catalog_registry):
    url = "https://example.com/a;b?c=d#e"
    assert catalog_registry.convert(urlparse(url), str) == url
    assert catalog_registry.convert(urlsplit(url), str) == url
    assert catalog_registry.resolve(ParseResult, str) is url_to_str


def test_between_url_results(catalog_registry):
    url = "https://example.com/path?q=1"
    split = catalog_registry.convert(urlparse(url), SplitResult)
    assert split == urlsplit(url)
    assert catalog_registry.convert(split, ParseResult) == urlparse(url)


def test_url_singleton(catalog_registry):
    parsed = urlparse("https://example.com")
    assert catalog_registry.convert(parsed, list) == [parsed]
