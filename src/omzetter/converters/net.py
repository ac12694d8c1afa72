"""Network address and URL converters."""
from ipaddress import IPv4Address, IPv6Address
from urllib.parse import ParseResult, SplitResult, urlparse, urlsplit, urlunsplit

from ..core.converter import Converter, converter
from .generic import register_generic


class StrToIPAddress(Converter):
    """Parses a `str` into an `IPv4Address` or `IPv6Address`; the version must match."""

    source_type = str

    def __init__(self, target_type: type):
        super().__init__(str, target_type)

    def convert(self, obj: str):
        try:
            return self.target_type(obj.strip())
        except ValueError as e:
            raise self.fail(obj, f"'{obj}' is not a valid {self.target_type.__name__}", e) from e


class StrToURL(Converter):
    """
    Parses a URL `str` into a `ParseResult`. A URL needs a scheme and, for
    schemes that use one, a network location.
    """

    source_type = str
    target_type = ParseResult

    def convert(self, obj: str) -> ParseResult:
        try:
            result = urlparse(obj.strip())
        except ValueError as e:
            raise self.fail(obj, f"'{obj}' is not a valid URL: {e}", e) from e
        if not result.scheme:
            raise self.fail(obj, f"'{obj}' is not an absolute URL")
        return result


@converter
def url_to_str(obj: ParseResult) -> str:
    return obj.geturl()


@converter
def split_result_to_str(obj: SplitResult) -> str:
    return obj.geturl()


@converter
def parse_result_to_split_result(obj: ParseResult) -> SplitResult:
    return urlsplit(obj.geturl())


@converter
def split_result_to_parse_result(obj: SplitResult) -> ParseResult:
    return urlparse(urlunsplit(obj))


def load_converters(registry) -> None:
    for tp in (IPv4Address, IPv6Address):
        registry.register_converter(StrToIPAddress(tp))
        register_generic(registry, tp)
    registry.register_converter(StrToURL())
    registry.register_converter(url_to_str)
    registry.register_converter(split_result_to_str)
    registry.register_converter(parse_result_to_split_result)
    registry.register_converter(split_result_to_parse_result)
    register_generic(registry, ParseResult, to_str=False)
