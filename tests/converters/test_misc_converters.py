import codecs
import re
import uuid
from decimal import Decimal
from enum import Enum
from pathlib import Path, PurePath

import pytest

from omzetter import ConversionError, NoConverterFoundError
from omzetter.converters.misc import StrToEnum, StrToEnumCreator


class Color(Enum):
    RED = 1
    GREEN = 2


SAMPLE_UUID = "12345678-1234-5678-1234-567812345678"


# --- Bytes ---


def test_bytes_conversions(catalog_registry):
    result = catalog_registry.convert(b"ab", bytearray)
    assert result == bytearray(b"ab")
    assert type(result) is bytearray
    assert catalog_registry.convert(bytearray(b"cd"), bytes) == b"cd"
    assert catalog_registry.convert(memoryview(b"xy"), bytes) == b"xy"


# --- Character sets ---


def test_str_to_codec(catalog_registry):
    assert catalog_registry.convert("UTF8", codecs.CodecInfo).name == "utf-8"
    with pytest.raises(ConversionError, match="Unknown character set"):
        catalog_registry.convert("no-such-charset", codecs.CodecInfo)


def test_codec_to_str(catalog_registry):
    assert catalog_registry.convert(codecs.lookup("latin-1"), str) == "iso8859-1"


# --- Enums ---


def test_enum_to_str(catalog_registry):
    assert catalog_registry.convert(Color.RED, str) == "RED"


def test_str_to_enum(catalog_registry):
    assert catalog_registry.convert("GREEN", Color) is Color.GREEN
    with pytest.raises(ConversionError, match="not a member of Color"):
        catalog_registry.convert("PURPLE", Color)


def test_enum_creator():
    made = StrToEnumCreator().create_converter(str, Color)
    assert isinstance(made, StrToEnum)
    assert made.target_type is Color
    assert StrToEnumCreator().create_converter(str, int) is None
    assert StrToEnumCreator().create_converter(int, Color) is None


def test_enum_to_itself_is_identity(catalog_registry):
    assert catalog_registry.convert(Color.RED, Color) is Color.RED


# --- Regular expressions ---


def test_regex(catalog_registry):
    pattern = catalog_registry.convert("a+b", re.Pattern)
    assert pattern.match("aab")
    assert catalog_registry.convert(pattern, str) == "a+b"
    with pytest.raises(ConversionError, match="not a valid regular expression"):
        catalog_registry.convert("(", re.Pattern)


# --- UUIDs ---


def test_uuid(catalog_registry):
    value = catalog_registry.convert(f" {SAMPLE_UUID} ", uuid.UUID)
    assert value == uuid.UUID(SAMPLE_UUID)
    assert catalog_registry.convert(value, str) == SAMPLE_UUID
    assert catalog_registry.convert(value, set) == {value}
    with pytest.raises(ConversionError):
        catalog_registry.convert("not-a-uuid", uuid.UUID)


# --- Paths ---


def test_paths(catalog_registry):
    assert catalog_registry.convert("/tmp/data", Path) == Path("/tmp/data")
    assert isinstance(catalog_registry.convert("data", PurePath), Path)
    assert catalog_registry.convert(Path("/tmp/data"), str) == "/tmp/data"
    assert catalog_registry.convert(Path("a"), list) == [Path("a")]


# --- Catalog-wide ---


@pytest.mark.parametrize(
    "value",
    [
        "text",
        3,
        2.5,
        True,
        Decimal("1.5"),
        b"raw",
        [1, 2],
        (1, 2),
        {"a": 1},
        Color.RED,
        uuid.UUID(SAMPLE_UUID),
        Path("a"),
        re.compile("x"),
    ],
)
def test_catalog_identity(catalog_registry, value):
    """Tests that no catalog converter interferes with converting a value to its own type."""
    assert catalog_registry.convert(value, type(value)) is value
    assert catalog_registry.convert(value, object) is value


def test_unrelated_types_have_no_converter(catalog_registry):
    with pytest.raises(NoConverterFoundError):
        catalog_registry.convert(uuid.UUID(SAMPLE_UUID), int)
