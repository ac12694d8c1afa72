import math
from decimal import Decimal
from fractions import Fraction

import pytest

from omzetter import ConversionError, NoConverterFoundError
from omzetter.converters.numbers import GenericNumberConverter, NumberToStr, StrToNumber


# --- Parsing ---


@pytest.mark.parametrize(
    "text, target_type, expected",
    [
        ("42", int, 42),
        (" -7 ", int, -7),
        ("1_000", int, 1000),
        ("3.5", float, 3.5),
        ("1e3", float, 1000.0),
        ("1.10", Decimal, Decimal("1.10")),
        ("3/4", Fraction, Fraction(3, 4)),
        ("0.5", Fraction, Fraction(1, 2)),
    ],
)
def test_str_to_number(catalog_registry, text, target_type, expected):
    result = catalog_registry.convert(text, target_type)
    assert result == expected
    assert type(result) is target_type


@pytest.mark.parametrize(
    "text, target_type",
    [("abc", int), ("1.5", int), ("", float), ("one", Decimal), ("1/0", Fraction)],
)
def test_str_to_number_invalid(catalog_registry, text, target_type):
    with pytest.raises(ConversionError) as excinfo:
        catalog_registry.convert(text, target_type)
    assert excinfo.value.source == text
    assert excinfo.value.target_type is target_type


def test_str_to_number_with_default(catalog_registry):
    assert catalog_registry.convert("n/a", int, default=None) is None


# --- Between number types ---


@pytest.mark.parametrize(
    "value, target_type, expected",
    [
        (3, float, 3.0),
        (2.0, int, 2),
        (0.1, Decimal, Decimal("0.1")),
        (Fraction(1, 4), Decimal, Decimal("0.25")),
        (Decimal("2.5"), Fraction, Fraction(5, 2)),
        (Decimal("7"), int, 7),
        (Fraction(9, 3), int, 3),
        (5, Fraction, Fraction(5)),
        (Decimal("0.5"), float, 0.5),
    ],
)
def test_number_to_number(catalog_registry, value, target_type, expected):
    result = catalog_registry.convert(value, target_type)
    assert result == expected
    assert type(result) is target_type


@pytest.mark.parametrize("value", [2.5, Decimal("1.01"), Fraction(1, 3), math.inf, math.nan])
def test_lossy_conversion_to_int_fails(catalog_registry, value):
    with pytest.raises(ConversionError):
        catalog_registry.convert(value, int)


def test_number_converters_skip_bool():
    conv = GenericNumberConverter(int, float)
    assert conv.can_convert(int, float)
    assert not conv.can_convert(bool, float)


def test_bool_is_not_a_number_source(catalog_registry):
    with pytest.raises(NoConverterFoundError):
        catalog_registry.resolve(bool, Decimal)


def test_declared_pair_is_resolved_directly(catalog_registry):
    conv = catalog_registry.resolve(int, Decimal)
    assert isinstance(conv, GenericNumberConverter)
    assert (conv.source_type, conv.target_type) == (int, Decimal)


# --- Formatting and singletons ---


@pytest.mark.parametrize(
    "value, expected",
    [(42, "42"), (2.5, "2.5"), (Decimal("1.50"), "1.50"), (Fraction(1, 3), "1/3")],
)
def test_number_to_str(catalog_registry, value, expected):
    assert catalog_registry.convert(value, str) == expected
    assert isinstance(catalog_registry.resolve(type(value), str), NumberToStr)


def test_number_singletons(catalog_registry):
    assert catalog_registry.convert(5, list) == [5]
    assert catalog_registry.convert(2.5, set) == {2.5}
    assert catalog_registry.convert(Decimal("1"), list) == [Decimal("1")]


def test_str_to_number_declares_target():
    conv = StrToNumber(Decimal)
    assert conv.source_type is str
    assert conv.target_type is Decimal


@pytest.mark.parametrize(
    "target_type, text, expected",
    [(Decimal, " 2.50 ", Decimal("2.50")), (Decimal, "-0", Decimal("-0")), (int, "0x10", None)],
)
def test_str_to_number_uses_the_target_constructor(target_type, text, expected):
    conv = StrToNumber(target_type)
    if expected is None:
        with pytest.raises(ConversionError):
            conv.convert(text)
    else:
        result = conv.convert(text)
        assert result == expected
        assert str(result) == str(expected)
