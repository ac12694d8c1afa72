"""
Number converters.

Conversions between `int`, `float`, `Decimal` and `Fraction`, parsing from
and formatting to `str`, and singleton collections for each number type.
Conversions that would lose information, such as `2.5` to `int`, fail with
`ConversionError` instead of rounding.
"""
import math
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from numbers import Number
from typing import Any, Callable, Dict, Tuple

from ..core.converter import Converter
from .generic import register_generic

NUMBER_TYPES: Tuple[type, ...] = (int, float, Decimal, Fraction)


def _to_int(obj: Any) -> int:
    if isinstance(obj, float) and not math.isfinite(obj):
        raise ValueError(f"{obj!r} has no integer value")
    result = int(obj)
    if result != obj:
        raise ValueError(f"{obj!r} is not an integral value")
    return result


def _to_decimal(obj: Any) -> Decimal:
    if isinstance(obj, float):
        # str() gives the shortest repr, so 0.1 becomes Decimal("0.1")
        # rather than its exact binary expansion.
        return Decimal(str(obj))
    if isinstance(obj, Fraction):
        return Decimal(obj.numerator) / Decimal(obj.denominator)
    return Decimal(obj)


def _to_fraction(obj: Any) -> Fraction:
    return Fraction(obj)


def _to_float(obj: Any) -> float:
    return float(obj)


_NUMBER_FACTORIES: Dict[type, Callable[[Any], Any]] = {
    int: _to_int,
    float: _to_float,
    Decimal: _to_decimal,
    Fraction: _to_fraction,
}


class GenericNumberConverter(Converter):
    """Converts a number of `source_type` to the number type `target_type`."""

    def __init__(self, source_type: type, target_type: type):
        super().__init__(source_type, target_type)
        self._factory = _NUMBER_FACTORIES[target_type]

    def can_convert(self, source_type: Any, target_type: Any) -> bool:
        # bool is an int subclass, but has its own converters.
        return source_type is not bool and super().can_convert(source_type, target_type)

    def convert(self, obj: Any) -> Any:
        try:
            return self._factory(obj)
        except (ValueError, TypeError, ArithmeticError, InvalidOperation) as e:
            raise self.fail(obj, f"Cannot convert {obj!r} to {self.target_type.__name__}: {e}", e) from e


class StrToNumber(Converter):
    """Parses a `str` into the number type `target_type`.

    Surrounding whitespace and `_` digit separators are accepted, following
    the number type's own constructor.
    """

    source_type = str

    def __init__(self, target_type: type):
        super().__init__(str, target_type)

    def convert(self, obj: str) -> Any:
        text = obj.strip()
        try:
            return self.target_type(text)
        except (ValueError, ZeroDivisionError, InvalidOperation) as e:
            raise self.fail(obj, f"'{obj}' is not a valid {self.target_type.__name__}", e) from e


class NumberToStr(Converter):
    """Formats any number as `str`. Registered once, under the `Number` ABC."""

    source_type = Number
    target_type = str

    def can_convert(self, source_type: Any, target_type: Any) -> bool:
        return source_type is not bool and super().can_convert(source_type, target_type)

    def convert(self, obj: Number) -> str:
        return str(obj)


def load_converters(registry) -> None:
    for source_type in NUMBER_TYPES:
        for target_type in NUMBER_TYPES:
            if source_type is not target_type:
                registry.register_converter(GenericNumberConverter(source_type, target_type))
        registry.register_converter(StrToNumber(source_type))
        register_generic(registry, source_type, to_str=False)
    registry.register_converter(NumberToStr())
