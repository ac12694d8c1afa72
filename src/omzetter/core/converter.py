"""
This module defines the `Converter` contract and the `@converter` decorator.

A `Converter` is the unit the registry dispatches to. It converts values of
one declared source type to one declared target type, and reports through
`can_convert` which (source, target) pairs it actually handles. Most
converters are written as plain functions and turned into a
`FunctionConverter` with the `@converter` decorator.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Union

from typeguard import typechecked

from ..typing.checker import instance_of
from ..typing.inference import infer_types
from ..typing.pair import type_name
from .errors import ConversionError, MissingTypeHintError


class Converter(ABC):
    """Converts a value of `source_type` to `target_type`.

    Converters hold no per-call state and are shared between threads.

    The declared `source_type` and `target_type` are used by the registry to
    rank competing converters: when several can handle a pair, the one with
    the most specific declared source type wins. Whether a converter applies
    at all is decided by `can_convert`, which may accept more pairs than the
    declared one.

    Attributes:
        source_type: The declared type of values this converter accepts.
        target_type: The declared type of values this converter returns.
    """

    source_type: Any = None
    target_type: Any = None

    def __init__(self, source_type: Any = None, target_type: Any = None):
        if source_type is not None:
            self.source_type = source_type
        if target_type is not None:
            self.target_type = target_type

    def can_convert(self, source_type: Any, target_type: Any) -> bool:
        """Returns True if this converter handles `source_type` -> `target_type`.

        The default accepts any source type that is assignable to the declared
        source type, and only the declared target type.
        """
        return target_type == self.target_type and instance_of(source_type, self.source_type)

    @abstractmethod
    def convert(self, obj: Any) -> Any:
        """Converts `obj` to the target type.

        Raises:
            ConversionError: If `obj` cannot be converted.
        """

    def fail(self, obj: Any, message: str, cause: Optional[BaseException] = None) -> ConversionError:
        """Builds a `ConversionError` for `obj` carrying this converter's types."""
        error = ConversionError(
            message, source=obj, source_type=type(obj), target_type=self.target_type
        )
        if cause is not None:
            error.__cause__ = cause
        return error

    @property
    def name(self) -> str:
        return type(self).__name__

    def __repr__(self) -> str:
        return (
            f"{self.name}(source_type={type_name(self.source_type)}, "
            f"target_type={type_name(self.target_type)})"
        )


class FunctionConverter(Converter):
    """A converter backed by a plain function.

    Users typically create these with the `@converter` decorator rather than
    directly.

    Attributes:
        func: The wrapped conversion function.
        match_subclasses: If False, only the exact declared source type is
            accepted by `can_convert`.
    """

    def __init__(
        self,
        func: Callable[[Any], Any],
        *,
        source_type: Any = None,
        target_type: Any = None,
        name: Optional[str] = None,
        match_subclasses: bool = True,
    ):
        inferred_source, inferred_target = infer_types(func)
        source_type = source_type if source_type is not None else inferred_source
        target_type = target_type if target_type is not None else inferred_target
        func_name = name or getattr(func, "__name__", "FunctionConverter")
        if source_type is None or target_type is None:
            raise MissingTypeHintError(
                f"Converter '{func_name}' needs a source and a target type. "
                f"Add type hints to the function or pass source_type/target_type."
            )
        super().__init__(source_type, target_type)
        self.func = func
        self._name = func_name
        self.match_subclasses = match_subclasses

    @property
    def name(self) -> str:
        return self._name

    def can_convert(self, source_type: Any, target_type: Any) -> bool:
        if not self.match_subclasses:
            return source_type == self.source_type and target_type == self.target_type
        return super().can_convert(source_type, target_type)

    def convert(self, obj: Any) -> Any:
        try:
            return self.func(obj)
        except ConversionError:
            raise
        except Exception as e:
            raise self.fail(obj, f"Converter '{self.name}' failed: {e}", e) from e

    def __call__(self, obj: Any) -> Any:
        return self.convert(obj)


def converter(
    _func: Optional[Callable[[Any], Any]] = None,
    *,
    source_type: Any = None,
    target_type: Any = None,
    name: Optional[str] = None,
    match_subclasses: bool = True,
) -> Union[FunctionConverter, Callable[[Callable[[Any], Any]], FunctionConverter]]:
    """A decorator to create a `Converter` from a function.

    The function takes the source value and returns the converted value. Its
    argument is checked against its type hints at call time, so a value of
    the wrong type surfaces as a `ConversionError`. The decorator can be used
    with or without arguments.

    Example:
        .. code-block:: python

            @converter
            def int_to_bool(obj: int) -> bool:
                return obj != 0

            @converter(source_type=str, target_type=Decimal)
            def parse_amount(obj):
                return Decimal(obj.replace(",", ""))

    Args:
        source_type: The declared source type. Inferred from the type hint of
            the first parameter if not given.
        target_type: The declared target type. Inferred from the return type
            hint if not given.
        name: A custom name for the converter, used in logs and errors.
        match_subclasses: Whether subclasses of the source type are accepted.
            Defaults to True.

    Returns:
        A `FunctionConverter` if used as `@converter`, or a decorator that
        returns one if used as `@converter(...)`.

    Raises:
        MissingTypeHintError: If the source or target type cannot be
            determined.
    """
    def wrapper(func: Callable[[Any], Any]) -> FunctionConverter:
        inferred_source, inferred_target = infer_types(func)
        return FunctionConverter(
            typechecked(func) if inferred_source is not None else func,
            source_type=source_type if source_type is not None else inferred_source,
            target_type=target_type if target_type is not None else inferred_target,
            name=name or getattr(func, "__name__", None),
            match_subclasses=match_subclasses,
        )

    if _func is not None:
        # Used as `@converter`
        return wrapper(_func)
    # Used as `@converter(...)`
    return wrapper
