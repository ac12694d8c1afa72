from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Union

from ..typing.checker import instance_of, is_top_type
from .converter import Converter


class ConverterCreator(ABC):
    """
    Creates converters on demand for type pairs that no registered converter
    handles, e.g. "any collection to a list of any element type".

    Creators are consulted in registration order, after every registered
    converter has been tried. They hold no state and are shared.
    """

    @abstractmethod
    def create_converter(self, source_type: Any, target_type: Any) -> Optional[Converter]:
        """Returns a converter for the pair, or None if this creator doesn't support it."""

    @property
    def name(self) -> str:
        return type(self).__name__

    def __repr__(self) -> str:
        return f"{self.name}()"


class FunctionCreator(ConverterCreator):
    """A creator backed by a plain `(source_type, target_type) -> Converter | None` function."""

    def __init__(self, func: Callable[[Any, Any], Optional[Converter]], name: Optional[str] = None):
        self.func = func
        self._name = name or getattr(func, "__name__", "FunctionCreator")

    @property
    def name(self) -> str:
        return self._name

    def create_converter(self, source_type: Any, target_type: Any) -> Optional[Converter]:
        return self.func(source_type, target_type)


def creator(
    _func: Optional[Callable[[Any, Any], Optional[Converter]]] = None,
    *,
    name: Optional[str] = None,
) -> Union[FunctionCreator, Callable[[Callable[[Any, Any], Optional[Converter]]], FunctionCreator]]:
    """A decorator to create a `ConverterCreator` from a function.

    Example:
        .. code-block:: python

            @creator
            def str_to_enum(source_type, target_type):
                if source_type is str and issubclass(target_type, Enum):
                    return StrToEnum(target_type)
                return None
    """
    def wrapper(func: Callable[[Any, Any], Optional[Converter]]) -> FunctionCreator:
        return FunctionCreator(func, name=name)

    if _func is not None:
        return wrapper(_func)
    return wrapper


class PassThruConverter(Converter):
    """Returns the source object itself.

    Used when the source type already is, or is compatible with, the target
    type, so no transformation is needed.
    """

    def can_convert(self, source_type: Any, target_type: Any) -> bool:
        return source_type == self.source_type and target_type == self.target_type

    def convert(self, obj: Any) -> Any:
        return obj


class PassThruCreator(ConverterCreator):
    """
    Creates a `PassThruConverter` when the source and target types are the
    same, the target is `object` or `Any`, or the source type is a subtype or
    implementation of the target type.
    """

    def create_converter(self, source_type: Any, target_type: Any) -> Optional[Converter]:
        if (
            source_type == target_type
            or is_top_type(target_type)
            or instance_of(source_type, target_type)
        ):
            return PassThruConverter(source_type, target_type)
        return None
