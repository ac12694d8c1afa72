"""
Reusable converters parameterized on their source type. Catalog modules
register one instance per type they want to support.
"""
from typing import Any, List, Set

from ..core.converter import Converter


class GenericToStr(Converter):
    """Converts any object of `source_type` to `str` with `str()`."""

    target_type = str

    def __init__(self, source_type: Any):
        super().__init__(source_type, str)

    def convert(self, obj: Any) -> str:
        return str(obj)


class GenericSingletonToList(Converter):
    """Wraps a single object of `source_type` in a one-element list."""

    target_type = list

    def __init__(self, source_type: Any):
        super().__init__(source_type, list)

    def convert(self, obj: Any) -> List[Any]:
        return [obj]


class GenericSingletonToSet(Converter):
    """Wraps a single object of `source_type` in a one-element set."""

    target_type = set

    def __init__(self, source_type: Any):
        super().__init__(source_type, set)

    def convert(self, obj: Any) -> Set[Any]:
        try:
            return {obj}
        except TypeError as e:
            raise self.fail(obj, f"{type(obj).__name__} is not hashable", e) from e


def register_generic(registry, source_type: Any, *, to_str: bool = True, singletons: bool = True) -> None:
    """Registers the generic converters for one source type."""
    if to_str:
        registry.register_converter(GenericToStr(source_type))
    if singletons:
        registry.register_converter(GenericSingletonToList(source_type))
        registry.register_converter(GenericSingletonToSet(source_type))
