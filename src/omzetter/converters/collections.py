"""
Collection converters.

Most collection conversions depend on an element type that is only known at
lookup time (`list[int]`, `tuple[float, ...]`), so they are provided by
creators rather than by a fixed set of converters.
"""
from collections.abc import Collection, Mapping, MutableSequence, MutableSet, Sequence, Set
from typing import Any, Optional, Tuple, get_args, get_origin

from ..core.converter import Converter
from ..core.creator import ConverterCreator
from ..core.errors import ConversionError, NoConverterFoundError
from ..typing.checker import is_interface_like
from .generic import GenericSingletonToList, GenericToStr

# Strings and byte strings are values, not containers of elements, for
# conversion purposes.
_SCALAR_COLLECTIONS: Tuple[type, ...] = (str, bytes, bytearray, memoryview)

_SEQUENCE_ORIGINS: Tuple[type, ...] = (list, tuple, set, frozenset)


def is_element_collection(tp: Any) -> bool:
    """True for collection types whose items should be converted one by one."""
    origin = get_origin(tp) or tp
    if not isinstance(origin, type):
        return False
    return (
        issubclass(origin, Collection)
        and not issubclass(origin, _SCALAR_COLLECTIONS)
        and not issubclass(origin, Mapping)
    )


class CollectionToSequence(Converter):
    """
    Converts a collection to a parameterized `list`, `tuple`, `set` or
    `frozenset`, converting every element to the target's element type
    through the registry.
    """

    def __init__(self, source_type: Any, target_type: Any, registry):
        super().__init__(source_type, target_type)
        self.registry = registry
        self._origin = get_origin(target_type)
        args = get_args(target_type)
        if self._origin is tuple and not (len(args) == 2 and args[1] is Ellipsis):
            # tuple[A, B, C]: one type per position
            self._element_types: Optional[Tuple[Any, ...]] = args
        else:
            self._element_types = None
        self._element_type = args[0]

    def can_convert(self, source_type: Any, target_type: Any) -> bool:
        return source_type == self.source_type and target_type == self.target_type

    def _convert_element(self, obj: Any, index: int, item: Any, element_type: Any) -> Any:
        try:
            return self.registry.convert(item, element_type)
        except (ConversionError, NoConverterFoundError) as e:
            # Whether an element converter exists depends on the element's
            # runtime type, so here it is a failure of this value.
            raise self.fail(obj, f"Element {index} ({item!r}): {e}", e) from e

    def convert(self, obj: Any) -> Any:
        items = list(obj)
        if self._element_types is not None:
            if len(items) != len(self._element_types):
                raise self.fail(
                    obj, f"Expected {len(self._element_types)} elements, got {len(items)}"
                )
            converted = [
                self._convert_element(obj, i, item, tp)
                for i, (item, tp) in enumerate(zip(items, self._element_types))
            ]
        else:
            converted = [
                self._convert_element(obj, i, item, self._element_type)
                for i, item in enumerate(items)
            ]
        try:
            return self._origin(converted)
        except TypeError as e:
            raise self.fail(obj, f"Cannot build {self._origin.__name__}: {e}", e) from e


class SequenceCreator(ConverterCreator):
    """
    Creates a `CollectionToSequence` converter for any element collection
    source and a parameterized `list[E]`, `tuple[E, ...]`, `tuple[A, B]`,
    `set[E]` or `frozenset[E]` target.
    """

    def __init__(self, registry):
        self.registry = registry

    def create_converter(self, source_type: Any, target_type: Any) -> Optional[Converter]:
        if get_origin(target_type) not in _SEQUENCE_ORIGINS or not get_args(target_type):
            return None
        if not is_element_collection(source_type):
            return None
        return CollectionToSequence(source_type, target_type, self.registry)


class CollectionToContainer(Converter):
    """Copies the elements of a collection into a new `container`."""

    def __init__(self, source_type: Any, target_type: Any, container: type):
        super().__init__(source_type, target_type)
        self.container = container

    def can_convert(self, source_type: Any, target_type: Any) -> bool:
        return source_type == self.source_type and target_type == self.target_type

    def convert(self, obj: Any) -> Any:
        try:
            return self.container(obj)
        except TypeError as e:
            raise self.fail(obj, f"Cannot build {self.container.__name__}: {e}", e) from e


class _ContainerCreator(ConverterCreator):
    """
    Creates converters from an element collection to an unparameterized
    container class. Concrete targets are instantiated directly; the
    abstract targets get `default_container`.
    """

    abstract_targets: Tuple[type, ...] = ()
    concrete_bases: Tuple[type, ...] = ()
    default_container: type = list

    def create_converter(self, source_type: Any, target_type: Any) -> Optional[Converter]:
        if get_args(target_type) or not is_element_collection(source_type):
            return None
        target = get_origin(target_type) or target_type
        if target in self.abstract_targets:
            return CollectionToContainer(source_type, target_type, self.default_container)
        if (
            isinstance(target, type)
            and issubclass(target, self.concrete_bases)
            and not is_interface_like(target)
        ):
            return CollectionToContainer(source_type, target_type, target)
        return None


class ListCreator(_ContainerCreator):
    """Converts collections to `list`, list subclasses, `Sequence` and `MutableSequence`."""

    abstract_targets = (Sequence, MutableSequence)
    concrete_bases = (list,)
    default_container = list


class SetCreator(_ContainerCreator):
    """Converts collections to `set`, `frozenset`, their subclasses, `Set` and `MutableSet`."""

    abstract_targets = (Set, MutableSet)
    concrete_bases = (set, frozenset)
    default_container = set


class TupleToList(Converter):
    """Converts a tuple, including named tuples and other tuple subclasses, to a list."""

    source_type = tuple
    target_type = list

    def convert(self, obj: tuple) -> list:
        return list(obj)


class CollectionToStr(GenericToStr):
    """Formats an element collection (not a `str` or `bytes`) with `str()`."""

    def __init__(self):
        super().__init__(Collection)

    def can_convert(self, source_type: Any, target_type: Any) -> bool:
        return is_element_collection(source_type) and super().can_convert(source_type, target_type)


def load_converters(registry) -> None:
    registry.register_converter(TupleToList())
    registry.register_converter(CollectionToStr())
    registry.register_converter(GenericToStr(Mapping))
    registry.register_converter(GenericSingletonToList(Mapping))
    registry.register_creator(SequenceCreator(registry))
    registry.register_creator(ListCreator())
    registry.register_creator(SetCreator())
