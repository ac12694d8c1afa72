from abc import ABC, abstractmethod
from collections.abc import Collection, Iterable, Mapping, Sequence
from numbers import Number
from typing import Any, Dict, List, Optional, Protocol, Tuple, Union, runtime_checkable

import pytest

from omzetter.typing import (
    TypePair,
    infer_types,
    instance_of,
    is_assignable_from,
    is_interface_like,
    supertype_chain,
    type_name,
)


class Base(ABC):
    @abstractmethod
    def run(self):
        ...


class Impl(Base):
    def run(self):
        return 1


@runtime_checkable
class Closeable(Protocol):
    def close(self) -> None:
        ...


class Resource:
    def close(self) -> None:
        pass


# --- instance_of ---


@pytest.mark.parametrize(
    "object_type, type_",
    [
        (int, int),
        (bool, int),
        (Impl, Base),
        (int, object),
        (str, Any),
        (list, Sequence),
        (dict, Mapping),
        (int, Number),
        (Resource, Closeable),
        (int, Optional[int]),
        (int, Union[str, int]),
        (int, int | None),
        (Union[int, bool], int),
        (List[int], List[int]),
        (list[bool], list[int]),
        (Dict[str, int], Mapping[str, int]),
        (list[int], list),
        (Tuple[int, str], Tuple[int, str]),
    ],
)
def test_instance_of_true(object_type, type_):
    assert instance_of(object_type, type_)


@pytest.mark.parametrize(
    "object_type, type_",
    [
        (int, str),
        (object, int),
        (Base, Impl),
        (Any, int),
        (Union[int, str], int),
        (list[str], list[int]),
        (list, list[int]),
        (Tuple[int], Tuple[int, str]),
        (str, Closeable),
    ],
)
def test_instance_of_false(object_type, type_):
    assert not instance_of(object_type, type_)


def test_is_assignable_from_reverses_arguments():
    assert is_assignable_from(Base, Impl)
    assert not is_assignable_from(Impl, Base)
    assert is_assignable_from(Iterable, list)


# --- Type descriptors ---


def test_is_interface_like():
    assert is_interface_like(Base)
    assert is_interface_like(Closeable)
    assert not is_interface_like(Impl)
    assert not is_interface_like(int)
    assert not is_interface_like(Any)


def test_is_interface_like_for_abcs():
    """Tests the collections.abc classes that cannot be instantiated."""
    assert is_interface_like(Collection)
    assert is_interface_like(Sequence)
    assert is_interface_like(Sequence[int])


def test_supertype_chain():
    assert supertype_chain(bool) == (bool, int, object)
    assert supertype_chain(list[int]) == list.__mro__
    assert supertype_chain(Union[int, str]) == (Union[int, str],)


def test_type_pair_compares_by_value():
    """Tests that pairs built from equal generic aliases are the same cache key."""
    assert TypePair(list[int], str) == TypePair(list[int], str)
    assert hash(TypePair(List[int], str)) == hash(TypePair(List[int], str))
    assert TypePair(int, str) != TypePair(str, int)
    assert str(TypePair(int, Impl)) == f"int->{__name__}.Impl"


def test_type_name():
    assert type_name(None) == "<null>"
    assert type_name(int) == "int"
    assert type_name(Mapping) == "collections.abc.Mapping"
    assert type_name(list[int]) == "list[int]"


# --- infer_types ---


def takes_str(value: str) -> int:
    return int(value)


def takes_nothing_useful(value, flag: bool = False):
    return value


def returns_none(value: int) -> None:
    pass


def generic_hints(values: List[int]) -> Dict[str, int]:
    return {}


def test_infer_types_from_hints():
    assert infer_types(takes_str) == (str, int)
    assert infer_types(generic_hints) == (List[int], Dict[str, int])


def test_infer_types_missing_hints():
    assert infer_types(takes_nothing_useful) == (None, None)
    assert infer_types(lambda x: x) == (None, None)


def test_infer_types_none_return_has_no_target():
    assert infer_types(returns_none) == (int, None)


def test_infer_types_builtin():
    """Tests that callables without a signature give no types."""
    assert infer_types(len) == (None, None)
