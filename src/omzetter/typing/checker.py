"""
Type relationships used to match converters against a requested type pair.

Type descriptors are plain Python classes (including ABCs and
`runtime_checkable` protocols) or parameterized generic aliases such as
`list[int]` and `Tuple[float, ...]`.
"""
import inspect
import types
from typing import Any, Tuple, Union, get_args, get_origin

_UNION_ORIGINS = (Union, types.UnionType)


def is_top_type(tp: Any) -> bool:
    """Returns True for the universal supertypes `object` and `typing.Any`."""
    return tp is object or tp is Any


def is_interface_like(tp: Any) -> bool:
    """
    Returns True if `tp` cannot be instantiated directly: protocols and
    abstract base classes with unimplemented abstract methods.
    """
    origin = get_origin(tp) or tp
    if not isinstance(origin, type):
        return False
    if getattr(origin, "_is_protocol", False):
        return True
    return inspect.isabstract(origin)


def supertype_chain(tp: Any) -> Tuple[Any, ...]:
    """Returns `tp` followed by its supertypes, most specific first."""
    origin = get_origin(tp) or tp
    if isinstance(origin, type):
        return origin.__mro__
    return (tp,)


def _issubclass(cls: Any, classinfo: Any) -> bool:
    try:
        return issubclass(cls, classinfo)
    except TypeError:
        # Non-class descriptors (Literal, NewType, protocols with data
        # members) have no subclass relationship we can check.
        return False


def instance_of(object_type: Any, type_: Any) -> bool:
    """
    Checks whether values of `object_type` are also values of `type_`.

    This covers the exact type, subclasses, and implemented interfaces, both
    nominal and virtual (ABC registration, runtime-checkable protocols). It
    handles `Union` on either side and parameterized generics, whose
    arguments must match position by position.
    """
    if object_type == type_ or is_top_type(type_):
        return True
    if object_type is Any:
        return False

    origin_obj = get_origin(object_type)
    origin_type = get_origin(type_)

    if origin_type in _UNION_ORIGINS:
        return any(instance_of(object_type, arg) for arg in get_args(type_))
    if origin_obj in _UNION_ORIGINS:
        return all(instance_of(arg, type_) for arg in get_args(object_type))

    args_type = get_args(type_)
    if origin_type is not None and args_type:
        args_obj = get_args(object_type)
        if origin_obj is None or len(args_obj) != len(args_type):
            return False
        if not _issubclass(origin_obj, origin_type):
            return False
        return all(instance_of(a, b) for a, b in zip(args_obj, args_type))

    return _issubclass(origin_obj or object_type, origin_type or type_)


def is_assignable_from(type_: Any, other: Any) -> bool:
    """Returns True if a value of `other` can be used where `type_` is expected."""
    return instance_of(other, type_)
