"""Boolean converters."""
from ..core.converter import Converter, converter
from .generic import register_generic


@converter
def bool_to_int(obj: bool) -> int:
    """Returns 1 if `obj` is true, or 0 if it is false."""
    return 1 if obj else 0


class IntToBool(Converter):
    """Returns True if the integer is non-zero, False if it is zero."""

    source_type = int
    target_type = bool

    def can_convert(self, source_type, target_type) -> bool:
        # bool is itself a subclass of int; bool -> bool is a pass-through.
        return source_type is not bool and super().can_convert(source_type, target_type)

    def convert(self, obj: int) -> bool:
        return obj != 0


@converter
def str_to_bool(obj: str) -> bool:
    """
    Returns True if `obj` is "true", ignoring case and surrounding
    whitespace, and False for any other value.
    """
    return obj.strip().upper() == "TRUE"


def load_converters(registry) -> None:
    registry.register_converter(bool_to_int)
    registry.register_converter(IntToBool())
    registry.register_converter(str_to_bool)
    register_generic(registry, bool)
