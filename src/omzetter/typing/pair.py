from typing import Any, NamedTuple


class TypePair(NamedTuple):
    """The (source, target) key the registry caches converters under."""

    source_type: Any
    target_type: Any

    def __str__(self) -> str:
        return f"{type_name(self.source_type)}->{type_name(self.target_type)}"


def type_name(tp: Any) -> str:
    """Returns a readable, fully qualified name for a type descriptor."""
    if tp is None:
        return "<null>"
    if isinstance(tp, type) and not hasattr(tp, "__origin__"):
        if tp.__module__ == "builtins":
            return tp.__qualname__
        return f"{tp.__module__}.{tp.__qualname__}"
    return repr(tp)
