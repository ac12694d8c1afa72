# omzetter.typing
# This package contains the type descriptor utilities the registry
# matches converters with: assignability checks, the cache key, and type
# inference for function converters.

from .checker import instance_of, is_assignable_from, is_interface_like, supertype_chain
from .inference import infer_types
from .pair import TypePair, type_name

__all__ = [
    "instance_of",
    "is_assignable_from",
    "is_interface_like",
    "supertype_chain",
    "infer_types",
    "TypePair",
    "type_name",
]
