import inspect
from typing import Any, Callable, Optional, Tuple, get_type_hints


def infer_types(func: Callable[..., Any]) -> Tuple[Optional[Any], Optional[Any]]:
    """
    Infers the source and target types of a one-argument conversion function.

    The source type is the hint on the first positional parameter and the
    target type is the return hint. Either is None when it cannot be found.
    """
    hints = {}
    try:
        hints = get_type_hints(func)
    except (TypeError, NameError):
        # Unresolvable forward references, or callables (e.g. built-ins)
        # that don't support type hints.
        pass

    try:
        sig = inspect.signature(func)
    except (ValueError, TypeError):
        return None, None

    source_type: Any = None
    for name, param in sig.parameters.items():
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            source_type = hints.get(name)
            if source_type is None and param.annotation is not inspect.Parameter.empty:
                source_type = param.annotation
            break

    target_type = hints.get("return")
    if target_type is None and sig.return_annotation is not inspect.Signature.empty:
        target_type = sig.return_annotation

    # `-> None` comes back from get_type_hints as NoneType; a converter
    # that returns nothing has no usable target.
    if target_type is type(None):
        target_type = None

    return source_type, target_type
