"""
Loading converter modules into a registry.

A converter module ("loader") is any module that exposes a
`load_converters(registry)` function, which registers that module's
converters and creators. Loaders are referred to by dotted path, e.g.
`omzetter.converters.numbers`, or by `module:function` when the entry point
has a different name, and are imported lazily.

Each loader is run against a staging registry first. Its registrations
reach the real registry only once the loader has returned, so a loader that
raises leaves the registry untouched.
"""
from __future__ import annotations

import importlib
from importlib.metadata import entry_points
from types import ModuleType
from typing import TYPE_CHECKING, Any, Callable, Iterable, List, Tuple, Union

from .core.errors import LoaderError
from .core.log import get_logger

if TYPE_CHECKING:
    from .core.converter import Converter
    from .core.creator import ConverterCreator
    from .core.registry import Registry

LoaderRef = Union[str, ModuleType, Callable[["Registry"], None]]

ENTRY_POINT_GROUP = "omzetter.loaders"

BUILTIN_LOADERS: Tuple[str, ...] = (
    "omzetter.converters.boolean",
    "omzetter.converters.numbers",
    "omzetter.converters.collections",
    "omzetter.converters.datetime",
    "omzetter.converters.net",
    "omzetter.converters.misc",
)


class _StagingRegistry:
    """Records registrations so they can be applied to a registry in one go.

    Everything other than registration is forwarded to the real registry.
    """

    def __init__(self, registry: "Registry"):
        self._registry = registry
        self._pending: List[Tuple[str, tuple]] = []

    def register_converter(self, converter: "Converter", source_type: Any = None, target_type: Any = None) -> "Converter":
        self._pending.append(("converter", (converter, source_type, target_type)))
        return converter

    def register_creator(self, creator: "ConverterCreator") -> "ConverterCreator":
        self._pending.append(("creator", (creator,)))
        return creator

    def commit(self) -> Tuple[int, int]:
        converters = creators = 0
        for kind, args in self._pending:
            if kind == "converter":
                self._registry.register_converter(*args)
                converters += 1
            else:
                self._registry.register_creator(*args)
                creators += 1
        self._pending = []
        return converters, creators

    def __getattr__(self, name: str) -> Any:
        return getattr(self._registry, name)


def _loader_name(loader: LoaderRef) -> str:
    if isinstance(loader, str):
        return loader
    if isinstance(loader, ModuleType):
        return loader.__name__
    return f"{getattr(loader, '__module__', '?')}.{getattr(loader, '__qualname__', repr(loader))}"


def _resolve_loader(loader: LoaderRef) -> Callable[["Registry"], None]:
    """Turns a loader reference into its `load_converters` callable."""
    if isinstance(loader, str):
        module_path, _, attr = loader.partition(":")
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            raise ImportError(f"Could not import converter loader '{loader}': {e}") from e
        target = getattr(module, attr or "load_converters", None)
    elif isinstance(loader, ModuleType):
        target = getattr(loader, "load_converters", None)
    else:
        target = loader

    if not callable(target):
        raise LoaderError(f"'{_loader_name(loader)}' does not provide a callable load_converters(registry)")
    return target


def load_module(registry: "Registry", loader: LoaderRef) -> Tuple[int, int]:
    """
    Runs one loader against `registry`.

    Args:
        registry: The registry to load into.
        loader: A dotted module path (optionally `module:function`), a
            module, or a `load_converters`-style callable.

    Returns:
        The number of converters and creators registered.

    Raises:
        ImportError: If the loader module cannot be imported.
        LoaderError: If the module has no `load_converters` function.
    """
    load = _resolve_loader(loader)
    staging = _StagingRegistry(registry)
    load(staging)
    converters, creators = staging.commit()
    get_logger("omzetter.bootstrap").info(
        "loader_loaded",
        registry=registry.name,
        loader=_loader_name(loader),
        converters=converters,
        creators=creators,
    )
    return converters, creators


def discover_loaders() -> List[str]:
    """Returns the loader references declared under the `omzetter.loaders` entry point group."""
    return [ep.value for ep in entry_points(group=ENTRY_POINT_GROUP)]


def bootstrap(
    registry: "Registry",
    loaders: Iterable[LoaderRef] = (),
    *,
    include_builtins: bool = True,
    include_entry_points: bool = True,
) -> "Registry":
    """
    Loads converters into `registry`: the built-in catalog first, then
    entry point plugins, then `loaders`. A loader listed more than once is
    only run once.

    Returns:
        The same registry, for chaining.
    """
    refs: List[LoaderRef] = []
    if include_builtins:
        refs.extend(BUILTIN_LOADERS)
    if include_entry_points:
        refs.extend(discover_loaders())
    refs.extend(loaders)

    seen = set()
    for ref in refs:
        name = _loader_name(ref)
        if name in seen:
            continue
        seen.add(name)
        load_module(registry, ref)
    return registry
