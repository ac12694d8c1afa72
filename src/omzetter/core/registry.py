"""
This module defines the `Registry`, which stores converters and creators and
resolves a converter for any (source type, target type) pair at runtime.

Resolution works in three phases. Registered converters are scanned first
and the most specific match wins. If none matches, creators are asked in
registration order to build one. If that fails too, the pair is remembered
as unconvertible. Every outcome is cached, so later lookups for the same
pair are a single dictionary read.
"""
from __future__ import annotations

import os
import threading
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

from typeguard import TypeCheckError, check_type

from ..typing.checker import is_assignable_from
from ..typing.pair import TypePair
from .converter import Converter
from .creator import ConverterCreator, PassThruCreator
from .errors import ConversionError, NoConverterFoundError, OmzetterError
from .log import configure_logging, get_logger

if TYPE_CHECKING:
    from ..config import Config


class _NoConverter:
    """Cache marker for a type pair that has no converter."""

    def __repr__(self) -> str:
        return "NO_CONVERTER"


NO_CONVERTER = _NoConverter()

_MISSING = object()


class Registry:
    """Stores converters and creators, and resolves converters for type pairs.

    All methods are safe to call from multiple threads, including while
    converters are still being registered.

    Attributes:
        name: The registry name, used in logs.
        invalidate_on_register: If True, registering a converter or creator
            forgets every pair previously found to have no converter. If
            False (the default), such pairs keep failing until
            `clear_cache` is called.
        verify_results: If True, `convert` checks every result against the
            requested target type.
    """

    def __init__(
        self,
        *,
        pass_through: bool = True,
        invalidate_on_register: bool = False,
        verify_results: bool = False,
        name: str = "default",
    ):
        """Initializes a Registry.

        Args:
            pass_through: Register the built-in `PassThruCreator`, which
                handles identical and compatible type pairs.
            invalidate_on_register: Drop cached "no converter" results on
                every new registration.
            verify_results: Type-check conversion results in `convert`.
            name: A name for the registry, used in logs.
        """
        self.name = name
        self.invalidate_on_register = invalidate_on_register
        self.verify_results = verify_results
        self.logger = get_logger(f"omzetter.registry.{name}")

        self._directory: Dict[TypePair, Union[Converter, _NoConverter]] = {}
        self._directory_lock = threading.Lock()
        self._converters: List[Converter] = []
        self._creators: List[ConverterCreator] = []
        self._lock = threading.Lock()
        # Bumped on every registration; a lookup that saw an older value must
        # not cache a failure when invalidate_on_register is set.
        self._generation = 0
        # Keys written by register_converter; clear_cache keeps these.
        self._registered_keys: Dict[TypePair, Converter] = {}

        if pass_through:
            self.register_creator(PassThruCreator())

    @classmethod
    def from_config(cls, config: "Config", *, name: str = "default") -> "Registry":
        """Builds a registry from the `registry.*` keys of a configuration.

        Loader modules are loaded through `omzetter.bootstrap`: the built-in
        catalog, entry point plugins and any modules listed under
        `registry.loaders`, unless switched off in the configuration.

        Raises:
            ConfigError: If a `registry.*` or `logging.level` value is invalid.
        """
        from ..bootstrap import bootstrap

        options = config.registry_options()
        configure_logging(config.log_level())
        registry = cls(
            pass_through=options["pass_through"],
            invalidate_on_register=options["invalidate_on_register"],
            verify_results=options["verify_results"],
            name=name,
        )
        bootstrap(
            registry,
            loaders=options["loaders"],
            include_builtins=options["include_builtins"],
            include_entry_points=options["include_entry_points"],
        )
        return registry

    # --- Registration ---

    def register_converter(
        self,
        converter: Converter,
        source_type: Any = None,
        target_type: Any = None,
    ) -> Converter:
        """Registers a converter.

        The converter is also cached under its declared type pair, or under
        `source_type`/`target_type` when given, unless that pair already has
        a cache entry. It is returned unchanged, so this method can be used
        as a decorator.
        """
        key = TypePair(
            source_type if source_type is not None else converter.source_type,
            target_type if target_type is not None else converter.target_type,
        )
        with self._lock:
            self._converters.append(converter)
            self._generation += 1
        with self._directory_lock:
            if key not in self._registered_keys:
                self._registered_keys[key] = converter
        self._put_if_absent(key, converter)
        self.logger.debug("converter_registered", registry=self.name, converter=repr(converter), key=str(key))
        if self.invalidate_on_register:
            self._forget_failures()
        return converter

    def register_creator(self, creator: ConverterCreator) -> ConverterCreator:
        """Registers a creator. Creators are tried in registration order."""
        with self._lock:
            self._creators.append(creator)
            self._generation += 1
        self.logger.debug("creator_registered", registry=self.name, creator=repr(creator))
        if self.invalidate_on_register:
            self._forget_failures()
        return creator

    @property
    def converters(self) -> Tuple[Converter, ...]:
        with self._lock:
            return tuple(self._converters)

    @property
    def creators(self) -> Tuple[ConverterCreator, ...]:
        with self._lock:
            return tuple(self._creators)

    # --- Cache ---

    def _put_if_absent(self, key: TypePair, value: Union[Converter, _NoConverter]) -> Union[Converter, _NoConverter]:
        with self._directory_lock:
            return self._directory.setdefault(key, value)

    def _put_failure_if_absent(self, key: TypePair, generation: int) -> bool:
        """Caches `key` as unconvertible unless something was registered since `generation`."""
        with self._directory_lock:
            if self.invalidate_on_register and self._generation != generation:
                return False
            self._directory.setdefault(key, NO_CONVERTER)
            return True

    def _lookup(self, key: TypePair) -> Optional[Union[Converter, _NoConverter]]:
        with self._directory_lock:
            return self._directory.get(key)

    def _forget_failures(self) -> None:
        with self._directory_lock:
            stale = [key for key, value in self._directory.items() if value is NO_CONVERTER]
            for key in stale:
                del self._directory[key]
        if stale:
            self.logger.debug("negative_cache_invalidated", registry=self.name, entries=len(stale))

    def clear_cache(self) -> None:
        """Forgets every resolved and failed lookup.

        The default entries written by `register_converter` are kept.
        """
        with self._directory_lock:
            self._directory = dict(self._registered_keys)
        self.logger.debug("cache_cleared", registry=self.name)

    # --- Resolution ---

    def _find_converter(self, source_type: Any, target_type: Any) -> Optional[Converter]:
        """Returns the most specific registered converter for the pair, if any."""
        found: Optional[Converter] = None
        for candidate in self.converters:
            if not candidate.can_convert(source_type, target_type):
                continue
            # A candidate whose declared source type is a subtype of the one
            # found so far is more specific and replaces it.
            if found is None or is_assignable_from(found.source_type, candidate.source_type):
                found = candidate
        return found

    def _create_converter(self, source_type: Any, target_type: Any) -> Optional[Converter]:
        for creator in self.creators:
            created = creator.create_converter(source_type, target_type)
            if created is not None:
                self.logger.debug(
                    "converter_created",
                    registry=self.name,
                    creator=creator.name,
                    converter=repr(created),
                )
                return created
        return None

    def resolve(self, source_type: Any, target_type: Any) -> Converter:
        """Returns a converter for `source_type` -> `target_type`.

        Repeated calls for the same pair return the same converter instance.

        Raises:
            NoConverterFoundError: If no registered converter matches and no
                creator can build one.
        """
        key = TypePair(source_type, target_type)
        while True:
            cached = self._lookup(key)
            if cached is NO_CONVERTER:
                raise NoConverterFoundError(source_type, target_type)
            if cached is not None:
                return cached

            with self._lock:
                generation = self._generation
            found = self._find_converter(source_type, target_type)
            if found is None:
                found = self._create_converter(source_type, target_type)
            if found is not None:
                # Another thread may have published first; loop to return
                # whichever converter won.
                self._put_if_absent(key, found)
                self.logger.debug("converter_resolved", registry=self.name, key=str(key), converter=repr(found))
                continue

            if self._put_failure_if_absent(key, generation):
                self.logger.debug("no_converter_found", registry=self.name, key=str(key))

    def can_resolve(self, source_type: Any, target_type: Any) -> bool:
        """Returns True if a converter exists or can be created for the pair."""
        try:
            self.resolve(source_type, target_type)
        except NoConverterFoundError:
            return False
        return True

    def convert(self, obj: Any, target_type: Any, default: Any = _MISSING) -> Any:
        """Converts `obj` to `target_type`.

        The converter is resolved from the runtime type of `obj`.

        Args:
            obj: The value to convert.
            target_type: The type to convert to.
            default: If given, returned instead of raising when the
                conversion itself fails. It is not returned when no
                converter exists for the pair.

        Raises:
            NoConverterFoundError: If there is no converter for the pair.
            ConversionError: If the conversion fails and no default is given.
        """
        converter = self.resolve(type(obj), target_type)
        try:
            result = converter.convert(obj)
            if self.verify_results:
                self._verify(obj, result, target_type)
            return result
        except ConversionError as e:
            if default is _MISSING:
                raise
            self.logger.debug("conversion_failed", registry=self.name, converter=repr(converter), error=str(e))
            return default
        except OmzetterError:
            raise
        except Exception as e:
            error = ConversionError(
                f"Converter {converter!r} failed: {e}",
                source=obj,
                source_type=type(obj),
                target_type=target_type,
            )
            if default is _MISSING:
                raise error from e
            self.logger.debug("conversion_failed", registry=self.name, converter=repr(converter), error=str(e))
            return default

    def _verify(self, obj: Any, result: Any, target_type: Any) -> None:
        try:
            check_type(result, target_type)
        except TypeCheckError as e:
            raise ConversionError(
                f"Converted value {result!r} is not a valid {target_type!r}: {e}",
                source=obj,
                source_type=type(obj),
                target_type=target_type,
            ) from e

    def __repr__(self) -> str:
        return (
            f"Registry(name='{self.name}', converters={len(self.converters)}, "
            f"creators={len(self.creators)})"
        )


# --- Default registry ---

CONFIG_ENV_VAR = "OMZETTER_CONFIG"

_default_registry: Optional[Registry] = None
_default_registry_lock = threading.Lock()


def get_registry() -> Registry:
    """
    Returns the process-wide default registry, creating it on first use.

    The registry is configured from the YAML file named by the
    `OMZETTER_CONFIG` environment variable, if set, and loads the built-in
    converter catalog plus any plugins declared under the `omzetter.loaders`
    entry point group.
    """
    global _default_registry
    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                from ..config import load_config

                _default_registry = Registry.from_config(load_config(os.environ.get(CONFIG_ENV_VAR)))
    return _default_registry


def reset_registry() -> None:
    """Discards the default registry; the next `get_registry` call builds a new one."""
    global _default_registry
    with _default_registry_lock:
        _default_registry = None


def register_converter(converter: Converter, source_type: Any = None, target_type: Any = None) -> Converter:
    """Registers a converter with the default registry."""
    return get_registry().register_converter(converter, source_type, target_type)


def register_creator(creator: ConverterCreator) -> ConverterCreator:
    """Registers a creator with the default registry."""
    return get_registry().register_creator(creator)


def resolve(source_type: Any, target_type: Any) -> Converter:
    """Resolves a converter using the default registry."""
    return get_registry().resolve(source_type, target_type)


def can_resolve(source_type: Any, target_type: Any) -> bool:
    """Checks whether the default registry can convert between the two types."""
    return get_registry().can_resolve(source_type, target_type)


def convert(obj: Any, target_type: Any, default: Any = _MISSING) -> Any:
    """Converts `obj` to `target_type` using the default registry."""
    return get_registry().convert(obj, target_type, default)
