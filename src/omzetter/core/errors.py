from __future__ import annotations

from typing import Any, Optional

from ..typing.pair import type_name


class OmzetterError(Exception):
    """Base class for all exceptions raised by the omzetter framework."""

    pass


class ConversionError(OmzetterError):
    """Raised when a resolved converter cannot convert a value.

    A conversion error is a data-quality problem: the same converter may
    succeed for another value, so these failures are never cached.

    Attributes:
        source: The value that failed to convert.
        source_type: The type of the value.
        target_type: The type the value was being converted to.
        message: A human-readable description of the failure.
    """

    def __init__(
        self,
        message: str,
        *,
        source: Any = None,
        source_type: Optional[Any] = None,
        target_type: Optional[Any] = None,
    ):
        self.source = source
        self.source_type = source_type or (type(source) if source is not None else None)
        self.target_type = target_type
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        if self.source_type is None and self.target_type is None:
            return self.message
        return (
            f"{self.message} "
            f"({type_name(self.source_type)} -> {type_name(self.target_type)})"
        )


class NoConverterFoundError(OmzetterError, LookupError):
    """Raised when no converter exists, and none can be created, for a type pair.

    This is a configuration error rather than a data error, so it is kept
    apart from `ConversionError` and is never replaced by a default value.
    """

    def __init__(self, source_type: Any, target_type: Any):
        self.source_type = source_type
        self.target_type = target_type
        super().__init__(
            f"No converter found for {type_name(source_type)} -> {type_name(target_type)}"
        )


class MissingTypeHintError(OmzetterError, TypeError):
    """Raised when a function converter is defined without usable type hints."""

    pass


class LoaderError(OmzetterError):
    """Raised when a module cannot be used to load converters."""

    pass


class ConfigError(OmzetterError, ValueError):
    """Raised when a configuration value is unknown or has the wrong type."""

    pass
