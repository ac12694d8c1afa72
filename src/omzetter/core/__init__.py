# omzetter.core
# This package contains the core classes of the omzetter framework:
# the Converter and ConverterCreator contracts and the Registry that
# resolves converters for type pairs.

from .converter import Converter, FunctionConverter, converter
from .creator import ConverterCreator, FunctionCreator, PassThruConverter, PassThruCreator, creator
from .errors import (
    ConfigError,
    ConversionError,
    LoaderError,
    MissingTypeHintError,
    NoConverterFoundError,
    OmzetterError,
)
from .registry import NO_CONVERTER, Registry

__all__ = [
    "Converter",
    "FunctionConverter",
    "converter",
    "ConverterCreator",
    "FunctionCreator",
    "PassThruConverter",
    "PassThruCreator",
    "creator",
    "ConfigError",
    "ConversionError",
    "LoaderError",
    "MissingTypeHintError",
    "NoConverterFoundError",
    "OmzetterError",
    "NO_CONVERTER",
    "Registry",
]
