from .core.converter import Converter, FunctionConverter, converter
from .core.creator import ConverterCreator, FunctionCreator, PassThruCreator, creator
from .core.errors import (
    ConfigError,
    ConversionError,
    LoaderError,
    MissingTypeHintError,
    NoConverterFoundError,
    OmzetterError,
)
from .core.registry import (
    Registry,
    can_resolve,
    convert,
    get_registry,
    register_converter,
    register_creator,
    reset_registry,
    resolve,
)
from .bootstrap import bootstrap, load_module
from .config import Config, load_config
from .typing import TypePair

__all__ = [
    # Core API
    "Converter",
    "FunctionConverter",
    "converter",
    "ConverterCreator",
    "FunctionCreator",
    "PassThruCreator",
    "creator",
    "Registry",
    "TypePair",

    # Default registry
    "get_registry",
    "reset_registry",
    "register_converter",
    "register_creator",
    "resolve",
    "can_resolve",
    "convert",

    # Errors
    "OmzetterError",
    "ConversionError",
    "ConfigError",
    "NoConverterFoundError",
    "MissingTypeHintError",
    "LoaderError",

    # Extensibility
    "bootstrap",
    "load_module",
    "Config",
    "load_config",
]

__version__ = "0.1.0"
