"""Miscellaneous converters for standard library value types."""
import codecs
import os
import re
import uuid
from enum import Enum
from pathlib import Path, PurePath
from typing import Any, Optional

from ..core.converter import Converter, converter
from ..core.creator import ConverterCreator
from ..typing.checker import instance_of
from .generic import GenericToStr, register_generic


@converter
def bytes_to_bytearray(obj: bytes) -> bytearray:
    return bytearray(obj)


@converter
def bytearray_to_bytes(obj: bytearray) -> bytes:
    return bytes(obj)


@converter
def memoryview_to_bytes(obj: memoryview) -> bytes:
    return obj.tobytes()


class StrToCodec(Converter):
    """Looks up a character set name, e.g. "utf-8", and returns its `CodecInfo`."""

    source_type = str
    target_type = codecs.CodecInfo

    def convert(self, obj: str) -> codecs.CodecInfo:
        try:
            return codecs.lookup(obj.strip())
        except LookupError as e:
            raise self.fail(obj, f"Unknown character set '{obj}'", e) from e


@converter
def codec_to_str(obj: codecs.CodecInfo) -> str:
    """Returns the normalized character set name."""
    return obj.name


class EnumToStr(Converter):
    """
    Returns the member name of any enum. Declared for `Enum -> str`, and
    accepts every `Enum` subclass as the source.
    """

    source_type = Enum
    target_type = str

    def convert(self, obj: Enum) -> str:
        return obj.name


class StrToEnum(Converter):
    """Looks up an enum member of `target_type` by name."""

    source_type = str

    def __init__(self, target_type: type):
        super().__init__(str, target_type)

    def can_convert(self, source_type: Any, target_type: Any) -> bool:
        return source_type == self.source_type and target_type == self.target_type

    def convert(self, obj: str) -> Enum:
        try:
            return self.target_type[obj]
        except KeyError as e:
            raise self.fail(obj, f"'{obj}' is not a member of {self.target_type.__name__}", e) from e


class StrToEnumCreator(ConverterCreator):
    """Creates a `StrToEnum` converter for `str` and any `Enum` subclass."""

    def create_converter(self, source_type: Any, target_type: Any) -> Optional[Converter]:
        if source_type is str and isinstance(target_type, type) and issubclass(target_type, Enum):
            return StrToEnum(target_type)
        return None


class StrToRegex(Converter):
    source_type = str
    target_type = re.Pattern

    def convert(self, obj: str) -> re.Pattern:
        try:
            return re.compile(obj)
        except re.error as e:
            raise self.fail(obj, f"'{obj}' is not a valid regular expression: {e}", e) from e


@converter
def regex_to_str(obj: re.Pattern) -> str:
    """Returns the source pattern."""
    return obj.pattern


class StrToUUID(Converter):
    source_type = str
    target_type = uuid.UUID

    def convert(self, obj: str) -> uuid.UUID:
        try:
            return uuid.UUID(obj.strip())
        except ValueError as e:
            raise self.fail(obj, f"'{obj}' is not a valid UUID", e) from e


class StrToPath(Converter):
    """Converts a `str` to a concrete `Path`; also used when a `PurePath` is requested."""

    source_type = str
    target_type = Path

    def can_convert(self, source_type: Any, target_type: Any) -> bool:
        return instance_of(source_type, str) and target_type in (Path, PurePath)

    def convert(self, obj: str) -> Path:
        return Path(obj)


@converter
def path_to_str(obj: PurePath) -> str:
    return os.fspath(obj)


def load_converters(registry) -> None:
    registry.register_converter(bytes_to_bytearray)
    registry.register_converter(bytearray_to_bytes)
    registry.register_converter(memoryview_to_bytes)
    registry.register_converter(StrToCodec())
    registry.register_converter(codec_to_str)
    registry.register_converter(EnumToStr())
    registry.register_creator(StrToEnumCreator())
    registry.register_converter(StrToRegex())
    registry.register_converter(regex_to_str)
    registry.register_converter(StrToUUID())
    registry.register_converter(GenericToStr(uuid.UUID))
    registry.register_converter(StrToPath())
    registry.register_converter(path_to_str)
    for tp in (uuid.UUID, Path):
        register_generic(registry, tp, to_str=False)
