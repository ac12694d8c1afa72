"""
Date and time converters.

Strings are parsed and formatted as ISO 8601. Numeric timestamps are POSIX
seconds and are interpreted in UTC.
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Callable

from ..core.converter import Converter, converter


class _IsoParser(Converter):
    """Parses an ISO 8601 `str` with `target_type.fromisoformat`."""

    source_type = str

    def __init__(self, target_type: type):
        super().__init__(str, target_type)
        self._parse: Callable[[str], Any] = target_type.fromisoformat

    def convert(self, obj: str) -> Any:
        try:
            return self._parse(obj.strip())
        except ValueError as e:
            raise self.fail(obj, f"'{obj}' is not an ISO 8601 {self.target_type.__name__}", e) from e


class IsoFormatter(Converter):
    """Formats a date, datetime or time as an ISO 8601 `str`."""

    target_type = str

    def __init__(self, source_type: type):
        super().__init__(source_type, str)

    def convert(self, obj: Any) -> str:
        return obj.isoformat()


class DatetimeToDate(Converter):
    source_type = datetime
    target_type = date

    def convert(self, obj: datetime) -> date:
        return obj.date()


class DateToDatetime(Converter):
    """Converts a date to a datetime at midnight, with no time zone."""

    source_type = date
    target_type = datetime

    def can_convert(self, source_type: Any, target_type: Any) -> bool:
        # datetime is a date subclass; datetime -> datetime is a pass-through.
        return not (isinstance(source_type, type) and issubclass(source_type, datetime)) and super().can_convert(
            source_type, target_type
        )

    def convert(self, obj: date) -> datetime:
        return datetime(obj.year, obj.month, obj.day)


class TimestampToDatetime(Converter):
    """Converts POSIX seconds to an aware UTC datetime."""

    target_type = datetime

    def __init__(self, source_type: type):
        super().__init__(source_type, datetime)

    def can_convert(self, source_type: Any, target_type: Any) -> bool:
        return source_type is not bool and super().can_convert(source_type, target_type)

    def convert(self, obj: Any) -> datetime:
        try:
            return datetime.fromtimestamp(obj, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise self.fail(obj, f"{obj!r} is not a valid timestamp", e) from e


@converter
def datetime_to_timestamp(obj: datetime) -> float:
    """Returns POSIX seconds. Naive datetimes are taken to be UTC."""
    if obj.tzinfo is None:
        obj = obj.replace(tzinfo=timezone.utc)
    return obj.timestamp()


@converter
def timedelta_to_float(obj: timedelta) -> float:
    """Returns the duration in seconds."""
    return obj.total_seconds()


class SecondsToTimedelta(Converter):
    target_type = timedelta

    def __init__(self, source_type: type):
        super().__init__(source_type, timedelta)

    def can_convert(self, source_type: Any, target_type: Any) -> bool:
        return source_type is not bool and super().can_convert(source_type, target_type)

    def convert(self, obj: Any) -> timedelta:
        try:
            return timedelta(seconds=obj)
        except (OverflowError, ValueError) as e:
            raise self.fail(obj, f"{obj!r} is not a valid number of seconds", e) from e


def load_converters(registry) -> None:
    for tp in (date, datetime, time):
        registry.register_converter(_IsoParser(tp))
        registry.register_converter(IsoFormatter(tp))
    registry.register_converter(DatetimeToDate())
    registry.register_converter(DateToDatetime())
    for tp in (int, float):
        registry.register_converter(TimestampToDatetime(tp))
        registry.register_converter(SecondsToTimedelta(tp))
    registry.register_converter(datetime_to_timestamp)
    registry.register_converter(timedelta_to_float)
