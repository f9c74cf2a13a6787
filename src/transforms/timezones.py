from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from pydantic import BaseModel

DEFAULT_VALUE_PREFIX = "Timezone_"


class TimezoneEntryIn(BaseModel):
    # offset is in minutes east of UTC (negative = west)
    offset: int
    text: str
    value: str


@dataclass(frozen=True)
class TimezoneEnums:
    value_enums: list[dict[str, str]]
    implies: dict[str, dict[str, str]]

    def __len__(self) -> int:
        return len(self.value_enums)


def format_utc_offset(offset_minutes: int) -> str:
    """
    -330 -> "-05:30", 480 -> "+08:00", 0 -> "+00:00"
    """
    sign = "+" if offset_minutes >= 0 else "-"
    hours, minutes = divmod(abs(offset_minutes), 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def timezone_enum_value(index: int, *, prefix: str = DEFAULT_VALUE_PREFIX) -> str:
    return f"{prefix}{index:03d}"


def transform_timezones(
    entries: Iterable[dict[str, Any] | TimezoneEntryIn],
    *,
    prefix: str = DEFAULT_VALUE_PREFIX,
) -> TimezoneEnums:
    """
    Timezone table -> (valueEnums, implies) for the category's timezone parameter.

    Identifiers come from the row position, so table order is significant.
    """
    value_enums: list[dict[str, str]] = []
    implies: dict[str, dict[str, str]] = {}

    for i, item in enumerate(entries):
        tz = item if isinstance(item, TimezoneEntryIn) else TimezoneEntryIn.model_validate(item)
        enum_value = timezone_enum_value(i, prefix=prefix)
        value_enums.append({"value": enum_value, "displayName": tz.text})
        implies[enum_value] = {"TzOffset": format_utc_offset(tz.offset), "TzName": tz.value}

    return TimezoneEnums(value_enums=value_enums, implies=implies)
