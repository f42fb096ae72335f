"""
Helpers for building the flat field mapping sent on create and update.

Conventions differ per field and are chosen by the resource, not globally:
booleans go out as 1/0, id lists either as indexed keys (``name[0]``) or as
a single repeated-key list, and dates in the format the field expects.
File payloads travel separately under ``FILES_KEY``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .coercion import assure_positive_int

# Key of the file payload channel inside build output
FILES_KEY = "__files__"

# Date format the API accepts on writes
WIRE_DATE_FORMAT = "%m/%d/%Y"

# Formats tried, in order, when a date is not ISO 8601
DATE_INPUT_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
)


@dataclass(frozen=True, slots=True)
class FilePayload:
    """A file to upload alongside the form fields."""
    file_name: str
    contents: bytes


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        try:
            float(value)
        except ValueError:
            return False
        return True
    return False


def build_string(data: dict[str, Any], name: str, value: Any) -> None:
    if value is not None:
        data[name] = str(value)


def build_numeric(data: dict[str, Any], name: str, value: Any) -> None:
    if is_numeric(value):
        data[name] = value


def build_bool(data: dict[str, Any], name: str, value: Any) -> None:
    if value is not None:
        data[name] = 1 if value else 0


def build_list(data: dict[str, Any], name: str, values: Iterable[Any] | None) -> None:
    """Indexed keys: ``name[0]``, ``name[1]``, ..."""
    for index, value in enumerate(values or ()):
        data[f"{name}[{index}]"] = value


def build_repeated(data: dict[str, Any], name: str, values: Iterable[Any] | None) -> None:
    """One key carrying a list, encoded by the transport as a repeated parameter."""
    values = list(values or ())
    if values:
        data[name] = values


def build_date(
    data: dict[str, Any], name: str, timestamp: int | None, fmt: str = WIRE_DATE_FORMAT
) -> None:
    if timestamp is not None:
        data[name] = format_timestamp(timestamp, fmt)


def build_file(data: dict[str, Any], name: str, payload: FilePayload) -> None:
    data.setdefault(FILES_KEY, {})[name] = payload


def split_files(data: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, FilePayload]]:
    """Separate build output into form fields and file payloads."""
    fields = {k: v for k, v in data.items() if k != FILES_KEY}
    return fields, dict(data.get(FILES_KEY) or {})


def format_timestamp(timestamp: int, fmt: str) -> str:
    """Render a unix timestamp (UTC) with a strftime format."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(fmt)


def parse_date(text: str | None) -> int | None:
    """
    Parse a date string into a UTC timestamp.

    Accepts unix timestamps, ISO 8601 and ``DATE_INPUT_FORMATS``; dates
    without a timezone are taken as UTC.

    Returns:
        Timestamp, or None for an empty or unrecognized string
    """
    text = (text or "").strip()
    if not text:
        return None
    if text.isdigit():
        return int(text)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"

    parsed: datetime | None = None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        for fmt in DATE_INPUT_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
            except ValueError:
                continue
            break
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def timestamp_from(value: Any) -> int | None:
    """Positive timestamp from a unix time, a datetime (naive is UTC) or a date string."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return assure_positive_int(int(value.timestamp()))
    if is_numeric(value):
        return assure_positive_int(value)
    if isinstance(value, str):
        return assure_positive_int(parse_date(value))
    return None
