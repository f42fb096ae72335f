"""Date custom fields."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from ...common.coercion import assure_int
from ...common.wire import WIRE_DATE_FORMAT, format_timestamp, parse_date
from ...config import get_config
from .field import CustomField

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class CustomFieldDate(CustomField):
    """Custom field holding a date, stored as a timestamp."""

    timestamp: int | None = field(default=None, repr=False)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        super().parse_data(data)
        self.timestamp = parse_date(self.raw_value)
        if self.timestamp is None and self.raw_value:
            logger.warning(f"Date field '{self.name}' has an unrecognized value: {self.raw_value!r}")

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        if self.timestamp is None:
            # Unrecognized dates go back as they were read
            return {self.name: self.raw_value or ""}
        return {self.name: format_timestamp(self.timestamp, WIRE_DATE_FORMAT)}

    def get_date(self, fmt: str | None = None) -> str | None:
        """Render the date with ``fmt`` or the configured default date format."""
        if self.timestamp is None:
            return None
        return format_timestamp(self.timestamp, fmt or get_config().date_format)

    def set_timestamp(self, timestamp: Any) -> CustomFieldDate:
        self.timestamp = assure_int(timestamp)
        self.raw_value = (
            format_timestamp(self.timestamp, WIRE_DATE_FORMAT) if self.timestamp is not None else None
        )
        return self

    def set_date(self, date: str | datetime) -> CustomFieldDate:
        """Set from a datetime (naive values are taken as UTC) or a date string."""
        if isinstance(date, datetime):
            if date.tzinfo is None:
                date = date.replace(tzinfo=timezone.utc)
            return self.set_timestamp(int(date.timestamp()))
        return self.set_timestamp(parse_date(date))

    @property
    def value(self) -> str | None:
        return self.get_date()

    def set_value(self, value: Any) -> CustomFieldDate:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return self.set_timestamp(value)
        return self.set_date(value)

    def summary(self) -> str:
        return f"{self.title} = {self.get_date()}"
