"""Single-choice custom fields (select, radio, linked select)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .definition import CustomFieldOption
from .field import CustomField


@dataclass(eq=False)
class CustomFieldSelect(CustomField):
    """Custom field holding one selected option."""

    option: CustomFieldOption | None = field(default=None, repr=False)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        super().parse_data(data)
        self.option = self.get_option(self.raw_value)

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        if self.option is None:
            return {}
        return {self.name: self.option.id}

    @property
    def selected_option(self) -> CustomFieldOption | None:
        return self.option

    def set_selected_option(self, option: Any) -> CustomFieldSelect:
        """Select an option given as an option, its id or its value; unknown values clear it."""
        self.option = self.get_option(option)
        self.raw_value = self.option.value if self.option is not None else None
        return self

    @property
    def value(self) -> CustomFieldOption | None:
        return self.option

    def set_value(self, value: Any) -> CustomFieldSelect:
        return self.set_selected_option(value)

    def summary(self) -> str:
        selected = self.option.value if self.option is not None else None
        return f"{self.title} = {selected}"
