"""Multiple-choice custom fields (multi-select, checkbox)."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ...common.result_set import ResultSet
from .definition import CustomFieldOption
from .field import CustomField

# Separator between option values in the wire value
VALUES_SEPARATOR = ", "


@dataclass(eq=False)
class CustomFieldMultiSelect(CustomField):
    """
    Custom field holding a set of selected options.

    The wire value is the selected option values joined by ``", "``.
    Values that do not resolve to an option are dropped and duplicates are
    removed, keeping the first occurrence.
    """

    options: list[CustomFieldOption] = field(default_factory=list, repr=False)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        super().parse_data(data)
        values = self.raw_value.split(VALUES_SEPARATOR) if self.raw_value else []
        self.options = self._resolve(values)

    def _resolve(self, values: Iterable[Any]) -> list[CustomFieldOption]:
        options: list[CustomFieldOption] = []
        seen: set[Any] = set()
        for value in values:
            option = self.get_option(value)
            if option is None or option.id in seen:
                continue
            seen.add(option.id)
            options.append(option)
        return options

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        return {f"{self.name}[{index}]": option.id for index, option in enumerate(self.options)}

    @property
    def selected_options(self) -> ResultSet[CustomFieldOption]:
        return ResultSet(self.options, object_type=CustomFieldOption)

    def set_selected_options(self, options: Iterable[Any]) -> CustomFieldMultiSelect:
        """Select options given as options, ids or values."""
        self.options = self._resolve(options)
        self.raw_value = VALUES_SEPARATOR.join(option.value or "" for option in self.options)
        return self

    def get_values(self) -> dict[int, str]:
        """Selected options as ``{option id: option value}``."""
        return {option.id: option.value for option in self.options}

    @property
    def value(self) -> ResultSet[CustomFieldOption]:
        return self.selected_options

    def set_value(self, value: Any) -> CustomFieldMultiSelect:
        if isinstance(value, str):
            value = value.split(VALUES_SEPARATOR) if value else []
        elif not isinstance(value, Iterable):
            value = [value]
        return self.set_selected_options(value)

    def summary(self) -> str:
        selected = VALUES_SEPARATOR.join(option.value or "" for option in self.options)
        return f"{self.title} = {selected}"
