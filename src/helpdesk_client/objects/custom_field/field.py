"""Base custom field: a plain text value attached to a custom field group."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ...common.coercion import assure_int, assure_positive_int, assure_string
from ...common.fields import api_field
from ...common.lazy import Lazy
from ...errors import UnsupportedOperationError
from ...transport.decoder import CONTENTS_KEY
from ..base import ObjectBase
from .definition import CustomFieldDefinition, CustomFieldOption, wire_attributes

if TYPE_CHECKING:
    from .group import CustomFieldGroup


@dataclass(eq=False)
class CustomField(ObjectBase):
    """
    Value of one custom field.

    Fields only exist within a group belonging to a parent resource (e.g. a
    ticket), so they cannot be fetched or saved on their own; read and
    write them through the parent's custom field groups.
    """

    object_xml_name = "field"

    id: int | None = api_field()
    type: int | None = api_field()
    name: str | None = api_field(required=True)
    title: str | None = api_field()
    raw_value: str | None = api_field(name="value")

    group: CustomFieldGroup | None = field(default=None, repr=False, compare=False)
    _definition: Lazy[CustomFieldDefinition] = field(init=False, repr=False)

    def __post_init__(self):
        self._definition = Lazy(self._load_definition)

    def _load_definition(self) -> CustomFieldDefinition | None:
        if self.name is None:
            return None
        if self.group is not None:
            return self.group.get_definition(self.name)
        return CustomFieldDefinition.get_all().filter_by_name(self.name).first()

    def parse_data(self, data: Mapping[str, Any]) -> None:
        attributes = wire_attributes(data, type(self).__name__)
        self.id = assure_positive_int(attributes.get("id"))
        self.type = assure_int(attributes.get("type"))
        self.name = assure_string(attributes.get("name"))
        self.title = assure_string(attributes.get("title"))
        self.raw_value = assure_string(data.get(CONTENTS_KEY), "")

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        return {self.name: self.raw_value}

    def definition(self, reload: bool = False) -> CustomFieldDefinition | None:
        return self._definition.get(reload)

    def set_definition(self, definition: CustomFieldDefinition | None) -> CustomField:
        self._definition.set(definition)
        return self

    def get_option(self, value: Any) -> CustomFieldOption | None:
        """
        Resolve an option of this field.

        Args:
            value: Option id (int or numeric string), option value, or an option

        Returns:
            The matching option, or None
        """
        if isinstance(value, CustomFieldOption):
            return value
        if isinstance(value, bool) or value is None:
            return None

        definition = self.definition()
        if definition is None:
            return None
        if isinstance(value, int):
            return definition.get_option_by_id(value)
        if isinstance(value, str):
            if value.strip().isdigit():
                return definition.get_option_by_id(int(value))
            return definition.get_option_by_value(value)
        return None

    @property
    def value(self) -> Any:
        return self.raw_value

    def set_value(self, value: Any) -> CustomField:
        self.raw_value = assure_string(value)
        return self

    def summary(self) -> str:
        return f"{self.title} = {self.raw_value}"

    def __str__(self) -> str:
        return f"{type(self).__name__} {self.name}: {self.summary()}"

    # Fields are only accessible through their group

    @classmethod
    def get_all(cls, *args: Any) -> Any:
        raise UnsupportedOperationError(
            "Custom fields can only be listed through their group", cls.__name__, "get_all"
        )

    @classmethod
    def get(cls, *args: Any) -> Any:
        raise UnsupportedOperationError(
            "Custom fields can only be fetched through their group", cls.__name__, "get"
        )

    def create(self) -> CustomField:
        raise self._unsupported("create", "custom fields are saved through their group")

    def update(self) -> CustomField:
        raise self._unsupported("update", "custom fields are saved through their group")

    def delete(self) -> None:
        raise self._unsupported("delete", "custom fields are saved through their group")

    def refresh(self) -> CustomField:
        raise self._unsupported("refresh", "custom fields are fetched through their group")
