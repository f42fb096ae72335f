"""Custom field definitions and their selectable options."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from ...common.coercion import assure_bool, assure_int, assure_positive_int, assure_string
from ...common.fields import api_field
from ...common.lazy import Lazy
from ...common.result_set import ResultSet
from ...errors import DataFormatError, UnsupportedOperationError
from ...transport.decoder import ATTRIBUTES_KEY
from ..base import ObjectBase


class CustomFieldType(IntEnum):
    TEXT = 1
    TEXTAREA = 2
    PASSWORD = 3
    CHECKBOX = 4
    RADIO = 5
    SELECT = 6
    MULTI_SELECT = 7
    CUSTOM = 8
    LINKED_SELECT = 9
    DATE = 10
    FILE = 11


def wire_attributes(data: Mapping[str, Any], resource_type: str) -> Mapping[str, Any]:
    """The ``_attributes`` mapping of an element; custom field data carries its fields there."""
    attributes = data.get(ATTRIBUTES_KEY)
    if not isinstance(attributes, Mapping):
        raise DataFormatError(f"{resource_type} data has no attributes", resource_type)
    return attributes


@dataclass(eq=False)
class CustomFieldOption(ObjectBase):
    """One selectable value of a select, multi-select, radio or checkbox field."""

    controller = "/Base/CustomField/ListOptions"
    object_xml_name = "option"
    read_only = True

    id: int | None = api_field(name="customfieldoptionid")
    field_id: int | None = api_field(name="customfieldid")
    value: str | None = api_field(name="optionvalue")
    display_order: int | None = api_field(name="displayorder")
    is_selected: bool = api_field(False, name="isselected")
    parent_option_id: int | None = api_field(name="parentcustomfieldoptionid")

    def parse_data(self, data: Mapping[str, Any]) -> None:
        attributes = wire_attributes(data, type(self).__name__)
        self.id = assure_positive_int(attributes.get("customfieldoptionid"))
        self.field_id = assure_positive_int(attributes.get("customfieldid"))
        self.value = assure_string(attributes.get("optionvalue"))
        self.display_order = assure_int(attributes.get("displayorder"))
        self.is_selected = assure_bool(attributes.get("isselected"))
        self.parent_option_id = assure_positive_int(attributes.get("parentcustomfieldoptionid"))

    def build_data(self, create: bool) -> dict[str, Any]:
        raise self._unsupported("create" if create else "update", "the resource is read-only")

    @classmethod
    def get_all(cls, custom_field: CustomFieldDefinition | int) -> ResultSet[CustomFieldOption]:
        field_id = custom_field.id if isinstance(custom_field, CustomFieldDefinition) else custom_field
        return cls.generic_get_all([field_id])

    @classmethod
    def get(cls, object_id: int) -> CustomFieldOption | None:
        raise UnsupportedOperationError(
            "Options can only be listed per custom field", cls.__name__, "get"
        )

    def summary(self) -> str:
        return self.value or ""


@dataclass(eq=False)
class CustomFieldDefinition(ObjectBase):
    """Schema of a custom field: its type, name and available options."""

    controller = "/Base/CustomField"
    object_xml_name = "customfield"
    read_only = True

    id: int | None = api_field(name="customfieldid")
    group_id: int | None = api_field(name="customfieldgroupid")
    type: int | None = api_field(name="fieldtype")
    name: str | None = api_field(name="fieldname")
    title: str | None = api_field()
    default_value: str | None = api_field(name="defaultvalue")
    is_required: bool = api_field(False, name="isrequired")
    user_editable: bool = api_field(False, name="usereditable")
    staff_editable: bool = api_field(False, name="staffeditable")
    regexp_validate: str | None = api_field(name="regexpvalidate")
    display_order: int | None = api_field(name="displayorder")
    encrypt_in_db: bool = api_field(False, name="encryptindb")
    description: str | None = api_field()

    _options: Lazy[ResultSet[CustomFieldOption]] = field(init=False, repr=False)

    def __post_init__(self):
        self._options = Lazy(self._load_options)

    def _load_options(self) -> ResultSet[CustomFieldOption] | None:
        if self.id is None:
            return None
        return CustomFieldOption.get_all(self.id)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        attributes = wire_attributes(data, type(self).__name__)
        self.id = assure_positive_int(attributes.get("customfieldid"))
        self.group_id = assure_positive_int(attributes.get("customfieldgroupid"))
        self.type = assure_int(attributes.get("fieldtype"))
        self.name = assure_string(attributes.get("fieldname"))
        self.title = assure_string(attributes.get("title"))
        self.default_value = assure_string(attributes.get("defaultvalue"))
        self.is_required = assure_bool(attributes.get("isrequired"))
        self.user_editable = assure_bool(attributes.get("usereditable"))
        self.staff_editable = assure_bool(attributes.get("staffeditable"))
        self.regexp_validate = assure_string(attributes.get("regexpvalidate"))
        self.display_order = assure_int(attributes.get("displayorder"))
        self.encrypt_in_db = assure_bool(attributes.get("encryptindb"))
        self.description = assure_string(attributes.get("description"))
        self._options.reset()

    def build_data(self, create: bool) -> dict[str, Any]:
        raise self._unsupported("create" if create else "update", "the resource is read-only")

    @classmethod
    def get(cls, object_id: int) -> CustomFieldDefinition | None:
        return cls.get_all().filter_by_id(object_id).first()

    def get_options(self, reload: bool = False) -> ResultSet[CustomFieldOption]:
        options = self._options.get(reload)
        return options if options is not None else ResultSet((), object_type=CustomFieldOption)

    def set_options(self, options: list[CustomFieldOption] | ResultSet[CustomFieldOption]) -> CustomFieldDefinition:
        """Use a known option list instead of fetching it."""
        self._options.set(ResultSet(options, object_type=CustomFieldOption))
        return self

    def get_option_by_id(self, option_id: int) -> CustomFieldOption | None:
        return self.get_options().filter_by_id(option_id).first()

    def get_option_by_value(self, value: str) -> CustomFieldOption | None:
        return self.get_options().filter_by_value(value).first()

    def summary(self) -> str:
        return f"{self.title} ({self.name})"
