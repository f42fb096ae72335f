"""Construction of the custom field variant matching the wire type."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ...common.coercion import assure_int
from ...errors import DataFormatError
from .date import CustomFieldDate
from .definition import CustomFieldDefinition, CustomFieldType, wire_attributes
from .field import CustomField
from .file import CustomFieldFile
from .multi_select import CustomFieldMultiSelect
from .select import CustomFieldSelect

if TYPE_CHECKING:
    from .group import CustomFieldGroup


FIELD_TYPES: dict[CustomFieldType, type[CustomField]] = {
    CustomFieldType.TEXT: CustomField,
    CustomFieldType.TEXTAREA: CustomField,
    CustomFieldType.PASSWORD: CustomField,
    CustomFieldType.CUSTOM: CustomField,
    CustomFieldType.RADIO: CustomFieldSelect,
    CustomFieldType.SELECT: CustomFieldSelect,
    CustomFieldType.LINKED_SELECT: CustomFieldSelect,
    CustomFieldType.CHECKBOX: CustomFieldMultiSelect,
    CustomFieldType.MULTI_SELECT: CustomFieldMultiSelect,
    CustomFieldType.DATE: CustomFieldDate,
    CustomFieldType.FILE: CustomFieldFile,
}


def field_class_for(field_type: Any) -> type[CustomField]:
    """
    Variant class for a wire type discriminator.

    Raises:
        DataFormatError: If the type is unknown
    """
    number = assure_int(field_type)
    try:
        return FIELD_TYPES[CustomFieldType(number)]
    except (ValueError, KeyError):
        raise DataFormatError(f"Unknown custom field type: {field_type!r}", "CustomField") from None


def create_custom_field(
    group: CustomFieldGroup | None,
    data: Mapping[str, Any],
    definition: CustomFieldDefinition | None = None,
) -> CustomField:
    """
    Build the custom field described by ``data``.

    Args:
        group: Group the field belongs to
        data: Decoded ``field`` element
        definition: Known definition of the field; fetched on demand otherwise

    Returns:
        Parsed instance of the variant selected by the field's ``type`` attribute
    """
    if not isinstance(data, Mapping):
        raise DataFormatError("Custom field data must be a mapping", "CustomField")
    field_class = field_class_for(wire_attributes(data, "CustomField").get("type"))
    custom_field = field_class(group=group)
    if definition is not None:
        custom_field.set_definition(definition)
    custom_field.parse_data(data)
    return custom_field
