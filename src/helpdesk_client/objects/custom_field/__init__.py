"""Custom fields: typed values attached to resources through field groups."""

from .date import CustomFieldDate
from .definition import CustomFieldDefinition, CustomFieldOption, CustomFieldType
from .factory import FIELD_TYPES, create_custom_field, field_class_for
from .field import CustomField
from .file import CustomFieldFile
from .group import CustomFieldGroup, CustomFieldGroups
from .multi_select import VALUES_SEPARATOR, CustomFieldMultiSelect
from .select import CustomFieldSelect

__all__ = [
    "CustomField",
    "CustomFieldDate",
    "CustomFieldDefinition",
    "CustomFieldFile",
    "CustomFieldGroup",
    "CustomFieldGroups",
    "CustomFieldMultiSelect",
    "CustomFieldOption",
    "CustomFieldSelect",
    "CustomFieldType",
    "FIELD_TYPES",
    "VALUES_SEPARATOR",
    "create_custom_field",
    "field_class_for",
]
