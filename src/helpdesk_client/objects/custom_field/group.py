"""Custom field groups and the component giving a resource its custom fields."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from ...common.coercion import assure_array, assure_positive_int, assure_string
from ...common.fields import api_field
from ...common.lazy import Lazy
from ...common.result_set import ResultSet
from ...common.wire import FILES_KEY, split_files
from ...errors import UnsupportedOperationError
from ..base import ObjectBase, extract_objects
from .definition import CustomFieldDefinition, wire_attributes
from .factory import create_custom_field
from .field import CustomField


logger = logging.getLogger(__name__)

G = TypeVar("G", bound="CustomFieldGroup")


@dataclass(eq=False)
class CustomFieldGroup(ObjectBase):
    """
    A titled set of custom fields of one parent resource.

    Subclasses set ``controller`` to the endpoint listing the groups of one
    parent, e.g. ``/Tickets/TicketCustomField/<ticket id>``.
    """

    object_xml_name = "group"
    read_only = True

    id: int | None = api_field()
    title: str | None = api_field()
    parent_id: int | None = field(default=None, repr=False)
    fields: list[CustomField] = field(default_factory=list, repr=False)
    _definitions: Lazy[ResultSet[CustomFieldDefinition]] = field(init=False, repr=False)

    def __post_init__(self):
        self._definitions = Lazy(CustomFieldDefinition.get_all)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        attributes = wire_attributes(data, type(self).__name__)
        self.id = assure_positive_int(attributes.get("id"))
        self.title = assure_string(attributes.get("title"))
        self.fields = [create_custom_field(self, item) for item in assure_array(data.get("field"))]

    def build_data(self, create: bool) -> dict[str, Any]:
        """Wire data of every field in the group."""
        data: dict[str, Any] = {}
        for custom_field in self.fields:
            field_data = custom_field.build_data(create)
            files = field_data.pop(FILES_KEY, None)
            data.update(field_data)
            if files:
                data.setdefault(FILES_KEY, {}).update(files)
        return data

    @classmethod
    def get_all(cls: type[G], parent: ObjectBase | int) -> ResultSet[G]:
        if not cls.controller:
            raise UnsupportedOperationError(
                "Custom field groups are listed through a resource type", cls.__name__, "get_all"
            )
        parent_id = parent.get_id() if isinstance(parent, ObjectBase) else parent
        return cls.generic_get_all([parent_id], parent_id=parent_id)

    @classmethod
    def get(cls, *args: Any) -> Any:
        raise UnsupportedOperationError(
            "Custom field groups are fetched all at once per parent", cls.__name__, "get"
        )

    def get_definition(self, name: str) -> CustomFieldDefinition | None:
        definitions = self._definitions.get()
        if definitions is None:
            return None
        return definitions.filter_by_name(name).first()

    def set_definitions(self, definitions: list[CustomFieldDefinition]) -> CustomFieldGroup:
        """Use known definitions instead of fetching them."""
        self._definitions.set(ResultSet(definitions, object_type=CustomFieldDefinition))
        return self

    def get_fields(self) -> ResultSet[CustomField]:
        return ResultSet(self.fields, object_type=CustomField)

    def get_field(self, name: str) -> CustomField | None:
        for custom_field in self.fields:
            if custom_field.name == name:
                return custom_field
        return None

    def __iter__(self):
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def summary(self) -> str:
        return f"{self.title} ({len(self.fields)} fields)"


class CustomFieldGroups(Generic[G]):
    """
    Custom field groups of one resource.

    Groups are fetched together for the owner's id and cached until
    reloaded. Updating sends every field of every group in one request.
    """

    def __init__(self, owner: ObjectBase, group_class: type[G]):
        self._owner = owner
        self._group_class = group_class
        self._groups: Lazy[ResultSet[G]] = Lazy(self._load)

    def _load(self) -> ResultSet[G] | None:
        owner_id = self._owner.get_id()
        if owner_id is None:
            return None
        return self._group_class.get_all(owner_id)

    def get(self, reload: bool = False) -> ResultSet[G]:
        groups = self._groups.get(reload)
        return groups if groups is not None else ResultSet((), object_type=self._group_class)

    def get_field(self, name: str, reload: bool = False) -> CustomField | None:
        for group in self.get(reload):
            custom_field = group.get_field(name)
            if custom_field is not None:
                return custom_field
        return None

    def get_field_value(self, name: str) -> Any:
        custom_field = self.get_field(name)
        return custom_field.value if custom_field is not None else None

    def set_field_value(self, name: str, value: Any) -> CustomField:
        """
        Raises:
            KeyError: If the owner has no custom field called ``name``
        """
        custom_field = self.get_field(name)
        if custom_field is None:
            raise KeyError(f"No custom field named {name!r}")
        return custom_field.set_value(value)

    def update(self) -> None:
        """Send the values of all loaded custom fields."""
        owner_id = self._owner.get_id()
        if owner_id is None:
            raise UnsupportedOperationError(
                f"Cannot update custom fields of a new {type(self._owner).__name__}",
                type(self._owner).__name__,
                "update",
            )

        data: dict[str, Any] = {}
        for group in self.get():
            group_data = group.build_data(False)
            files = group_data.pop(FILES_KEY, None)
            data.update(group_data)
            if files:
                data.setdefault(FILES_KEY, {}).update(files)

        fields, files = split_files(data)
        logger.debug(f"Updating custom fields of {type(self._owner).__name__} {owner_id}")
        result = self._group_class.transport().post(
            self._group_class.controller, [owner_id], fields, files or None
        )

        entries = extract_objects(result, self._group_class.object_xml_name, self._group_class.__name__)
        if entries:
            self._groups.set(ResultSet(
                [self._group_class.from_data(entry, parent_id=owner_id) for entry in entries],
                object_type=self._group_class,
            ))
