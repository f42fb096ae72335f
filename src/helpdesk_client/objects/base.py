"""
Generic lifecycle shared by every domain object.

A domain object is new until it has an id. New objects can be created;
persisted objects can be updated, deleted and refreshed. Read-only types
only support fetching.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar

from ..common.coercion import assure_array, assure_positive_int
from ..common.fields import available_filter_methods, available_order_methods, iter_api_fields
from ..common.result_set import ResultSet
from ..common.wire import split_files
from ..errors import DataFormatError, UnsupportedOperationError, ValidationError
from ..transport import Transport, get_transport

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="ObjectBase")


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, (list, tuple, dict, bytes)) and not value)


def extract_objects(result: Any, xml_name: str, resource_type: str | None = None) -> list[Mapping[str, Any]]:
    """
    Pull the per-object mappings for ``xml_name`` out of a decoded response.

    A single mapping is normalized to a list of one.

    Raises:
        DataFormatError: If the response or an entry is not a mapping
    """
    if not result:
        return []
    if not isinstance(result, Mapping):
        raise DataFormatError(
            f"Expected a mapping response, got {type(result).__name__}", resource_type
        )
    entries = result.get(xml_name)
    if entries is None or entries == "":
        return []
    if isinstance(entries, Mapping):
        entries = [entries]
    if not isinstance(entries, list) or not all(isinstance(e, Mapping) for e in entries):
        raise DataFormatError(f"Malformed '{xml_name}' entries in response", resource_type)
    return entries


@dataclass(eq=False)
class ObjectBase(ABC):
    """
    Base class for helpdesk domain objects.

    Subclasses are dataclasses declaring their wire fields with ``api_field``
    and set ``controller`` and ``object_xml_name``.
    """

    controller: ClassVar[str] = ""
    object_xml_name: ClassVar[str] = ""
    read_only: ClassVar[bool] = False
    constant_groups: ClassVar[Mapping[str, Any]] = {}

    @classmethod
    def transport(cls) -> Transport:
        return get_transport()

    @classmethod
    def from_data(cls: type[T], data: Mapping[str, Any], **context: Any) -> T:
        """Build an object from one decoded wire mapping."""
        if not isinstance(data, Mapping):
            raise DataFormatError(
                f"Expected a mapping for {cls.__name__}, got {type(data).__name__}",
                cls.__name__,
            )
        obj = cls(**context)
        obj.parse_data(data)
        return obj

    @abstractmethod
    def parse_data(self, data: Mapping[str, Any]) -> None:
        """Populate fields from one decoded wire mapping."""

    @abstractmethod
    def build_data(self, create: bool) -> dict[str, Any]:
        """Validate required fields and return the flat wire mapping."""

    def check_required_fields(self, create: bool) -> None:
        """
        Raise ValidationError for the first required field that is empty
        or does not match its pattern.
        """
        operation = "create" if create else "update"
        for f, meta in iter_api_fields(self):
            value = getattr(self, f.name)
            wire_name = meta.name or f.name
            if meta.is_required(create) and _is_empty(value):
                raise ValidationError(
                    f"Value for API field '{wire_name}' is required to {operation} "
                    f"{type(self).__name__}",
                    field_name=f.name,
                    resource_type=type(self).__name__,
                    operation=operation,
                )
            if meta.pattern and not _is_empty(value) and not re.search(meta.pattern, str(value)):
                raise ValidationError(
                    f"Value for API field '{wire_name}' does not match {meta.pattern}",
                    field_name=f.name,
                    resource_type=type(self).__name__,
                    operation=operation,
                )

    def get_id(self, complete: bool = False) -> Any:
        """Object id; ``complete=True`` returns the full key as a list."""
        object_id = getattr(self, "id", None)
        return [object_id] if complete else object_id

    @property
    def is_new(self) -> bool:
        return self.get_id() is None

    def _unsupported(self, operation: str, reason: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(
            f"Cannot {operation} {type(self).__name__}: {reason}",
            resource_type=type(self).__name__,
            operation=operation,
        )

    def _check_writable(self, operation: str) -> None:
        if self.read_only:
            raise self._unsupported(operation, "the resource is read-only")

    def _populate(self, result: Any) -> None:
        objects = extract_objects(result, self.object_xml_name, type(self).__name__)
        if objects:
            self.parse_data(objects[0])

    def create(self: T) -> T:
        """Send a new object to the server and load the server's version."""
        self._check_writable("create")
        if not self.is_new:
            raise self._unsupported("create", "object already has an id")

        data, files = split_files(self.build_data(True))
        logger.debug(f"Creating {type(self).__name__}")
        result = self.transport().post(self.controller, [], data, files or None)
        self._populate(result)
        return self

    def update(self: T) -> T:
        """Send the full state of a persisted object."""
        self._check_writable("update")
        if self.is_new:
            raise self._unsupported("update", "object has not been created yet")

        data, files = split_files(self.build_data(False))
        logger.debug(f"Updating {type(self).__name__} {self.get_id(True)}")
        result = self.transport().put(self.controller, self.get_id(True), data, files or None)
        self._populate(result)
        return self

    def delete(self) -> None:
        self._check_writable("delete")
        if self.is_new:
            raise self._unsupported("delete", "object has not been created yet")

        logger.debug(f"Deleting {type(self).__name__} {self.get_id(True)}")
        self.transport().delete(self.controller, self.get_id(True))

    def refresh(self: T) -> T:
        """Reload from the server, discarding local changes."""
        if self.is_new:
            raise self._unsupported("refresh", "object has not been created yet")

        result = self.transport().get(self.controller, self.get_id(True))
        self._populate(result)
        return self

    @classmethod
    def generic_get_all(
        cls: type[T], parameters: Sequence[Any] = (), **context: Any
    ) -> ResultSet[T]:
        result = cls.transport().get(cls.controller, list(parameters))
        objects = [
            cls.from_data(data, **context)
            for data in extract_objects(result, cls.object_xml_name, cls.__name__)
        ]
        return ResultSet(objects, object_type=cls)

    @classmethod
    def generic_get(cls: type[T], parameters: Sequence[Any], **context: Any) -> T | None:
        return cls.generic_get_all(parameters, **context).first()

    @classmethod
    def get_all(cls: type[T]) -> ResultSet[T]:
        return cls.generic_get_all()

    @classmethod
    def get(cls: type[T], object_id: int) -> T | None:
        return cls.generic_get([object_id])

    @classmethod
    def available_filter_methods(cls) -> list[str]:
        return available_filter_methods(cls)

    @classmethod
    def available_order_methods(cls) -> list[str]:
        return available_order_methods(cls)

    def summary(self) -> str:
        return ""

    def __str__(self) -> str:
        ids = ", ".join(str(part) for part in self.get_id(True))
        return f"{type(self).__name__} (id: {ids}): {self.summary()}"


def parse_id_list(data: Mapping[str, Any], container: str, key: str) -> list[int]:
    """
    Ids listed inside a wrapper element, e.g. ``<usergroups><id>1</id><id>2</id></usergroups>``.

    A missing or empty wrapper gives an empty list.
    """
    entries = data.get(container)
    if not isinstance(entries, list) or not entries or not isinstance(entries[0], Mapping):
        return []
    ids = (assure_positive_int(value) for value in assure_array(entries[0].get(key)))
    return [value for value in ids if value is not None]
