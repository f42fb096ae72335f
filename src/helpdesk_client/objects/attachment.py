"""File attachments identified by their parent's id and their own."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, TypeVar

from ..common.coercion import assure_int, assure_positive_int, assure_string
from ..common.fields import api_field
from ..common.result_set import ResultSet
from ..common.wire import build_numeric, build_string
from ..errors import DataFormatError
from .base import ObjectBase

A = TypeVar("A", bound="AttachmentBase")


@dataclass(eq=False)
class AttachmentBase(ObjectBase):
    """
    Attachment of a ticket or knowledgebase article.

    Attachments are addressed as ``[parent id, id]``, can be created and
    deleted but not edited. Contents travel base64 encoded in the
    ``contents`` field.
    """

    # Attribute and wire name of the parent id
    parent_id_field: ClassVar[str] = ""
    parent_wire_name: ClassVar[str] = ""

    id: int | None = api_field()
    file_name: str | None = api_field(name="filename", required=True)
    file_size: int | None = api_field(name="filesize")
    file_type: str | None = api_field(name="filetype")
    dateline: int | None = api_field()
    contents: bytes | None = api_field(required_create=True, filter=False, order=False, repr=False)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        self.id = assure_positive_int(data.get("id"))
        setattr(self, self.parent_id_field, assure_positive_int(data.get(self.parent_wire_name)))
        self.file_name = assure_string(data.get("filename"))
        self.file_size = assure_int(data.get("filesize"))
        self.file_type = assure_string(data.get("filetype"))
        self.dateline = assure_positive_int(data.get("dateline"))
        encoded = data.get("contents")
        if isinstance(encoded, str) and encoded:
            try:
                self.contents = base64.b64decode("".join(encoded.split()), validate=True)
            except (binascii.Error, ValueError) as e:
                raise DataFormatError(
                    f"Attachment {self.id} has invalid base64 contents", type(self).__name__
                ) from e

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        build_numeric(data, self.parent_wire_name, self.get_parent_id())
        build_string(data, "filename", self.file_name)
        if self.contents is not None:
            data["contents"] = base64.b64encode(self.contents).decode()
        return data

    def get_parent_id(self) -> int | None:
        return getattr(self, self.parent_id_field)

    def get_id(self, complete: bool = False) -> Any:
        return [self.get_parent_id(), self.id] if complete else self.id

    def update(self) -> AttachmentBase:
        raise self._unsupported("update", "attachments cannot be edited")

    @classmethod
    def get_all(cls: type[A], parent: ObjectBase | int) -> ResultSet[A]:
        parent_id = parent.get_id() if isinstance(parent, ObjectBase) else parent
        return cls.generic_get_all(["ListAll", parent_id])

    @classmethod
    def get(cls: type[A], parent_id: int, object_id: int) -> A | None:
        return cls.generic_get([parent_id, object_id])

    def set_file_name(self, file_name: str | None) -> AttachmentBase:
        self.file_name = assure_string(file_name)
        return self

    def set_contents(self, contents: bytes | str) -> AttachmentBase:
        self.contents = contents.encode() if isinstance(contents, str) else contents
        self.file_size = len(self.contents)
        return self

    def set_contents_from_file(self, path: str | Path, file_name: str | None = None) -> AttachmentBase:
        """Load contents from ``path``; the file name defaults to its base name."""
        path = Path(path)
        self.set_contents(path.read_bytes())
        return self.set_file_name(file_name or path.name)

    def summary(self) -> str:
        return f"{self.file_name} (type: {self.file_type}, size: {self.file_size})"
