"""File custom fields."""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ...common.coercion import assure_string
from ...common.wire import FilePayload, build_file
from ...errors import DataFormatError
from .definition import wire_attributes
from .field import CustomField


@dataclass(eq=False)
class CustomFieldFile(CustomField):
    """
    Custom field holding an uploaded file.

    The file is base64 on the wire. It is only sent back when its name or
    contents changed since it was loaded.
    """

    file_name: str | None = field(default=None, repr=False)
    contents: bytes | None = field(default=None, repr=False)
    is_changed: bool = field(default=False, repr=False)

    def parse_data(self, data: Mapping[str, Any]) -> None:
        super().parse_data(data)
        attributes = wire_attributes(data, type(self).__name__)
        self.file_name = assure_string(attributes.get("filename"))
        try:
            # XML bodies may wrap base64 across lines
            self.contents = base64.b64decode("".join((self.raw_value or "").split()), validate=True)
        except (binascii.Error, ValueError) as e:
            raise DataFormatError(
                f"File field '{self.name}' has invalid base64 contents", type(self).__name__
            ) from e
        self.is_changed = False

    def build_data(self, create: bool) -> dict[str, Any]:
        self.check_required_fields(create)
        data: dict[str, Any] = {}
        if self.is_changed:
            build_file(data, self.name, FilePayload(self.file_name or "", self.contents or b""))
        return data

    def set_file_name(self, file_name: str | None) -> CustomFieldFile:
        file_name = assure_string(file_name)
        if file_name != self.file_name:
            self.file_name = file_name
            self.is_changed = True
        return self

    def set_contents(self, contents: bytes | str) -> CustomFieldFile:
        if isinstance(contents, str):
            contents = contents.encode()
        if contents != self.contents:
            self.contents = contents
            self.raw_value = base64.b64encode(contents).decode()
            self.is_changed = True
        return self

    def set_contents_from_file(self, path: str | Path, file_name: str | None = None) -> CustomFieldFile:
        """Load contents from ``path``; the file name defaults to its base name."""
        path = Path(path)
        self.set_contents(path.read_bytes())
        self.set_file_name(file_name or path.name)
        # an explicit upload is always resent
        self.is_changed = True
        return self

    @property
    def value(self) -> tuple[str | None, bytes | None]:
        return self.file_name, self.contents

    def set_value(self, value: Any) -> CustomFieldFile:
        return self.set_contents_from_file(value)

    def summary(self) -> str:
        size = len(self.contents) if self.contents is not None else 0
        return f"{self.title} = {self.file_name} ({size} bytes)"
