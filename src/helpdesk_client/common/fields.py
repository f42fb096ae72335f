"""
Field declarations for domain objects.

Wire-facing attributes of a domain object are dataclass fields created with
``api_field``. The attached ``ApiField`` metadata drives required-field
validation and tells ``ResultSet`` which ``filter_by_*`` and ``order_by_*``
methods the type supports.
"""

from __future__ import annotations

import dataclasses
import functools
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

API_FIELD = "helpdesk_api_field"
_FILTERABLE = "__helpdesk_filterable__"


@dataclass(frozen=True, slots=True)
class ApiField:
    """Metadata for one wire-facing attribute."""
    name: str | None = None             # wire name when it differs from the attribute
    required: bool = False
    required_create: bool = False
    required_update: bool = False
    pattern: str | None = None          # regex the string value must match
    filter: bool = True
    order: bool = True

    def is_required(self, create: bool) -> bool:
        if self.required:
            return True
        return self.required_create if create else self.required_update


def api_field(
    default: Any = None,
    *,
    default_factory: Callable[[], Any] | None = None,
    name: str | None = None,
    required: bool = False,
    required_create: bool = False,
    required_update: bool = False,
    pattern: str | None = None,
    filter: bool = True,
    order: bool = True,
    repr: bool = True,
) -> Any:
    """Declare a wire-facing dataclass field."""
    meta = ApiField(
        name=name,
        required=required,
        required_create=required_create,
        required_update=required_update,
        pattern=pattern,
        filter=filter,
        order=order,
    )
    if default_factory is not None:
        return dataclasses.field(
            default_factory=default_factory, repr=repr, metadata={API_FIELD: meta}
        )
    return dataclasses.field(default=default, repr=repr, metadata={API_FIELD: meta})


def filterable(name: str | None = None, *, filter: bool = True, order: bool = True):
    """Mark a method or property as a computed filter/order key."""
    def decorator(func):
        target = func.fget if isinstance(func, property) else func
        setattr(target, _FILTERABLE, (name, filter, order))
        return func
    return decorator


@dataclass(frozen=True, slots=True)
class FieldAccessor:
    """Reads one filterable value from an object."""
    key: str
    attribute: str
    is_method: bool = False

    def read(self, obj: Any, *args: Any) -> Any:
        value = getattr(obj, self.attribute)
        if self.is_method:
            return value(*args)
        return value


def iter_api_fields(cls_or_obj: Any):
    """Yield (dataclass field, ApiField) pairs for every declared wire field."""
    if not dataclasses.is_dataclass(cls_or_obj):
        return
    for f in dataclasses.fields(cls_or_obj):
        meta = f.metadata.get(API_FIELD)
        if meta is not None:
            yield f, meta


def _strip_prefix(name: str) -> str:
    return name[4:] if name.startswith("get_") else name


@functools.cache
def _accessors(cls: type) -> tuple[dict[str, FieldAccessor], dict[str, FieldAccessor]]:
    filters: dict[str, FieldAccessor] = {}
    orders: dict[str, FieldAccessor] = {}

    for f, meta in iter_api_fields(cls):
        if f.name.startswith("_"):
            continue
        accessor = FieldAccessor(key=f.name, attribute=f.name)
        if meta.filter:
            filters[f.name] = accessor
        if meta.order:
            orders[f.name] = accessor

    for klass in reversed(cls.__mro__):
        for attr_name, attr in vars(klass).items():
            target = attr.fget if isinstance(attr, property) else attr
            marker = getattr(target, _FILTERABLE, None)
            if marker is None:
                continue
            name, use_filter, use_order = marker
            key = name or _strip_prefix(attr_name)
            accessor = FieldAccessor(
                key=key, attribute=attr_name, is_method=not isinstance(attr, property)
            )
            if use_filter:
                filters[key] = accessor
            if use_order:
                orders[key] = accessor

    return filters, orders


def filter_accessors(cls: type) -> dict[str, FieldAccessor]:
    return _accessors(cls)[0]


def order_accessors(cls: type) -> dict[str, FieldAccessor]:
    return _accessors(cls)[1]


def available_filter_methods(cls: type) -> list[str]:
    """Names of the ``filter_by_*`` methods a ResultSet of ``cls`` supports."""
    return sorted(f"filter_by_{key}" for key in filter_accessors(cls))


def available_order_methods(cls: type) -> list[str]:
    """Names of the ``order_by_*`` methods a ResultSet of ``cls`` supports."""
    return sorted(f"order_by_{key}" for key in order_accessors(cls))
