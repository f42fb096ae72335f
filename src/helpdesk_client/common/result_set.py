"""
Client-side querying over fetched objects.

Usage:
    tickets = Ticket.get_all(department)
    open_tickets = (
        tickets
        .filter_by_subject(["~", "/printer/i"])
        .filter_by_owner_staff_id(["!=", None])
        .order_by_last_activity("DESC")
    )
    for ticket in open_tickets.get_page(1, 20):
        print(ticket)
"""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Callable, Iterable, Iterator
from enum import Enum
from typing import Any, Generic, TypeVar

from .fields import FieldAccessor, filter_accessors, order_accessors

logger = logging.getLogger(__name__)

T = TypeVar("T")

FILTER_PREFIX = "filter_by_"
ORDER_PREFIX = "order_by_"

OPERATORS = ("!=", "~", "<", "<=", ">", ">=")

_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}
_CLOSING_DELIMITERS = {"(": ")", "[": "]", "{": "}", "<": ">"}


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _equals(value: Any, literal: Any) -> bool:
    if value == literal:
        return True
    if value is None or literal is None:
        return False
    if isinstance(value, str) and isinstance(literal, str):
        return False
    left, right = _as_number(value), _as_number(literal)
    return left is not None and right is not None and left == right


def compile_regex(expression: str) -> re.Pattern:
    """Compile a delimited ``/pattern/flags`` expression.

    Expressions without a recognizable delimiter are used as-is.
    """
    if len(expression) > 1 and not expression[0].isalnum() and expression[0] not in "\\ ":
        closing = _CLOSING_DELIMITERS.get(expression[0], expression[0])
        end = expression.rfind(closing)
        if end > 0:
            flags = 0
            for flag in expression[end + 1:]:
                flags |= _REGEX_FLAGS.get(flag, 0)
            return re.compile(expression[1:end], flags)
    return re.compile(expression)


class _Predicate:
    """A parsed filter predicate."""

    def __init__(self, predicate: Any):
        self.negate = False
        self.operator = "=="
        operand = predicate

        if (
            isinstance(predicate, (list, tuple))
            and len(predicate) == 2
            and isinstance(predicate[0], str)
            and predicate[0] in OPERATORS
        ):
            self.operator, operand = predicate
            if self.operator == "!=":
                self.negate = True
                self.operator = "=="

        if self.operator == "==" and isinstance(operand, (list, tuple, set, frozenset)):
            self.operator = "in"
            operand = list(operand)

        self.operand = operand
        self.regex = compile_regex(str(operand)) if self.operator == "~" else None

    def _match_one(self, value: Any) -> bool:
        if self.operator == "==":
            return _equals(value, self.operand)
        if self.operator == "in":
            return any(_equals(value, literal) for literal in self.operand)
        if self.operator == "~":
            return value is not None and self.regex.search(str(value)) is not None

        left, right = _as_number(value), _as_number(self.operand)
        if left is None or right is None:
            return False
        if self.operator == "<":
            return left < right
        if self.operator == "<=":
            return left <= right
        if self.operator == ">":
            return left > right
        return left >= right

    def matches(self, value: Any) -> bool:
        if isinstance(value, (list, tuple, set, frozenset)):
            matched = any(self._match_one(item) for item in value)
        else:
            matched = self._match_one(value)
        return not matched if self.negate else matched


def _sort_key(value: Any) -> tuple:
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, (int, float)):
        return (0, value)
    if isinstance(value, str):
        return (1, value)
    if isinstance(value, (list, tuple)):
        return (2, tuple(str(item) for item in value))
    return (3, str(value))


class ResultSet(Generic[T]):
    """
    Ordered collection of domain objects of one type.

    Filtering, ordering and paging return new result sets; the source set is
    never modified. ``filter_by_<field>`` and ``order_by_<field>`` are
    resolved against the field declarations of the object type.
    """

    def __init__(self, objects: Iterable[T] = (), object_type: type | None = None):
        self._objects: list[T] = list(objects)
        if object_type is None and self._objects:
            object_type = type(self._objects[0])
        self._object_type = object_type

    @property
    def object_type(self) -> type | None:
        return self._object_type

    def _derive(self, objects: Iterable[T]) -> ResultSet[T]:
        return ResultSet(objects, object_type=self._object_type)

    def _accessor(self, kind: str, key: str) -> FieldAccessor:
        if self._object_type is None:
            raise AttributeError(f"Cannot {kind} by '{key}' on an untyped empty result set")
        lookup = filter_accessors if kind == "filter" else order_accessors
        accessor = lookup(self._object_type).get(key)
        if accessor is None:
            prefix = FILTER_PREFIX if kind == "filter" else ORDER_PREFIX
            raise AttributeError(
                f"{self._object_type.__name__} has no method {prefix}{key}"
            )
        return accessor

    def __getattr__(self, name: str) -> Callable[..., ResultSet[T]]:
        if name.startswith(FILTER_PREFIX):
            return functools.partial(self.filter_by, name[len(FILTER_PREFIX):])
        if name.startswith(ORDER_PREFIX):
            return functools.partial(self.order_by, name[len(ORDER_PREFIX):])
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def filter_by(self, key: str, predicate: Any, *args: Any) -> ResultSet[T]:
        """
        Keep objects whose ``key`` value satisfies ``predicate``.

        Args:
            key: Field name (see ``available_filter_methods``)
            predicate: Literal, list of literals, or ``[operator, operand]``
                with operator one of ``!=``, ``~``, ``<``, ``<=``, ``>``, ``>=``
            *args: Passed to computed accessors

        Returns:
            New result set with the matching objects in their original order
        """
        accessor = self._accessor("filter", key)
        parsed = _Predicate(predicate)
        return self._derive(
            obj for obj in self._objects if parsed.matches(accessor.read(obj, *args))
        )

    def order_by(
        self, key: str, direction: SortDirection | str = SortDirection.ASC, *args: Any
    ) -> ResultSet[T]:
        """Stable sort by ``key``; objects without a value go last."""
        accessor = self._accessor("order", key)
        descending = str(getattr(direction, "value", direction)).upper() == SortDirection.DESC.value

        present: list[tuple[tuple, T]] = []
        missing: list[T] = []
        for obj in self._objects:
            value = accessor.read(obj, *args)
            if value is None:
                missing.append(obj)
            else:
                present.append((_sort_key(value), obj))

        present.sort(key=lambda pair: pair[0], reverse=descending)
        return self._derive([obj for _, obj in present] + missing)

    def filter(self, func: Callable[[T], bool]) -> ResultSet[T]:
        return self._derive(obj for obj in self._objects if func(obj))

    def get_page(self, page: int, page_size: int) -> ResultSet[T]:
        """Page ``page`` (1-indexed) of ``page_size`` objects; empty when out of range."""
        if page < 1 or page_size < 1:
            return self._derive(())
        start = (page - 1) * page_size
        return self._derive(self._objects[start:start + page_size])

    def first(self) -> T | None:
        return self._objects[0] if self._objects else None

    def collect_id(self) -> list[Any]:
        ids: list[Any] = []
        for obj in self._objects:
            object_id = obj.get_id()
            if isinstance(object_id, (list, tuple)):
                ids.extend(object_id)
            else:
                ids.append(object_id)
        return ids

    def delete_all(self) -> None:
        """
        Delete every object in order.

        Stops at the first failure and re-raises it. Objects deleted before
        the failure stay deleted.
        """
        logger.debug(f"Deleting {len(self._objects)} objects")
        for obj in list(self._objects):
            obj.delete()

    def available_filter_methods(self) -> list[str]:
        if self._object_type is None:
            return []
        return self._object_type.available_filter_methods()

    def available_order_methods(self) -> list[str]:
        if self._object_type is None:
            return []
        return self._object_type.available_order_methods()

    def __iter__(self) -> Iterator[T]:
        return iter(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._derive(self._objects[index])
        return self._objects[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResultSet):
            return self._objects == other._objects
        return NotImplemented

    def __str__(self) -> str:
        return "\n".join(str(obj) for obj in self._objects)

    def __repr__(self) -> str:
        name = self._object_type.__name__ if self._object_type else "?"
        return f"ResultSet[{name}]({len(self._objects)} objects)"
