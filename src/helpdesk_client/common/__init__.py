"""Helpers shared by domain objects: coercion, field metadata, result sets, wire building."""

from .coercion import (
    assure_array,
    assure_bool,
    assure_constant,
    assure_int,
    assure_object,
    assure_positive_int,
    assure_string,
    constant_values,
)
from .fields import ApiField, api_field, filterable
from .lazy import Lazy
from .result_set import ResultSet, SortDirection
from .wire import FILES_KEY, FilePayload

__all__ = [
    "assure_array",
    "assure_bool",
    "assure_constant",
    "assure_int",
    "assure_object",
    "assure_positive_int",
    "assure_string",
    "constant_values",
    "ApiField",
    "api_field",
    "filterable",
    "Lazy",
    "ResultSet",
    "SortDirection",
    "FILES_KEY",
    "FilePayload",
]
