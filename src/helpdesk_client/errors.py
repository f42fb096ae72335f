"""Exceptions raised by the helpdesk client."""

from __future__ import annotations


class HelpdeskError(Exception):
    """Base exception for helpdesk client errors."""
    pass


class ValidationError(HelpdeskError):
    """Required field missing or failing its pattern when building wire data."""

    def __init__(
        self,
        message: str,
        field_name: str,
        resource_type: str | None = None,
        operation: str | None = None,
    ):
        super().__init__(message)
        self.field_name = field_name
        self.resource_type = resource_type
        self.operation = operation


class UnsupportedOperationError(HelpdeskError):
    """Operation forbidden for the resource type or its current state."""

    def __init__(
        self,
        message: str,
        resource_type: str | None = None,
        operation: str | None = None,
    ):
        super().__init__(message)
        self.resource_type = resource_type
        self.operation = operation


class DataFormatError(HelpdeskError):
    """Wire data could not be interpreted into the expected shape."""

    def __init__(self, message: str, resource_type: str | None = None):
        super().__init__(message)
        self.resource_type = resource_type


class TransportError(HelpdeskError):
    """Network failure, non-success status or undecodable response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(TransportError):
    """Requested resource does not exist."""
    pass
