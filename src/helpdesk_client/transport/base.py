"""Base transport interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..common.wire import FilePayload


class Transport(ABC):
    """
    Carries requests for domain objects to the helpdesk API.

    Every call takes the resource controller (e.g. ``/Base/Department``) and
    the path parameters appended to it, and returns the decoded response:
    a mapping keyed by the wire tag name, or an empty mapping.
    """

    @abstractmethod
    def get(self, controller: str, parameters: Sequence[Any] = ()) -> dict[str, Any]:
        """Fetch resources."""
        pass

    @abstractmethod
    def post(
        self,
        controller: str,
        parameters: Sequence[Any] = (),
        data: Mapping[str, Any] | None = None,
        files: Mapping[str, FilePayload] | None = None,
    ) -> dict[str, Any]:
        """Create a resource."""
        pass

    @abstractmethod
    def put(
        self,
        controller: str,
        parameters: Sequence[Any] = (),
        data: Mapping[str, Any] | None = None,
        files: Mapping[str, FilePayload] | None = None,
    ) -> dict[str, Any]:
        """Update a resource."""
        pass

    @abstractmethod
    def delete(self, controller: str, parameters: Sequence[Any] = ()) -> dict[str, Any]:
        """Delete a resource."""
        pass

    def close(self) -> None:
        """Release any held connections."""
        pass
