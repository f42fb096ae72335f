"""
Helpdesk Client - object mapper for the helpdesk REST API

Domain objects (departments, users, staff, news, knowledgebase,
troubleshooter, tickets) mapped onto signed REST calls, with:
- Client-side filtering, ordering and paging of fetched collections
- Typed custom fields resolved against their server-side definitions
- Comments and custom field groups as reusable object capabilities
"""

from .config import ClientConfig, get_config, set_config
from .errors import (
    DataFormatError,
    HelpdeskError,
    NotFoundError,
    TransportError,
    UnsupportedOperationError,
    ValidationError,
)
from .transport import RestTransport, Transport, get_transport, set_transport

__version__ = "0.1.0"

__all__ = [
    "ClientConfig",
    "get_config",
    "set_config",
    "HelpdeskError",
    "ValidationError",
    "UnsupportedOperationError",
    "DataFormatError",
    "TransportError",
    "NotFoundError",
    "Transport",
    "RestTransport",
    "get_transport",
    "set_transport",
]
