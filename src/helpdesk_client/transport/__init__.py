"""Transports carrying domain object requests to the helpdesk API."""

from __future__ import annotations

from .base import Transport
from .decoder import ATTRIBUTES_KEY, CONTENTS_KEY, decode_xml
from .rest import RestTransport


# Process-wide default transport
_default_transport: Transport | None = None


def get_transport() -> Transport:
    """Get the default transport, creating a RestTransport from the default config."""
    global _default_transport
    if _default_transport is None:
        from ..config import get_config
        _default_transport = RestTransport(get_config())
    return _default_transport


def set_transport(transport: Transport | None) -> None:
    """Replace the default transport. ``None`` drops it so it is rebuilt on next use."""
    global _default_transport
    if _default_transport is not None and _default_transport is not transport:
        _default_transport.close()
    _default_transport = transport


__all__ = [
    "Transport",
    "RestTransport",
    "decode_xml",
    "ATTRIBUTES_KEY",
    "CONTENTS_KEY",
    "get_transport",
    "set_transport",
]
