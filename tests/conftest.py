"""Shared test fixtures for helpdesk client tests.

Domain objects talk to the process-wide default transport. Tests swap in a
RecordingTransport that replays queued responses and records every call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

import helpdesk_client.config as config_module
from helpdesk_client.config import ClientConfig, set_config
from helpdesk_client.transport import Transport, decode_xml, set_transport


@dataclass
class Call:
    method: str
    controller: str
    parameters: list[Any]
    data: dict[str, Any] | None = None
    files: dict[str, Any] | None = None


@dataclass
class RecordingTransport(Transport):
    """Transport returning queued responses in order; an exception in the queue is raised."""

    calls: list[Call] = field(default_factory=list)
    responses: list[Any] = field(default_factory=list)

    def respond(self, *responses: Any) -> RecordingTransport:
        self.responses.extend(responses)
        return self

    def respond_xml(self, *documents: str) -> RecordingTransport:
        return self.respond(*(decode_xml(document) for document in documents))

    def _handle(self, method, controller, parameters, data=None, files=None):
        self.calls.append(Call(method, controller, list(parameters), data, files))
        response = self.responses.pop(0) if self.responses else {}
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, controller, parameters=()):
        return self._handle("GET", controller, parameters)

    def post(self, controller, parameters=(), data=None, files=None):
        return self._handle("POST", controller, parameters, data, files)

    def put(self, controller, parameters=(), data=None, files=None):
        return self._handle("PUT", controller, parameters, data, files)

    def delete(self, controller, parameters=()):
        return self._handle("DELETE", controller, parameters)


# =============================================================================
# Config / Transport Fixtures
# =============================================================================

@pytest.fixture
def client_config() -> ClientConfig:
    """Deterministic client config, independent of HELPDESK_* variables."""
    return ClientConfig(
        base_url="https://helpdesk.test/api/index.php",
        api_key="test-key",
        secret_key="test-secret",
        timeout=5.0,
        debug=False,
    )


@pytest.fixture(autouse=True)
def reset_defaults(client_config):
    """Install the test config and drop the default transport around each test."""
    set_config(client_config)
    yield
    set_transport(None)
    config_module._default_config = None


@pytest.fixture
def transport() -> RecordingTransport:
    """Recording transport installed as the default."""
    recording = RecordingTransport()
    set_transport(recording)
    return recording
