"""REST transport - signed HTTP calls to the helpdesk API."""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import secrets
from collections.abc import Mapping, Sequence
from typing import Any
from urllib.parse import quote

import httpx

from ..config import ClientConfig
from ..errors import NotFoundError, TransportError
from ..common.wire import FilePayload
from .base import Transport
from .decoder import decode_xml

logger = logging.getLogger(__name__)


class RestTransport(Transport):
    """
    Transport for the helpdesk REST API.

    The controller and path parameters go into the ``e`` query parameter,
    e.g. ``index.php?e=/Base/Department/5``. Every request is signed with
    the API key, a random salt and an HMAC-SHA256 signature of the salt.
    """

    def __init__(self, config: ClientConfig, client: httpx.Client | None = None):
        self.config = config
        self._client = client

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(timeout=self.config.timeout)
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def sign(self) -> dict[str, str]:
        """Authentication parameters for one request."""
        if not self.config.api_key or not self.config.secret_key:
            raise TransportError("api_key and secret_key are required to sign requests")
        salt = secrets.token_hex(16)
        digest = hmac.new(
            self.config.secret_key.encode(), salt.encode(), hashlib.sha256
        ).digest()
        return {
            "apikey": self.config.api_key,
            "salt": salt,
            "signature": base64.b64encode(digest).decode(),
        }

    @staticmethod
    def build_path(controller: str, parameters: Sequence[Any] = ()) -> str:
        path = controller.rstrip("/")
        for parameter in parameters:
            path += "/" + quote(str(parameter), safe="")
        return path

    def get(self, controller: str, parameters: Sequence[Any] = ()) -> dict[str, Any]:
        return self._request("GET", controller, parameters)

    def post(
        self,
        controller: str,
        parameters: Sequence[Any] = (),
        data: Mapping[str, Any] | None = None,
        files: Mapping[str, FilePayload] | None = None,
    ) -> dict[str, Any]:
        return self._request("POST", controller, parameters, data, files)

    def put(
        self,
        controller: str,
        parameters: Sequence[Any] = (),
        data: Mapping[str, Any] | None = None,
        files: Mapping[str, FilePayload] | None = None,
    ) -> dict[str, Any]:
        return self._request("PUT", controller, parameters, data, files)

    def delete(self, controller: str, parameters: Sequence[Any] = ()) -> dict[str, Any]:
        return self._request("DELETE", controller, parameters)

    def _request(
        self,
        method: str,
        controller: str,
        parameters: Sequence[Any],
        data: Mapping[str, Any] | None = None,
        files: Mapping[str, FilePayload] | None = None,
    ) -> dict[str, Any]:
        path = self.build_path(controller, parameters)
        query: dict[str, Any] = {"e": path}
        signature = self.sign()

        request_kwargs: dict[str, Any] = {}
        if method in ("GET", "DELETE"):
            query.update(signature)
        else:
            form = {k: self._form_value(v) for k, v in (data or {}).items() if v is not None}
            form.update(signature)
            request_kwargs["data"] = form
            if files:
                request_kwargs["files"] = {
                    name: (payload.file_name, payload.contents)
                    for name, payload in files.items()
                }

        logger.debug(f"{method} {path}")
        if self.config.debug and request_kwargs.get("data"):
            logger.debug(f"Request fields: {sorted(request_kwargs['data'])}")

        try:
            response = self.client.request(
                method, self.config.base_url, params=query, **request_kwargs
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e

        if self.config.debug:
            logger.debug(f"Response {response.status_code}: {response.text}")

        if response.status_code == 404:
            raise NotFoundError(f"Resource not found: {path}", status_code=404)
        if response.status_code >= 400:
            raise TransportError(
                f"{method} {path} returned {response.status_code}: {response.text.strip()}",
                status_code=response.status_code,
            )

        return decode_xml(response.content)

    @staticmethod
    def _form_value(value: Any) -> Any:
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        return str(value)
