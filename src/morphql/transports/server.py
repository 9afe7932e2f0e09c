"""Server provider: POST transformations to a MorphQL REST server.

Request:  POST {server_url}/v1/execute  {"query": str, "data": <json>}
Response: {"success": bool, "result"?: <json>, "message"?: str}

The HTTP call itself goes through an ``HTTPBackend`` so the client library
can be swapped without changing how responses are interpreted.
"""

from collections.abc import Mapping
from dataclasses import dataclass
import json
import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from morphql.config import FrozenConfig
from morphql.constants import API_KEY_HEADER, EXECUTE_ENDPOINT
from morphql.exceptions import InvalidInputError, NetworkError, ServerError
from morphql.types import TransformRequest, decode_payload

from .base import coerce_timeout

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class HTTPResponse:
    """Status code and decoded body of a completed HTTP exchange"""

    status_code: int
    text: str


@runtime_checkable
class HTTPBackend(Protocol):
    """Performs a single buffered POST.

    Implementations raise ``NetworkError`` for connection failures and
    timeouts and return every completed response regardless of status.
    """

    def post(
        self,
        url: str,
        *,
        content: bytes,
        headers: Mapping[str, str],
        timeout: float | None,
    ) -> HTTPResponse: ...


class HttpxBackend:
    """``HTTPBackend`` built on httpx.

    Args:
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
    """

    def __init__(self, transport: httpx.BaseTransport | None = None) -> None:
        self.transport = transport

    def _create_http_client(self, timeout: float | None) -> httpx.Client:
        """Open a short-lived client for one POST with the given timeout."""
        return httpx.Client(timeout=timeout, transport=self.transport)

    def post(
        self,
        url: str,
        *,
        content: bytes,
        headers: Mapping[str, str],
        timeout: float | None,
    ) -> HTTPResponse:
        try:
            with self._create_http_client(timeout) as client:
                response = client.post(url, content=content, headers=dict(headers))
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"MorphQL server unreachable (timeout after {timeout}s): {url}",
                url=url,
            ) from e
        except httpx.TransportError as e:
            raise NetworkError(
                f"MorphQL server unreachable: {url}: {e}", url=url
            ) from e
        except httpx.InvalidURL as e:
            raise NetworkError(
                f"MorphQL server URL is invalid: {url}: {e}", url=url
            ) from e

        return HTTPResponse(status_code=response.status_code, text=response.text)


class ServerTransport:
    """Runs transformations against a MorphQL server."""

    def __init__(self, backend: HTTPBackend | None = None) -> None:
        self.backend = backend or HttpxBackend()

    def execute(self, request: TransformRequest, config: FrozenConfig) -> Any:
        """POST the request and return the envelope's ``result``.

        Raises:
            NetworkError: The server could not be reached in time.
            ServerError: HTTP status >= 400 or an unsuccessful envelope.
        """
        url = execute_url(config.server_url)
        payload = self.build_payload(request)
        timeout = coerce_timeout(config.timeout)

        log.debug("POST %s (timeout=%s)", url, timeout)
        response = self.backend.post(
            url,
            content=payload,
            headers=build_headers(config),
            timeout=timeout,
        )

        if response.status_code >= 400:
            raise ServerError(
                f"MorphQL server returned HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        return parse_envelope(response)

    def build_payload(self, request: TransformRequest) -> bytes:
        """Encode the JSON request body."""
        body = {"query": request.read_query(), "data": decode_payload(request.data)}
        try:
            return json.dumps(body).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"data is not JSON serializable: {e}") from e


def execute_url(server_url: str) -> str:
    return str(server_url).rstrip("/") + EXECUTE_ENDPOINT


def build_headers(config: FrozenConfig) -> dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if config.api_key is not None:
        headers[API_KEY_HEADER] = str(config.api_key)
    return headers


def parse_envelope(response: HTTPResponse) -> Any:
    """Extract ``result`` from a successful envelope.

    An unparseable body, a non-object body, or a missing/falsy ``success``
    raises ``ServerError`` with the envelope's ``message`` when it has one,
    else the raw body.
    """
    try:
        envelope = json.loads(response.text)
    except ValueError:
        envelope = None

    if not isinstance(envelope, dict) or not envelope.get("success"):
        message = response.text
        if isinstance(envelope, dict) and envelope.get("message") is not None:
            message = str(envelope["message"])
        raise ServerError(message, status_code=response.status_code, body=response.text)

    return envelope.get("result")


_default_transport = ServerTransport()


def run_server(request: TransformRequest, config: FrozenConfig) -> Any:
    """Run a request through the default server transport."""
    return _default_transport.execute(request, config)
