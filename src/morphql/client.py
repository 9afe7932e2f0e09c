"""The primary user-facing entry points.

Two calling forms are offered:

- by fields: ``execute(query, data, **options)`` / ``execute_file(path, ...)``
- by record: ``execute_options({"query": ..., "data": ..., "provider": ...})``

``MorphQL`` instances carry preset defaults that sit between call options and
the environment in configuration precedence. Configuration is resolved fresh
for every call; nothing is retried.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
import os
from typing import Any

from morphql.config import FrozenConfig, resolve_config
from morphql.constants import Provider
from morphql.transports import CliTransport, ServerTransport, Transport, choice
from morphql.types import TransformRequest

log = logging.getLogger(__name__)

_default_cli = CliTransport()
_default_server = ServerTransport()


def dispatch(
    request: TransformRequest,
    config: FrozenConfig,
    *,
    cli: Transport | None = None,
    server: Transport | None = None,
) -> Any:
    """Route a request to the configured provider.

    The server transport is used only when ``config.provider`` is
    ``"server"``; every other value selects the CLI.

    Returns:
        A trimmed string from the CLI, or the decoded ``result`` from the server.
    """
    if choice(config.provider) == Provider.SERVER:
        log.debug("Dispatching to server provider")
        return (server or _default_server).execute(request, config)

    log.debug("Dispatching to cli provider")
    return (cli or _default_cli).execute(request, config)


def execute(query: str, data: Any = None, **options: Any) -> Any:
    """One-shot execution of an inline query.

    Args:
        query: MorphQL query string.
        data: Source data: a JSON string, a JSON-serializable value, or None.
        **options: Configuration overrides (provider, cli_path, server_url, ...).
            Unknown keys are ignored.

    Example:
        ```python
        import morphql

        morphql.execute("from json to json transform set x = a", '{"a": 1}')
        morphql.execute(query, {"a": 1}, provider="server", timeout=5)
        ```
    """
    request = TransformRequest.from_query(query, data)
    return dispatch(request, resolve_config(options).to_frozen())


def execute_file(
    query_file: str | os.PathLike[str], data: Any = None, **options: Any
) -> Any:
    """One-shot execution of a ``.morphql`` query file.

    Raises:
        InvalidInputError: If the file does not exist or is unreadable.
    """
    request = TransformRequest.from_file(query_file, data)
    return dispatch(request, resolve_config(options).to_frozen())


def execute_options(options: Mapping[str, Any]) -> Any:
    """One-shot execution from a single options record.

    ``query`` is required, ``data`` optional, and every other key is treated
    as a configuration override.

    Raises:
        InvalidInputError: If ``query`` is missing.
    """
    request, call_options = TransformRequest.from_options(options)
    return dispatch(request, resolve_config(call_options).to_frozen())


class MorphQL:
    """Reusable client with preset options.

    Example:
        ```python
        morph = MorphQL(provider="server", server_url="http://engine:3000")
        morph.run("from json to json transform set x = a", {"a": 1})
        ```
    """

    def __init__(
        self,
        defaults: Mapping[str, Any] | None = None,
        *,
        cli_transport: Transport | None = None,
        server_transport: Transport | None = None,
        **preset: Any,
    ) -> None:
        self.defaults: dict[str, Any] = {**(defaults or {}), **preset}
        self.cli_transport = cli_transport
        self.server_transport = server_transport

    def config(self, **options: Any) -> FrozenConfig:
        """Resolve the configuration a call with ``options`` would use."""
        return resolve_config(options, self.defaults).to_frozen()

    def run(self, query: str, data: Any = None, **options: Any) -> Any:
        """Execute an inline query using the preset defaults."""
        return self.run_request(TransformRequest.from_query(query, data), **options)

    def run_file(
        self, query_file: str | os.PathLike[str], data: Any = None, **options: Any
    ) -> Any:
        """Execute a query file using the preset defaults.

        Raises:
            InvalidInputError: If the file does not exist or is unreadable.
        """
        return self.run_request(TransformRequest.from_file(query_file, data), **options)

    def run_options(self, options: Mapping[str, Any]) -> Any:
        """Execute from an options record using the preset defaults."""
        request, call_options = TransformRequest.from_options(options)
        return self.run_request(request, **call_options)

    def run_request(self, request: TransformRequest, **options: Any) -> Any:
        """Execute a prepared request."""
        return dispatch(
            request,
            self.config(**options),
            cli=self.cli_transport,
            server=self.server_transport,
        )

    def __repr__(self) -> str:
        shown = {
            key: "[REDACTED]" if key == "api_key" else value
            for key, value in self.defaults.items()
        }
        return f"MorphQL({shown!r})"
