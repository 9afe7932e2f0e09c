"""Transports that carry a request to the engine: local CLI or remote server."""

from .base import Transport, choice, coerce_timeout
from .cli import CliTransport, qjs_binary_name, resolve_cache_dir, run_cli
from .server import (
    HTTPBackend,
    HTTPResponse,
    HttpxBackend,
    ServerTransport,
    parse_envelope,
    run_server,
)

__all__ = [  # noqa: RUF022
    "Transport",
    "CliTransport",
    "ServerTransport",
    "HTTPBackend",
    "HTTPResponse",
    "HttpxBackend",
    "run_cli",
    "run_server",
    "parse_envelope",
    "coerce_timeout",
    "choice",
    "qjs_binary_name",
    "resolve_cache_dir",
]
