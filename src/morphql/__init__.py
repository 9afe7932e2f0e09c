"""MorphQL client: run MorphQL transformations through the CLI or a server."""

import importlib.metadata
import logging

from morphql.client import MorphQL, dispatch, execute, execute_file, execute_options
from morphql.config import FrozenConfig, ResolvedConfig, resolve_config
from morphql.constants import Provider, Runtime
from morphql.exceptions import (
    ExecutionError,
    InvalidInputError,
    MorphQLError,
    NetworkError,
    ProcessStartError,
    ProcessTimeoutError,
    ResourceMissingError,
    ServerError,
)
from morphql.types import TransformRequest, decode_payload, normalize_data

try:
    __version__ = importlib.metadata.version("morphql")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Entry points
    "execute",
    "execute_file",
    "execute_options",
    "dispatch",
    "MorphQL",
    # Configuration
    "resolve_config",
    "ResolvedConfig",
    "FrozenConfig",
    "Provider",
    "Runtime",
    # Requests
    "TransformRequest",
    "normalize_data",
    "decode_payload",
    # Exceptions
    "MorphQLError",
    "InvalidInputError",
    "ProcessStartError",
    "ExecutionError",
    "ProcessTimeoutError",
    "ResourceMissingError",
    "NetworkError",
    "ServerError",
]
