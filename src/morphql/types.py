"""Request types and payload helpers shared by both transports."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Any

from morphql.exceptions import InvalidInputError


@dataclass(frozen=True)
class TransformRequest:
    """A single transformation: one query source plus an optional payload.

    At least one of ``query`` and ``query_file`` is set; when both are, the
    file wins. ``data`` may be a JSON string, any JSON-serializable value, or
    ``None`` (an empty object).
    """

    query: str | None = None
    query_file: Path | None = None
    data: Any = None

    def __post_init__(self) -> None:
        if self.query is None and self.query_file is None:
            raise InvalidInputError("one of 'query' or 'query_file' must be provided")
        if self.query is not None and not isinstance(self.query, str):
            raise InvalidInputError(
                f"query must be a string, got {type(self.query).__name__}"
            )

    # --- Ergonomic constructors ---

    @classmethod
    def from_query(cls, query: str, data: Any = None) -> TransformRequest:
        """Create a request for an inline query string."""
        return cls(query=query, data=data)

    @classmethod
    def from_file(
        cls, query_file: str | os.PathLike[str], data: Any = None
    ) -> TransformRequest:
        """Create a request for a query file, validating it first.

        Raises:
            InvalidInputError: If the file is missing or unreadable.
        """
        return cls(query_file=validate_query_file(query_file), data=data)

    @classmethod
    def from_options(
        cls, options: Mapping[str, Any]
    ) -> tuple[TransformRequest, dict[str, Any]]:
        """Split an options record into a request and the remaining call options.

        ``query`` is required and ``data`` is optional; every other key is
        returned as a call option for configuration resolution.

        Raises:
            InvalidInputError: If ``query`` is missing.
        """
        query = require_key(options, "query")
        call_options = {
            key: value for key, value in options.items() if key not in ("query", "data")
        }
        return cls(query=query, data=options.get("data")), call_options

    def read_query(self) -> str:
        """Return the query text, reading and stripping the file if needed."""
        if self.query_file is None:
            return self.query
        try:
            return self.query_file.read_text(encoding="utf-8").strip()
        except OSError as e:
            raise InvalidInputError(
                f"query file not readable: {self.query_file}"
            ) from e


def require_key(options: Mapping[str, Any], key: str) -> Any:
    """Return ``options[key]``, raising if it is missing or ``None``."""
    if options.get(key) is None:
        raise InvalidInputError(f'missing required option "{key}"')
    return options[key]


def validate_query_file(path: str | os.PathLike[str]) -> Path:
    """Check that a query file exists and is readable.

    Returns:
        The path as a ``Path``.

    Raises:
        InvalidInputError: If the file is missing, not a file, or unreadable.
    """
    query_file = Path(path)

    if not query_file.exists():
        raise InvalidInputError(f"query file not found: {query_file}")
    if not query_file.is_file():
        raise InvalidInputError(f"query file is not a file: {query_file}")
    if not os.access(query_file, os.R_OK):
        raise InvalidInputError(f"query file not readable: {query_file}")

    return query_file


def normalize_data(data: Any) -> str:
    """Render a payload as the JSON text passed to the CLI.

    ``None`` becomes ``"{}"``; strings are passed through untouched since
    they are assumed to already be encoded.
    """
    if data is None:
        return "{}"
    if isinstance(data, str):
        return data
    try:
        return json.dumps(data, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"data is not JSON serializable: {e}") from e


def decode_payload(data: Any) -> Any:
    """Return the structured value sent as ``data`` in a server request.

    A string holding valid JSON is decoded so the wire payload never carries
    double-encoded text; other strings pass through unchanged.
    """
    if data is None:
        return {}
    if isinstance(data, str):
        try:
            decoded = json.loads(data)
        except ValueError:
            return data
        # A literal "null" stays as text
        return data if decoded is None else decoded
    return data
