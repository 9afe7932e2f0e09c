"""Shared transport interface and helpers."""

from typing import Any, Protocol, runtime_checkable

from morphql.config import FrozenConfig
from morphql.exceptions import InvalidInputError
from morphql.types import TransformRequest


@runtime_checkable
class Transport(Protocol):
    """Anything that can run a transformation against the engine."""

    def execute(self, request: TransformRequest, config: FrozenConfig) -> Any: ...


def coerce_timeout(value: Any) -> float | None:
    """Convert a configured timeout to seconds.

    Configuration keeps whatever the tier supplied (``"30"`` from the
    environment, ``30`` from a default), so the number is produced here.
    Zero or a negative number disables the limit and yields ``None``.

    Raises:
        InvalidInputError: If the value is not numeric.
    """
    if value is None:
        return None
    try:
        seconds = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"invalid timeout: {value!r}") from e
    return seconds if seconds > 0 else None


def choice(value: object) -> str:
    """Normalize an enum-like setting (``Provider.SERVER``, ``" Server"``) to text."""
    return str(getattr(value, "value", value)).strip().lower()
