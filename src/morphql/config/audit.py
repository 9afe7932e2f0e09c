"""Configuration audit and source tracking.

This module records where each configuration value originated during
resolution and renders that record with secrets redacted.
"""

from collections.abc import Mapping
from typing import Any

from .schema import env_var_for
from .types import FIELD_ORDER, SENSITIVE_FIELDS, ConfigOrigin, SourceMap


class SourceTracker:
    """Tracks the origin of configuration values during resolution."""

    def __init__(self) -> None:
        self._origins: dict[str, ConfigOrigin] = {}

    def set_origin(self, field: str, origin: ConfigOrigin) -> None:
        """Record the origin of a configuration field.

        Args:
            field: The configuration field name
            origin: The tier the value came from
        """
        self._origins[field] = origin

    def get_source_map(self) -> SourceMap:
        """Get the current source map.

        Returns:
            A copy of the field-to-origin mapping.
        """
        return dict(self._origins)


def summarize_origins(source_map: SourceMap) -> dict[str, int]:
    """Count fields per origin tier, e.g. ``{"env": 2, "default": 7}``."""
    counts: dict[str, int] = {}

    for origin in source_map.values():
        counts[origin] = counts.get(origin, 0) + 1

    return counts


def generate_redacted_audit(config_dict: Mapping[str, Any], source_map: SourceMap) -> str:
    """Generate a human-readable report of field origins.

    Sensitive values are never shown; environment-sourced fields name the
    variable they were read from.

    Args:
        config_dict: The configuration values
        source_map: The origin of each field

    Returns:
        One ``field: origin:value`` line per known field.
    """
    lines = []

    for field in FIELD_ORDER:
        if field not in source_map:
            continue

        origin = source_map[field]
        value = config_dict.get(field, "<missing>")

        if field in SENSITIVE_FIELDS:
            if value is None:
                value_display = f"{origin}:None"
            elif origin == "env":
                value_display = f"env:{env_var_for(field)}=<redacted>"
            else:
                value_display = f"{origin}:<redacted>"
        elif origin == "env":
            value_display = f"env:{env_var_for(field)}={_plain(value)}"
        else:
            value_display = f"{origin}:{_plain(value)}"

        lines.append(f"{field}: {value_display}")

    return "\n".join(lines)


def _plain(value: Any) -> Any:
    # Show enum members by value
    return getattr(value, "value", value)
