"""Configuration validation helpers.

Resolution itself never fails. These helpers run the resolved values (or the
environment tier alone) through ``MorphQLSettings`` and report problems as
plain strings, for diagnostics and the ``--check`` command.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .schema import MorphQLSettings
from .types import FIELD_ORDER, ResolvedConfig


def validate_config_dict(values: Mapping[str, Any]) -> list[str]:
    """Validate a mapping of configuration values.

    Args:
        values: Field values; unknown keys are ignored.

    Returns:
        A list of error messages, empty when the values are valid.
    """
    known = {field: values[field] for field in FIELD_ORDER if field in values}
    try:
        MorphQLSettings(**known)
    except ValidationError as e:
        return _format_errors(e)
    return []


def validate_resolved_config(config: ResolvedConfig) -> list[str]:
    """Validate every field of a resolved configuration."""
    return validate_config_dict(config._asdict())


def validate_environment() -> list[str]:
    """Validate the MORPHQL_* environment variables on their own."""
    try:
        MorphQLSettings()
    except ValidationError as e:
        return _format_errors(e)
    return []


def config_warnings(config: ResolvedConfig) -> list[str]:
    """Return non-fatal observations about a resolved configuration."""
    warnings = []
    provider = getattr(config.provider, "value", config.provider)
    is_server = str(provider).lower() == "server"

    if is_server and config.api_key and str(config.server_url).startswith("http://"):
        warnings.append("API key is sent over plain HTTP")

    if is_server and config.origin.get("runtime") != "default":
        warnings.append("runtime is ignored by the server provider")

    if not is_server and config.origin.get("api_key") not in (None, "default"):
        warnings.append("api_key is ignored by the cli provider")

    return warnings


def _format_errors(error: ValidationError) -> list[str]:
    messages = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "config"
        messages.append(f"{location}: {item['msg']}")
    return messages
