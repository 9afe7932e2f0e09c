"""Public API for the configuration system.

This module provides the main entry point, ``resolve_config()``, plus small
helpers for inspecting the environment tier.
"""

from collections.abc import Mapping
from typing import Any

from .resolver import ConfigResolver
from .types import ResolvedConfig

# ruff: noqa: T201


def resolve_config(
    call_options: Mapping[str, Any] | None = None,
    instance_defaults: Mapping[str, Any] | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all tiers with proper precedence.

    Precedence, evaluated independently for every field:
    call options > instance defaults > MORPHQL_* environment > defaults

    Args:
        call_options: Per-call options (highest precedence). Only known
            configuration fields are used; ``None`` values are ignored.
        instance_defaults: Options preset on a ``MorphQL`` instance.

    Returns:
        ResolvedConfig with merged values and source tracking for audit.

    Example:
        # Defaults and environment only
        config = resolve_config()

        # With call-level overrides
        config = resolve_config({"provider": "server", "timeout": 5})
    """
    # A fresh resolver per call picks up the current os.environ
    return ConfigResolver().resolve(call_options, instance_defaults)


def check_environment() -> dict[str, str]:
    """Return the MORPHQL_* variables currently set, API key redacted.

    Example:
        for var, value in check_environment().items():
            print(f"{var}: {value}")
    """
    return ConfigResolver().env_loader.get_env_summary()


def print_config_audit(config: ResolvedConfig) -> None:
    """Print where each configuration value came from.

    Example:
        print_config_audit(resolve_config())
        # provider: default:cli
        # server_url: env:MORPHQL_SERVER_URL=http://engine:3000
        # ...
    """
    print(config.audit())
