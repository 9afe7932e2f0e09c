"""Configuration management for the MorphQL client.

Key components:
- resolve_config(): four-tier resolution (call > instance > env > defaults)
- ResolvedConfig: resolved values with the origin of each field
- FrozenConfig: immutable configuration handed to the transports
- MorphQLSettings: pydantic schema holding defaults and validation rules
"""

from .api import check_environment, print_config_audit, resolve_config
from .audit import SourceTracker, generate_redacted_audit, summarize_origins
from .env_loader import EnvironmentConfigLoader
from .resolver import ConfigResolver, defaults_stage, mapping_stage
from .schema import MorphQLSettings, default_values, env_var_for
from .types import (
    FIELD_ORDER,
    UNSET,
    ConfigOrigin,
    FrozenConfig,
    ResolvedConfig,
    SourceMap,
)
from .validation import (
    config_warnings,
    validate_config_dict,
    validate_environment,
    validate_resolved_config,
)

__all__ = [  # noqa: RUF022
    # Main API
    "resolve_config",
    "check_environment",
    "print_config_audit",
    # Core types
    "ResolvedConfig",
    "FrozenConfig",
    "SourceMap",
    "ConfigOrigin",
    "FIELD_ORDER",
    "UNSET",
    # Advanced usage
    "ConfigResolver",
    "EnvironmentConfigLoader",
    "MorphQLSettings",
    "SourceTracker",
    "mapping_stage",
    "defaults_stage",
    "default_values",
    "env_var_for",
    "generate_redacted_audit",
    "summarize_origins",
    # Validation
    "validate_config_dict",
    "validate_resolved_config",
    "validate_environment",
    "config_warnings",
]
