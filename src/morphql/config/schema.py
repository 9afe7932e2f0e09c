"""Configuration schema and validation using Pydantic.

This module defines the settings schema of record: field names, hard-coded
defaults, descriptions and value constraints. Resolution reads the defaults
from here but never instantiates the schema, so resolving a configuration
cannot fail; validation is an explicit, separate step.
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from morphql.constants import (
    DEFAULT_CLI_PATH,
    DEFAULT_NODE_PATH,
    DEFAULT_SERVER_URL,
    DEFAULT_TIMEOUT,
    ENV_PREFIX,
    Provider,
    Runtime,
)


class MorphQLSettings(BaseSettings):
    """Pydantic settings schema for MorphQL configuration.

    Reads MORPHQL_* environment variables when instantiated without
    arguments. Empty variables are ignored, matching the resolver.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=None,
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
    )

    # --- Transport selection ---

    provider: Provider = Field(
        default=Provider.CLI,
        description="Transport used to reach the engine (cli or server)",
    )

    runtime: Runtime = Field(
        default=Runtime.NODE,
        description="Local runtime for the cli provider (node or qjs)",
    )

    # --- CLI provider ---

    cli_path: str = Field(
        default=DEFAULT_CLI_PATH,
        description="Path to the morphql executable",
        min_length=1,
    )

    node_path: str = Field(
        default=DEFAULT_NODE_PATH,
        description="Node.js interpreter used for the bundled entry point",
        min_length=1,
    )

    qjs_path: str | None = Field(
        default=None,
        description="QuickJS interpreter; defaults to the bundled binary, then 'qjs'",
    )

    cache_dir: str | None = Field(
        default=None,
        description="Compiled query cache; defaults to <tempdir>/morphql",
    )

    # --- Server provider ---

    server_url: str = Field(
        default=DEFAULT_SERVER_URL,
        description="Base URL of the MorphQL server",
    )

    api_key: str | None = Field(
        default=None,
        description="Value sent in the X-API-KEY header",
    )

    timeout: float = Field(
        default=DEFAULT_TIMEOUT,
        description="Request timeout in seconds (0 disables it)",
        ge=0,
    )

    # --- Validation Rules ---

    @field_validator("provider", "runtime", mode="before")
    @classmethod
    def normalize_choice(cls, v: Any) -> Any:
        """Accept enum values case-insensitively."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("server_url")
    @classmethod
    def validate_server_url(cls, v: str) -> str:
        """Require an http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"server_url must start with http:// or https://, got {v!r}")
        return v


def default_values() -> dict[str, Any]:
    """Return the hard-coded default record as a plain dictionary."""
    return {
        name: field.default for name, field in MorphQLSettings.model_fields.items()
    }


def env_var_for(field: str) -> str:
    """Return the environment variable backing a configuration field."""
    return f"{ENV_PREFIX}{field.upper()}"
